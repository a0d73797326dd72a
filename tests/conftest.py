"""
Test configuration: a fresh application and database per test.
"""
import pytest
from fastapi.testclient import TestClient

from vaidya.core.config import Settings
from vaidya.main import create_app

from tests.utils import (
    doctor_signup_data, other_patient_signup_data, patient_signup_data, signup
)

TEST_SECRET_KEY = "test-secret-key"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        SECRET_KEY=TEST_SECRET_KEY,
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def patient(client):
    return signup(client, patient_signup_data)


@pytest.fixture
def other_patient(client):
    return signup(client, other_patient_signup_data)


@pytest.fixture
def doctor(client):
    return signup(client, doctor_signup_data)
