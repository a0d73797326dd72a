from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from vaidya.core.config import Settings
from vaidya.main import create_app


def test_health_check(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "message": "Vaidya API is running",
        "database": "connected",
    }


def test_health_check_reports_unreachable_database(client):
    with patch("vaidya.api.routes.health.check_database", return_value=False):
        response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["database"] == "disconnected"


def test_api_info(client):
    response = client.get("/api")
    assert response.status_code == 200
    assert response.json()["endpoints"]["authentication"] == "/api/auth"


def test_process_time_header(client):
    response = client.get("/api/health")
    assert "X-Process-Time" in response.headers


def test_unknown_route_returns_json_404(client):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json()["error"] == "NotFound"


def test_store_failure_maps_to_internal_error(app, patient):
    with TestClient(app, raise_server_exceptions=False) as client:
        with patch(
            "vaidya.services.patient_service.PatientService.get_profile",
            side_effect=OperationalError("SELECT", {}, Exception("database is locked")),
        ):
            response = client.get(
                "/api/patient/profile",
                headers={"Authorization": f"Bearer {patient['token']}"},
            )
    assert response.status_code == 500
    assert response.json() == {"error": "InternalError", "message": "An unexpected error occurred"}


def test_unexpected_error_maps_to_internal_error(app, patient):
    with TestClient(app, raise_server_exceptions=False) as client:
        with patch(
            "vaidya.services.patient_service.PatientService.get_profile",
            side_effect=RuntimeError("boom"),
        ):
            response = client.get(
                "/api/patient/profile",
                headers={"Authorization": f"Bearer {patient['token']}"},
            )
    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == {"error": "InternalError", "message": "An unexpected error occurred"}
    assert "boom" not in response.text


def test_serves_frontend_directory(tmp_path):
    frontend = tmp_path / "frontend"
    frontend.mkdir()
    (frontend / "index.html").write_text("<h1>Vaidya</h1>")

    settings = Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'frontend.db'}",
        FRONTEND_DIR=str(frontend),
        LOG_LEVEL="WARNING",
    )
    with TestClient(create_app(settings)) as client:
        page = client.get("/")
        assert page.status_code == 200
        assert "Vaidya" in page.text
        assert client.get("/api/health").status_code == 200
