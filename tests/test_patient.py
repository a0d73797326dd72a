from datetime import date, datetime, timedelta

import pytest

from vaidya.core.security import UserRole, create_access_token

from tests.utils import auth_headers, future_date

PROTECTED_ROUTES = [
    ("get", "/api/patient/profile"),
    ("get", "/api/patient/vitals/latest"),
    ("get", "/api/patient/vitals"),
    ("get", "/api/patient/appointments"),
    ("post", "/api/patient/appointments"),
    ("get", "/api/patient/health-records"),
    ("get", "/api/patient/prescriptions"),
]


def book(client, patient, doctor, **overrides):
    body = {
        "doctorId": doctor["userId"],
        "date": future_date(),
        "time": "10:30",
        "type": "consultation",
    }
    body.update(overrides)
    return client.post("/api/patient/appointments", json=body, headers=auth_headers(patient["token"]))


class TestAuthGate:

    @pytest.mark.parametrize("method,path", PROTECTED_ROUTES)
    def test_missing_token(self, client, method, path):
        response = getattr(client, method)(path)
        assert response.status_code == 401

    @pytest.mark.parametrize("method,path", PROTECTED_ROUTES)
    def test_malformed_token(self, client, method, path):
        response = getattr(client, method)(path, headers=auth_headers("not.a.token"))
        assert response.status_code == 401

    @pytest.mark.parametrize("method,path", PROTECTED_ROUTES)
    def test_expired_token(self, client, settings, patient, method, path):
        expired = create_access_token(
            patient["userId"], UserRole.PATIENT, settings,
            now=datetime.utcnow() - timedelta(days=8),
        )
        response = getattr(client, method)(path, headers=auth_headers(expired))
        assert response.status_code == 401

    def test_non_bearer_scheme(self, client, patient):
        response = client.get(
            "/api/patient/profile",
            headers={"Authorization": f"Basic {patient['token']}"},
        )
        assert response.status_code == 401

    @pytest.mark.parametrize("method,path", PROTECTED_ROUTES)
    def test_doctor_token_forbidden(self, client, doctor, method, path):
        response = getattr(client, method)(path, headers=auth_headers(doctor["token"]))
        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden"


class TestProfile:

    def test_get_own_profile(self, client, patient, other_patient):
        response = client.get("/api/patient/profile", headers=auth_headers(patient["token"]))
        assert response.status_code == 200

        data = response.json()
        assert data["id"] == patient["userId"]
        assert data["email"] == "a@x.com"
        assert data["name"] == "A"
        assert data["age"] == 30
        assert "passwordHash" not in data

    def test_other_patient_sees_only_own_profile(self, client, patient, other_patient):
        response = client.get("/api/patient/profile", headers=auth_headers(other_patient["token"]))
        assert response.status_code == 200
        assert response.json()["id"] == other_patient["userId"]
        assert response.json()["email"] == "b@x.com"

    def test_update_profile(self, client, patient):
        response = client.put(
            "/api/patient/profile",
            json={"name": "Asha", "bloodType": "O+", "allergies": "penicillin"},
            headers=auth_headers(patient["token"]),
        )
        assert response.status_code == 200

        data = response.json()
        assert data["name"] == "Asha"
        assert data["bloodType"] == "O+"
        assert data["age"] == 30


class TestVitals:

    def test_latest_vitals_when_none_recorded(self, client, patient):
        response = client.get("/api/patient/vitals/latest", headers=auth_headers(patient["token"]))
        assert response.status_code == 404
        assert response.json()["error"] == "NotFound"

    def test_record_and_read_latest(self, client, patient):
        headers = auth_headers(patient["token"])
        client.post("/api/patient/vitals", json={
            "heartRate": 70, "recordedAt": "2030-01-01T08:00:00",
        }, headers=headers)
        response = client.post("/api/patient/vitals", json={
            "heartRate": 82,
            "bloodPressureSystolic": 120,
            "bloodPressureDiastolic": 80,
            "recordedAt": "2030-01-02T08:00:00",
        }, headers=headers)
        assert response.status_code == 201
        assert response.json()["patientId"] == patient["userId"]

        latest = client.get("/api/patient/vitals/latest", headers=headers)
        assert latest.status_code == 200
        assert latest.json()["heartRate"] == 82

        history = client.get("/api/patient/vitals", headers=headers).json()
        assert [v["heartRate"] for v in history] == [82, 70]

    def test_vitals_require_a_measurement(self, client, patient):
        response = client.post("/api/patient/vitals", json={}, headers=auth_headers(patient["token"]))
        assert response.status_code == 400

    def test_vitals_out_of_range(self, client, patient):
        response = client.post(
            "/api/patient/vitals", json={"oxygenSaturation": 140},
            headers=auth_headers(patient["token"]),
        )
        assert response.status_code == 400

    def test_vitals_isolated_between_patients(self, client, patient, other_patient):
        client.post("/api/patient/vitals", json={"heartRate": 90}, headers=auth_headers(patient["token"]))

        response = client.get("/api/patient/vitals/latest", headers=auth_headers(other_patient["token"]))
        assert response.status_code == 404


class TestAppointments:

    def test_book_appointment(self, client, patient, doctor):
        response = book(client, patient, doctor)
        assert response.status_code == 201

        data = response.json()
        assert data["patientId"] == patient["userId"]
        assert data["doctorId"] == doctor["userId"]
        assert data["status"] == "scheduled"
        assert data["type"] == "consultation"
        assert data["time"].startswith("10:30")

    def test_book_with_unknown_doctor(self, client, patient):
        response = book(client, patient, {"userId": "missing"})
        assert response.status_code == 404

    def test_book_with_patient_as_doctor(self, client, patient, other_patient):
        response = book(client, patient, other_patient)
        assert response.status_code == 404

    def test_book_with_unavailable_doctor(self, client, patient, doctor):
        client.put("/api/doctor/profile", json={"isAvailable": False}, headers=auth_headers(doctor["token"]))

        response = book(client, patient, doctor)
        assert response.status_code == 404
        assert response.json()["error"] == "NotFound"

        listed = client.get("/api/patient/appointments", headers=auth_headers(patient["token"]))
        assert listed.json() == []

    def test_book_in_the_past(self, client, patient, doctor):
        response = book(client, patient, doctor, date=(date.today() - timedelta(days=1)).isoformat())
        assert response.status_code == 400

    def test_book_missing_fields(self, client, patient):
        response = client.post(
            "/api/patient/appointments", json={"type": "consultation"},
            headers=auth_headers(patient["token"]),
        )
        assert response.status_code == 400

    def test_list_only_own_appointments(self, client, patient, other_patient, doctor):
        book(client, patient, doctor)
        book(client, other_patient, doctor)

        response = client.get("/api/patient/appointments", headers=auth_headers(patient["token"]))
        assert response.status_code == 200

        appointments = response.json()
        assert len(appointments) == 1
        assert appointments[0]["patientId"] == patient["userId"]

    def test_cancel_appointment(self, client, patient, doctor):
        appointment_id = book(client, patient, doctor).json()["id"]

        response = client.patch(
            f"/api/patient/appointments/{appointment_id}/cancel",
            headers=auth_headers(patient["token"]),
        )
        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"

        again = client.patch(
            f"/api/patient/appointments/{appointment_id}/cancel",
            headers=auth_headers(patient["token"]),
        )
        assert again.status_code == 400

    def test_cannot_cancel_other_patients_appointment(self, client, patient, other_patient, doctor):
        appointment_id = book(client, patient, doctor).json()["id"]

        response = client.patch(
            f"/api/patient/appointments/{appointment_id}/cancel",
            headers=auth_headers(other_patient["token"]),
        )
        assert response.status_code == 404
