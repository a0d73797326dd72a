from datetime import date, timedelta

# Test data
patient_signup_data = {
    "email": "a@x.com",
    "password": "secret123",
    "name": "A",
    "role": "patient",
    "age": 30,
}

other_patient_signup_data = {
    "email": "b@x.com",
    "password": "secret456",
    "name": "B",
    "role": "patient",
    "age": 41,
}

doctor_signup_data = {
    "email": "dr.rao@x.com",
    "password": "doctor123",
    "name": "Dr. Rao",
    "role": "doctor",
    "specialty": "Cardiology",
    "licenseNumber": "MCI-4411",
    "hospital": "City Hospital",
}


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def future_date(days: int = 7) -> str:
    return (date.today() + timedelta(days=days)).isoformat()


def signup(client, data) -> dict:
    response = client.post("/api/auth/signup", json=data)
    assert response.status_code == 201, response.text
    return response.json()
