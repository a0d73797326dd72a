from datetime import date, datetime, time
from typing import Optional

from pydantic import Field, field_validator, model_validator

from ..core.security import UserRole
from ..models.appointment import AppointmentStatus, AppointmentType
from ..models.prescription import PrescriptionStatus
from .base import CamelModel


class PatientProfileResponse(CamelModel):
    id: str
    email: str
    name: str
    role: UserRole
    age: Optional[int] = None
    gender: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    blood_type: Optional[str] = None
    allergies: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user) -> "PatientProfileResponse":
        profile = user.patient_profile
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            age=profile.age if profile else None,
            gender=profile.gender if profile else None,
            phone_number=profile.phone_number if profile else None,
            address=profile.address if profile else None,
            blood_type=profile.blood_type if profile else None,
            allergies=profile.allergies if profile else None,
            created_at=user.created_at,
        )


class PatientProfileUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    age: Optional[int] = Field(default=None, ge=0, le=150)
    gender: Optional[str] = Field(default=None, max_length=20)
    phone_number: Optional[str] = Field(default=None, max_length=20)
    address: Optional[str] = Field(default=None, max_length=255)
    blood_type: Optional[str] = Field(default=None, max_length=10)
    allergies: Optional[str] = None


VITAL_FIELDS = (
    "heart_rate",
    "blood_pressure_systolic",
    "blood_pressure_diastolic",
    "temperature",
    "oxygen_saturation",
    "respiratory_rate",
    "weight",
    "blood_sugar",
)


class VitalsCreate(CamelModel):
    heart_rate: Optional[int] = Field(default=None, ge=20, le=300)
    blood_pressure_systolic: Optional[int] = Field(default=None, ge=40, le=300)
    blood_pressure_diastolic: Optional[int] = Field(default=None, ge=20, le=200)
    temperature: Optional[float] = Field(default=None, ge=30, le=45)
    oxygen_saturation: Optional[int] = Field(default=None, ge=0, le=100)
    respiratory_rate: Optional[int] = Field(default=None, ge=1, le=100)
    weight: Optional[float] = Field(default=None, gt=0, le=700)
    blood_sugar: Optional[float] = Field(default=None, gt=0, le=1000)
    recorded_at: Optional[datetime] = None

    @model_validator(mode="after")
    def check_any_measurement(self):
        if all(getattr(self, field) is None for field in VITAL_FIELDS):
            raise ValueError("at least one vital measurement is required")
        return self


class VitalsResponse(CamelModel):
    id: str
    patient_id: str
    heart_rate: Optional[int] = None
    blood_pressure_systolic: Optional[int] = None
    blood_pressure_diastolic: Optional[int] = None
    temperature: Optional[float] = None
    oxygen_saturation: Optional[int] = None
    respiratory_rate: Optional[int] = None
    weight: Optional[float] = None
    blood_sugar: Optional[float] = None
    recorded_at: datetime


class AppointmentCreate(CamelModel):
    doctor_id: str = Field(min_length=1)
    date: date
    time: time
    type: AppointmentType = AppointmentType.CONSULTATION
    reason: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("date")
    @classmethod
    def date_not_in_past(cls, value: date) -> date:
        if value < date.today():
            raise ValueError("appointment date cannot be in the past")
        return value


class AppointmentResponse(CamelModel):
    id: str
    patient_id: str
    doctor_id: str
    date: date
    time: time
    type: AppointmentType
    status: AppointmentStatus
    reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class HealthRecordResponse(CamelModel):
    id: str
    patient_id: str
    doctor_id: Optional[str] = None
    title: str
    record_type: str
    description: Optional[str] = None
    diagnosis: Optional[str] = None
    record_date: date
    created_at: Optional[datetime] = None


class PrescriptionResponse(CamelModel):
    id: str
    patient_id: str
    doctor_id: str
    appointment_id: Optional[str] = None
    medication: str
    dosage: str
    frequency: str
    duration: Optional[str] = None
    instructions: Optional[str] = None
    status: PrescriptionStatus
    issued_at: Optional[datetime] = None
