from datetime import date as date_type
from datetime import datetime
from typing import Optional

from pydantic import Field

from ..core.security import UserRole
from ..models.appointment import AppointmentStatus
from .base import CamelModel


class DoctorProfileResponse(CamelModel):
    id: str
    email: str
    name: str
    role: UserRole
    specialty: Optional[str] = None
    license_number: Optional[str] = None
    hospital: Optional[str] = None
    years_of_experience: Optional[int] = None
    phone_number: Optional[str] = None
    bio: Optional[str] = None
    is_available: bool = True
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user) -> "DoctorProfileResponse":
        profile = user.doctor_profile
        if profile is None:
            return cls(id=user.id, email=user.email, name=user.name, role=user.role,
                       created_at=user.created_at)
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            specialty=profile.specialty,
            license_number=profile.license_number,
            hospital=profile.hospital,
            years_of_experience=profile.years_of_experience,
            phone_number=profile.phone_number,
            bio=profile.bio,
            is_available=profile.is_available,
            created_at=user.created_at,
        )


class DoctorProfileUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    specialty: Optional[str] = Field(default=None, min_length=1, max_length=100)
    hospital: Optional[str] = Field(default=None, max_length=255)
    years_of_experience: Optional[int] = Field(default=None, ge=0, le=80)
    phone_number: Optional[str] = Field(default=None, max_length=20)
    bio: Optional[str] = None
    is_available: Optional[bool] = None


class DoctorSummary(CamelModel):
    """Public directory entry; no contact or license details."""
    id: str
    name: str
    specialty: str
    hospital: Optional[str] = None
    years_of_experience: Optional[int] = None
    is_available: bool

    @classmethod
    def from_user(cls, user) -> "DoctorSummary":
        profile = user.doctor_profile
        return cls(
            id=user.id,
            name=user.name,
            specialty=profile.specialty,
            hospital=profile.hospital,
            years_of_experience=profile.years_of_experience,
            is_available=profile.is_available,
        )


class AppointmentStatusUpdate(CamelModel):
    status: AppointmentStatus
    notes: Optional[str] = Field(default=None, max_length=2000)


class HealthRecordCreate(CamelModel):
    patient_id: str = Field(min_length=1)
    title: str = Field(min_length=1, max_length=200)
    record_type: str = Field(default="general", min_length=1, max_length=50)
    description: Optional[str] = None
    diagnosis: Optional[str] = None
    record_date: Optional[date_type] = None


class PrescriptionCreate(CamelModel):
    patient_id: str = Field(min_length=1)
    appointment_id: Optional[str] = None
    medication: str = Field(min_length=1, max_length=200)
    dosage: str = Field(min_length=1, max_length=100)
    frequency: str = Field(min_length=1, max_length=100)
    duration: Optional[str] = Field(default=None, max_length=100)
    instructions: Optional[str] = None
