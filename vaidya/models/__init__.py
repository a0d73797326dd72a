from .user import User
from .patient import PatientProfile
from .doctor import DoctorProfile
from .appointment import Appointment, AppointmentStatus, AppointmentType
from .vitals import Vitals
from .health_record import HealthRecord
from .prescription import Prescription, PrescriptionStatus

__all__ = [
    "User",
    "PatientProfile",
    "DoctorProfile",
    "Appointment",
    "AppointmentStatus",
    "AppointmentType",
    "Vitals",
    "HealthRecord",
    "Prescription",
    "PrescriptionStatus",
]
