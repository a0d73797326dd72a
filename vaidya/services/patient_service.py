import logging
from typing import List

from sqlalchemy.orm import Session

from ..core.exceptions import NotFound, ValidationError
from ..core.security import UserRole
from ..models.appointment import Appointment, AppointmentStatus
from ..models.doctor import DoctorProfile
from ..models.health_record import HealthRecord
from ..models.patient import PatientProfile
from ..models.prescription import Prescription
from ..models.user import User
from ..models.vitals import Vitals
from ..schemas.patient import AppointmentCreate, PatientProfileUpdate, VitalsCreate

logger = logging.getLogger(__name__)


class PatientService:
    """Operations scoped to one authenticated patient."""

    def __init__(self, db: Session, patient_id: str):
        self.db = db
        self.patient_id = patient_id

    def get_profile(self) -> User:
        user = self.db.query(User).filter(
            User.id == self.patient_id,
            User.role == UserRole.PATIENT,
        ).first()
        if not user:
            raise NotFound("Patient not found")
        return user

    def update_profile(self, update: PatientProfileUpdate) -> User:
        user = self.get_profile()
        changes = update.model_dump(exclude_unset=True)

        name = changes.pop("name", None)
        if name is not None:
            user.name = name.strip()

        if user.patient_profile is None:
            user.patient_profile = PatientProfile()
        for field, value in changes.items():
            setattr(user.patient_profile, field, value)

        self.db.commit()
        self.db.refresh(user)
        return user

    # Vitals
    def get_latest_vitals(self) -> Vitals:
        vitals = (
            self.db.query(Vitals)
            .filter(Vitals.patient_id == self.patient_id)
            .order_by(Vitals.recorded_at.desc())
            .first()
        )
        if not vitals:
            raise NotFound("No vitals recorded")
        return vitals

    def list_vitals(self, skip: int = 0, limit: int = 50) -> List[Vitals]:
        return (
            self.db.query(Vitals)
            .filter(Vitals.patient_id == self.patient_id)
            .order_by(Vitals.recorded_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def record_vitals(self, vitals_data: VitalsCreate) -> Vitals:
        values = vitals_data.model_dump(exclude_none=True)
        vitals = Vitals(patient_id=self.patient_id, **values)
        self.db.add(vitals)
        self.db.commit()
        self.db.refresh(vitals)
        return vitals

    # Appointments
    def list_appointments(self, skip: int = 0, limit: int = 50) -> List[Appointment]:
        return (
            self.db.query(Appointment)
            .filter(Appointment.patient_id == self.patient_id)
            .order_by(Appointment.date.desc(), Appointment.time.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def book_appointment(self, appointment_data: AppointmentCreate) -> Appointment:
        doctor = (
            self.db.query(User)
            .join(DoctorProfile, DoctorProfile.user_id == User.id)
            .filter(
                User.id == appointment_data.doctor_id,
                User.role == UserRole.DOCTOR,
                DoctorProfile.is_available.is_(True),
            )
            .first()
        )
        if not doctor:
            raise NotFound("Doctor not found or not accepting appointments")

        appointment = Appointment(
            patient_id=self.patient_id,
            doctor_id=doctor.id,
            date=appointment_data.date,
            time=appointment_data.time,
            type=appointment_data.type,
            reason=appointment_data.reason,
            status=AppointmentStatus.SCHEDULED,
        )
        self.db.add(appointment)
        self.db.commit()
        self.db.refresh(appointment)

        logger.info(f"Patient {self.patient_id} booked appointment {appointment.id} with doctor {doctor.id}")
        return appointment

    def cancel_appointment(self, appointment_id: str) -> Appointment:
        appointment = self.db.query(Appointment).filter(
            Appointment.id == appointment_id,
            Appointment.patient_id == self.patient_id,
        ).first()
        if not appointment:
            raise NotFound("Appointment not found")

        if appointment.status in (AppointmentStatus.CANCELLED, AppointmentStatus.COMPLETED):
            raise ValidationError(f"Appointment is already {appointment.status.value}")

        appointment.status = AppointmentStatus.CANCELLED
        self.db.commit()
        self.db.refresh(appointment)
        return appointment

    # Records
    def list_health_records(self, skip: int = 0, limit: int = 50) -> List[HealthRecord]:
        return (
            self.db.query(HealthRecord)
            .filter(HealthRecord.patient_id == self.patient_id)
            .order_by(HealthRecord.record_date.desc(), HealthRecord.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def list_prescriptions(self, skip: int = 0, limit: int = 50) -> List[Prescription]:
        return (
            self.db.query(Prescription)
            .filter(Prescription.patient_id == self.patient_id)
            .order_by(Prescription.issued_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
