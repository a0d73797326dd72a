import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.exceptions import NotFound, ValidationError
from ..core.security import UserRole
from ..models.appointment import Appointment, AppointmentStatus
from ..models.doctor import DoctorProfile
from ..models.health_record import HealthRecord
from ..models.prescription import Prescription
from ..models.user import User
from ..models.vitals import Vitals
from ..schemas.doctor import (
    AppointmentStatusUpdate, DoctorProfileUpdate, HealthRecordCreate, PrescriptionCreate
)

logger = logging.getLogger(__name__)

CLOSED_STATUSES = (AppointmentStatus.CANCELLED, AppointmentStatus.COMPLETED)


def list_doctors(db: Session, specialty: Optional[str] = None, skip: int = 0, limit: int = 50) -> List[User]:
    """Doctors open for booking, optionally narrowed to one specialty."""
    query = (
        db.query(User)
        .join(DoctorProfile, DoctorProfile.user_id == User.id)
        .filter(User.role == UserRole.DOCTOR, DoctorProfile.is_available.is_(True))
    )
    if specialty:
        query = query.filter(DoctorProfile.specialty.ilike(specialty.strip()))
    return query.order_by(User.name).offset(skip).limit(limit).all()


class DoctorService:
    """Operations scoped to one authenticated doctor."""

    def __init__(self, db: Session, doctor_id: str):
        self.db = db
        self.doctor_id = doctor_id

    def get_profile(self) -> User:
        user = self.db.query(User).filter(
            User.id == self.doctor_id,
            User.role == UserRole.DOCTOR,
        ).first()
        if not user:
            raise NotFound("Doctor not found")
        return user

    def update_profile(self, update: DoctorProfileUpdate) -> User:
        user = self.get_profile()
        changes = update.model_dump(exclude_unset=True)

        name = changes.pop("name", None)
        if name is not None:
            user.name = name.strip()

        if user.doctor_profile is None:
            raise NotFound("Doctor profile not found")
        for field, value in changes.items():
            if value is None and field in ("specialty", "is_available"):
                continue
            setattr(user.doctor_profile, field, value)

        self.db.commit()
        self.db.refresh(user)
        return user

    # Appointments
    def list_appointments(
        self,
        status: Optional[AppointmentStatus] = None,
        skip: int = 0,
        limit: int = 50,
    ) -> List[Appointment]:
        query = self.db.query(Appointment).filter(Appointment.doctor_id == self.doctor_id)
        if status is not None:
            query = query.filter(Appointment.status == status)
        return (
            query.order_by(Appointment.date.asc(), Appointment.time.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def update_appointment_status(self, appointment_id: str, update: AppointmentStatusUpdate) -> Appointment:
        appointment = self.db.query(Appointment).filter(
            Appointment.id == appointment_id,
            Appointment.doctor_id == self.doctor_id,
        ).first()
        if not appointment:
            raise NotFound("Appointment not found")

        if appointment.status in CLOSED_STATUSES:
            raise ValidationError(f"Appointment is already {appointment.status.value}")

        appointment.status = update.status
        if update.notes is not None:
            appointment.notes = update.notes
        self.db.commit()
        self.db.refresh(appointment)

        logger.info(f"Doctor {self.doctor_id} set appointment {appointment.id} to {update.status.value}")
        return appointment

    # Patient data
    def get_patient_latest_vitals(self, patient_id: str) -> Vitals:
        """Latest vitals of a patient who has booked with this doctor."""
        vitals = (
            self.db.query(Vitals)
            .filter(
                Vitals.patient_id == patient_id,
                Vitals.patient_id.in_(
                    select(Appointment.patient_id).where(Appointment.doctor_id == self.doctor_id)
                ),
            )
            .order_by(Vitals.recorded_at.desc())
            .first()
        )
        if not vitals:
            raise NotFound("No vitals found for this patient")
        return vitals

    def _get_patient(self, patient_id: str) -> User:
        patient = self.db.query(User).filter(
            User.id == patient_id,
            User.role == UserRole.PATIENT,
        ).first()
        if not patient:
            raise NotFound("Patient not found")
        return patient

    def create_health_record(self, record_data: HealthRecordCreate) -> HealthRecord:
        patient = self._get_patient(record_data.patient_id)

        record = HealthRecord(
            patient_id=patient.id,
            doctor_id=self.doctor_id,
            title=record_data.title,
            record_type=record_data.record_type,
            description=record_data.description,
            diagnosis=record_data.diagnosis,
            record_date=record_data.record_date or date.today(),
        )
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def create_prescription(self, prescription_data: PrescriptionCreate) -> Prescription:
        if prescription_data.appointment_id:
            appointment = self.db.query(Appointment).filter(
                Appointment.id == prescription_data.appointment_id,
                Appointment.doctor_id == self.doctor_id,
                Appointment.patient_id == prescription_data.patient_id,
            ).first()
            if not appointment:
                raise NotFound("Appointment not found")
        else:
            self._get_patient(prescription_data.patient_id)

        prescription = Prescription(
            patient_id=prescription_data.patient_id,
            doctor_id=self.doctor_id,
            appointment_id=prescription_data.appointment_id,
            medication=prescription_data.medication,
            dosage=prescription_data.dosage,
            frequency=prescription_data.frequency,
            duration=prescription_data.duration,
            instructions=prescription_data.instructions,
        )
        self.db.add(prescription)
        self.db.commit()
        self.db.refresh(prescription)

        logger.info(f"Doctor {self.doctor_id} issued prescription {prescription.id}")
        return prescription
