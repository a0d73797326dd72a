from sqlalchemy import Column, String, ForeignKey, DateTime, Text, Enum as SQLEnum
from sqlalchemy.sql import func
import enum

from ..core.database import Base
from .base import generate_id


class PrescriptionStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    DISCONTINUED = "discontinued"


class Prescription(Base):
    __tablename__ = "prescriptions"

    id = Column(String(32), primary_key=True, default=generate_id)
    patient_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    doctor_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    appointment_id = Column(String(32), ForeignKey("appointments.id"), nullable=True)

    medication = Column(String(200), nullable=False)
    dosage = Column(String(100), nullable=False)
    frequency = Column(String(100), nullable=False)
    duration = Column(String(100), nullable=True)
    instructions = Column(Text, nullable=True)
    status = Column(SQLEnum(PrescriptionStatus), nullable=False, default=PrescriptionStatus.ACTIVE)

    issued_at = Column(DateTime, nullable=False, server_default=func.now())

    def __repr__(self):
        return f"<Prescription(id={self.id}, patient_id={self.patient_id}, medication='{self.medication}')>"
