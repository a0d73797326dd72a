from sqlalchemy import Column, Float, Integer, String, ForeignKey, DateTime
from datetime import datetime

from ..core.database import Base
from .base import generate_id


class Vitals(Base):
    __tablename__ = "vitals"

    id = Column(String(32), primary_key=True, default=generate_id)
    patient_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)

    heart_rate = Column(Integer, nullable=True)
    blood_pressure_systolic = Column(Integer, nullable=True)
    blood_pressure_diastolic = Column(Integer, nullable=True)
    temperature = Column(Float, nullable=True)
    oxygen_saturation = Column(Integer, nullable=True)
    respiratory_rate = Column(Integer, nullable=True)
    weight = Column(Float, nullable=True)
    blood_sugar = Column(Float, nullable=True)

    recorded_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f"<Vitals(id={self.id}, patient_id={self.patient_id}, recorded_at='{self.recorded_at}')>"
