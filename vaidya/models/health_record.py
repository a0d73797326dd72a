from sqlalchemy import Column, String, ForeignKey, Date, DateTime, Text
from sqlalchemy.sql import func

from ..core.database import Base
from .base import generate_id


class HealthRecord(Base):
    __tablename__ = "health_records"

    id = Column(String(32), primary_key=True, default=generate_id)
    patient_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    doctor_id = Column(String(32), ForeignKey("users.id"), nullable=True, index=True)

    title = Column(String(200), nullable=False)
    record_type = Column(String(50), nullable=False, default="general")
    description = Column(Text, nullable=True)
    diagnosis = Column(Text, nullable=True)
    record_date = Column(Date, nullable=False)

    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<HealthRecord(id={self.id}, patient_id={self.patient_id}, title='{self.title}')>"
