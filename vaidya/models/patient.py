from sqlalchemy import Column, Integer, String, ForeignKey, Text
from sqlalchemy.orm import relationship

from ..core.database import Base


class PatientProfile(Base):
    __tablename__ = "patient_profiles"

    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)

    # Personal information
    age = Column(Integer, nullable=True)
    gender = Column(String(20), nullable=True)

    # Contact information
    phone_number = Column(String(20), nullable=True)
    address = Column(String(255), nullable=True)

    # Medical information
    blood_type = Column(String(10), nullable=True)
    allergies = Column(Text, nullable=True)

    user = relationship("User", back_populates="patient_profile")

    def __repr__(self):
        return f"<PatientProfile(user_id={self.user_id})>"
