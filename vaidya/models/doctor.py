from sqlalchemy import Column, Integer, String, ForeignKey, Boolean, Text
from sqlalchemy.orm import relationship

from ..core.database import Base


class DoctorProfile(Base):
    __tablename__ = "doctor_profiles"

    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)

    # Professional information
    specialty = Column(String(100), nullable=False, index=True)
    license_number = Column(String(50), nullable=False)
    hospital = Column(String(255), nullable=True)
    years_of_experience = Column(Integer, nullable=True)
    bio = Column(Text, nullable=True)

    # Contact information
    phone_number = Column(String(20), nullable=True)

    # Availability
    is_available = Column(Boolean, default=True, nullable=False)

    user = relationship("User", back_populates="doctor_profile")

    def __repr__(self):
        return f"<DoctorProfile(user_id={self.user_id}, specialty='{self.specialty}')>"
