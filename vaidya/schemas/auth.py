from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, model_validator

from ..core.security import UserRole
from .base import CamelModel

# bcrypt only reads the first 72 bytes of a password
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 72


class SignupRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    name: str = Field(min_length=1, max_length=200)
    role: UserRole

    # Shared
    phone_number: Optional[str] = Field(default=None, max_length=20)

    # Patient fields
    age: Optional[int] = Field(default=None, ge=0, le=150)
    gender: Optional[str] = Field(default=None, max_length=20)
    address: Optional[str] = Field(default=None, max_length=255)
    blood_type: Optional[str] = Field(default=None, max_length=10)
    allergies: Optional[str] = None

    # Doctor fields
    specialty: Optional[str] = Field(default=None, max_length=100)
    license_number: Optional[str] = Field(default=None, max_length=50)
    hospital: Optional[str] = Field(default=None, max_length=255)
    years_of_experience: Optional[int] = Field(default=None, ge=0, le=80)
    bio: Optional[str] = None

    @model_validator(mode="after")
    def check_role_fields(self):
        if len(self.password.encode("utf-8")) > PASSWORD_MAX_LENGTH:
            raise ValueError(f"password must be at most {PASSWORD_MAX_LENGTH} bytes")
        if not self.name.strip():
            raise ValueError("name must not be blank")
        if self.role == UserRole.DOCTOR:
            missing = [
                field for field in ("specialty", "license_number")
                if not (getattr(self, field) or "").strip()
            ]
            if missing:
                raise ValueError(f"doctor signup requires: {', '.join(missing)}")
        return self


class SigninRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)
    role: Optional[UserRole] = None


class AuthResponse(CamelModel):
    token: str
    token_type: str = "bearer"
    user_id: str
    role: UserRole
    name: str


class UserResponse(CamelModel):
    id: str
    email: str
    name: str
    role: UserRole
    created_at: Optional[datetime] = None
