import logging
from typing import Optional

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.config import Settings
from ..core.exceptions import DuplicateIdentity, InvalidCredentials, NotFound
from ..core.security import UserRole, create_access_token, hash_password, verify_password
from ..models.doctor import DoctorProfile
from ..models.patient import PatientProfile
from ..models.user import User
from ..schemas.auth import AuthResponse, SigninRequest, SignupRequest

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    def __init__(self, db: Session, settings: Settings, pwd_context: CryptContext):
        self.db = db
        self.settings = settings
        self.pwd_context = pwd_context

    # Credential store
    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user(self, user_id: str) -> User:
        user = self.find_by_id(user_id)
        if not user:
            raise NotFound("User not found")
        return user

    def create_user(self, user_data: SignupRequest, password_hash: str) -> User:
        """Insert the credential core and its role profile in a single commit."""
        user = User(
            email=normalize_email(user_data.email),
            password_hash=password_hash,
            role=user_data.role,
            name=user_data.name.strip(),
        )

        if user_data.role == UserRole.DOCTOR:
            user.doctor_profile = DoctorProfile(
                specialty=user_data.specialty.strip(),
                license_number=user_data.license_number.strip(),
                hospital=user_data.hospital,
                years_of_experience=user_data.years_of_experience,
                phone_number=user_data.phone_number,
                bio=user_data.bio,
            )
        else:
            user.patient_profile = PatientProfile(
                age=user_data.age,
                gender=user_data.gender,
                phone_number=user_data.phone_number,
                address=user_data.address,
                blood_type=user_data.blood_type,
                allergies=user_data.allergies,
            )

        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Unique constraint on users.email settles concurrent signups
            self.db.rollback()
            raise DuplicateIdentity()

        self.db.refresh(user)
        return user

    # Flows
    def register_user(self, user_data: SignupRequest) -> AuthResponse:
        """Register a new user and issue their first token."""
        if self.find_by_email(user_data.email):
            logger.info(f"Signup rejected, email already registered: {normalize_email(user_data.email)}")
            raise DuplicateIdentity()

        password_hash = hash_password(user_data.password, self.pwd_context)
        user = self.create_user(user_data, password_hash)

        logger.info(f"Registered {user.role.value} user {user.id}")
        return self._issue_token(user)

    def authenticate_user(self, login_data: SigninRequest) -> AuthResponse:
        """Check credentials and issue a fresh token."""
        user = self.find_by_email(login_data.email)
        if not user:
            # Unknown emails cost one bcrypt check, same as a wrong password
            self.pwd_context.dummy_verify()

        if not user or not verify_password(login_data.password, user.password_hash, self.pwd_context):
            logger.info(f"Failed signin for {normalize_email(login_data.email)}")
            raise InvalidCredentials()

        if login_data.role is not None and login_data.role != user.role:
            logger.info(f"Failed signin for {user.id}: role mismatch")
            raise InvalidCredentials()

        logger.info(f"User {user.id} signed in")
        return self._issue_token(user)

    def _issue_token(self, user: User) -> AuthResponse:
        token = create_access_token(user.id, user.role, self.settings)
        return AuthResponse(
            token=token,
            user_id=user.id,
            role=user.role,
            name=user.name,
        )
