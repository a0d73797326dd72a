from fastapi import APIRouter, Depends, status
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from ...core.config import Settings
from ...core.database import get_db
from ...core.security import TokenIdentity
from ...api.deps import get_current_identity, get_password_context, get_settings
from ...services.auth_service import AuthService
from ...schemas.auth import AuthResponse, SigninRequest, SignupRequest, UserResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])


def get_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    pwd_context: CryptContext = Depends(get_password_context),
) -> AuthService:
    return AuthService(db, settings, pwd_context)


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: SignupRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register a patient or doctor and return an access token."""
    return auth_service.register_user(user_data)


@router.post("/signin", response_model=AuthResponse)
def signin(
    login_data: SigninRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Authenticate with email and password and return an access token."""
    return auth_service.authenticate_user(login_data)


@router.get("/me", response_model=UserResponse)
def get_current_user_info(
    identity: TokenIdentity = Depends(get_current_identity),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Get the authenticated user's account."""
    return auth_service.get_user(identity.subject_id)
