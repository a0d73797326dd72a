from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext

from ..core.config import Settings
from ..core.exceptions import Forbidden, Unauthorized
from ..core.security import TokenIdentity, UserRole, decode_access_token

# Missing credentials are reported by get_current_identity, not HTTPBearer
security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_password_context(request: Request) -> CryptContext:
    return request.app.state.pwd_context


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> TokenIdentity:
    """Extract and verify the bearer token from the Authorization header."""
    if credentials is None or not credentials.credentials:
        raise Unauthorized()

    return decode_access_token(credentials.credentials, settings)


# Role-based access control dependencies
def require_role(*allowed_roles: UserRole):
    """Create a dependency that admits only the given roles."""
    async def role_checker(
        identity: TokenIdentity = Depends(get_current_identity),
    ) -> TokenIdentity:
        if identity.role not in allowed_roles:
            raise Forbidden(
                f"Access denied. Required roles: {[role.value for role in allowed_roles]}"
            )
        return identity

    return role_checker


get_patient_identity = require_role(UserRole.PATIENT)
get_doctor_identity = require_role(UserRole.DOCTOR)
