from calendar import timegm
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError
from passlib.context import CryptContext
from passlib.exc import UnknownHashError

from .config import Settings
from .exceptions import InvalidSignature, MalformedToken, TokenExpired

# bcrypt reads at most 72 bytes of input
BCRYPT_MAX_BYTES = 72


class UserRole(str, Enum):
    PATIENT = "patient"
    DOCTOR = "doctor"


@dataclass(frozen=True)
class TokenIdentity:
    """Identity recovered from a verified access token."""
    subject_id: str
    role: UserRole


def build_password_context(rounds: int = 12) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


# Password utilities
def hash_password(password: str, context: CryptContext) -> str:
    """Generate a salted bcrypt hash."""
    return context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str], context: CryptContext) -> bool:
    """Verify a plain password against its hash."""
    if not hashed_password:
        return False
    if len(plain_password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        context.dummy_verify()
        return False
    try:
        return context.verify(plain_password, hashed_password)
    except (ValueError, UnknownHashError):
        return False


# JWT utilities
def create_access_token(
    subject_id: str,
    role: UserRole,
    settings: Settings,
    now: Optional[datetime] = None,
) -> str:
    """Create a signed access token valid for TOKEN_EXPIRE_DAYS."""
    issued_at = now or datetime.utcnow()
    expire = issued_at + timedelta(days=settings.TOKEN_EXPIRE_DAYS)

    to_encode = {
        "sub": str(subject_id),
        "role": UserRole(role).value,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(
    token: str,
    settings: Settings,
    now: Optional[datetime] = None,
) -> TokenIdentity:
    """
    Verify signature and expiry and return the token's identity.

    Raises MalformedToken when the token cannot be parsed or lacks usable
    claims, InvalidSignature when the signature does not match, and
    TokenExpired once ``exp`` has passed.
    """
    try:
        jwt.get_unverified_claims(token)
    except JWTError:
        raise MalformedToken()

    options = {"verify_exp": now is None}
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options=options,
        )
    except ExpiredSignatureError:
        raise TokenExpired()
    except JWTClaimsError:
        raise MalformedToken()
    except JWTError:
        raise InvalidSignature()

    exp = payload.get("exp")
    if not isinstance(exp, (int, float)):
        raise MalformedToken()
    if now is not None and timegm(now.utctimetuple()) > exp:
        raise TokenExpired()

    subject_id = payload.get("sub")
    if not subject_id or not isinstance(subject_id, str):
        raise MalformedToken()
    try:
        role = UserRole(payload.get("role"))
    except ValueError:
        raise MalformedToken()

    return TokenIdentity(subject_id=subject_id, role=role)
