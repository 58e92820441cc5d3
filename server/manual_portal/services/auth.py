import asyncio
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

import bcrypt
from jose import jwt, JWTError

from ..config import get_settings
from ..models.auth import TokenPayload, UserRole

VIEWER_COOKIE_NAME = "user_authenticated"


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    password_bytes = password.encode('utf-8')
    # Truncate to 72 bytes if needed (bcrypt limit)
    if len(password_bytes) > 72:
        password_bytes = password_bytes[:72]
    salt = bcrypt.gensalt(rounds=10)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Blocking; async routes use verify_password_async."""
    password_bytes = plain_password.encode('utf-8')
    if len(password_bytes) > 72:
        password_bytes = password_bytes[:72]
    hashed_bytes = hashed_password.encode('utf-8')
    return bcrypt.checkpw(password_bytes, hashed_bytes)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    """Run the bcrypt check in a worker thread."""
    return await asyncio.to_thread(verify_password, plain_password, hashed_password)


def _encode(payload: dict) -> str:
    settings = get_settings()
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(
    user_id: UUID,
    email: str,
    role: UserRole,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create a JWT access token."""
    settings = get_settings()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_access_token_expire_minutes)

    return _encode({
        "sub": str(user_id),
        "email": email,
        "role": role,
        "exp": expire,
        "type": "access"
    })


def create_refresh_token(user_id: UUID, email: str, role: UserRole) -> str:
    """Create a JWT refresh token."""
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(days=settings.jwt_refresh_token_expire_days)

    return _encode({
        "sub": str(user_id),
        "email": email,
        "role": role,
        "exp": expire,
        "type": "refresh"
    })


def decode_token(token: str) -> Optional[TokenPayload]:
    """Decode and validate a JWT token."""
    settings = get_settings()

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(
            sub=payload["sub"],
            email=payload["email"],
            role=payload["role"],
            exp=payload["exp"],
            type=payload.get("type", "access"),
        )
    except (JWTError, KeyError, TypeError, ValueError):
        return None


# -----------------------------------------------------------------------------
# Viewer gate: one shared password for the whole consumer site
# -----------------------------------------------------------------------------

def verify_viewer_password(password: str) -> bool:
    settings = get_settings()
    if not settings.viewer_password:
        return False
    return secrets.compare_digest(password.encode("utf-8"), settings.viewer_password.encode("utf-8"))


def create_viewer_token() -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(days=settings.viewer_session_days)
    return _encode({"sub": "viewer", "exp": expire, "type": "viewer"})


def is_valid_viewer_token(token: Optional[str]) -> bool:
    if not token:
        return False
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        return False
    return payload.get("type") == "viewer"
