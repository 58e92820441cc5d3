from typing import Optional
from uuid import UUID

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from .services.auth import VIEWER_COOKIE_NAME, decode_token, is_valid_viewer_token
from .models.auth import CurrentUser
from .database import get_connection

security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> CurrentUser:
    """Dependency to get the current authenticated admin user."""
    token = credentials.credentials
    payload = decode_token(token)

    if payload is None or payload.type != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = UUID(payload.sub)

    async with get_connection() as conn:
        # Verify user exists and is active
        user_row = await conn.fetchrow(
            "SELECT id, email, role, is_active FROM users WHERE id = $1",
            user_id
        )

    if not user_row or not user_row["is_active"]:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive"
        )

    return CurrentUser(
        id=user_row["id"],
        email=user_row["email"],
        role=user_row["role"],
    )


async def require_admin(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if current_user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Required roles: admin"
        )
    return current_user


async def require_viewer(
    user_authenticated: Optional[str] = Cookie(default=None, alias=VIEWER_COOKIE_NAME),
) -> None:
    """Gate for the consumer site: requires the shared-password session cookie."""
    if not is_valid_viewer_token(user_authenticated):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="ログインが必要です"
        )
