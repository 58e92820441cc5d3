"""Admin authentication routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from ..config import get_settings
from ..database import get_connection
from ..dependencies import get_current_user
from ..models.auth import (
    CurrentUser,
    LoginRequest,
    RefreshTokenRequest,
    TokenResponse,
    UserResponse,
)
from ..services.auth import (
    create_access_token,
    create_refresh_token,
    decode_token,
    verify_password_async,
)

router = APIRouter()


def _token_response(user) -> TokenResponse:
    settings = get_settings()
    return TokenResponse(
        access_token=create_access_token(user["id"], user["email"], user["role"]),
        refresh_token=create_refresh_token(user["id"], user["email"], user["role"]),
        expires_in=settings.jwt_access_token_expire_minutes * 60,
        user=UserResponse(
            id=user["id"],
            email=user["email"],
            role=user["role"],
            is_active=user["is_active"],
            created_at=user["created_at"],
            last_login=user["last_login"]
        )
    )


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest):
    """Authenticate an admin and return tokens."""
    async with get_connection() as conn:
        user = await conn.fetchrow(
            "SELECT id, email, password_hash, role, is_active, created_at, last_login FROM users WHERE email = $1",
            request.email
        )

        if not user or not await verify_password_async(request.password, user["password_hash"]):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password"
            )

        if not user["is_active"]:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Account is disabled"
            )

        # Update last login
        await conn.execute(
            "UPDATE users SET last_login = NOW() WHERE id = $1",
            user["id"]
        )

    return _token_response(user)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(request: RefreshTokenRequest):
    """Refresh access token using refresh token."""
    payload = decode_token(request.refresh_token)

    if payload is None or payload.type != "refresh":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token"
        )

    async with get_connection() as conn:
        user = await conn.fetchrow(
            "SELECT id, email, role, is_active, created_at, last_login FROM users WHERE id = $1",
            UUID(payload.sub)
        )

    if not user or not user["is_active"]:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive"
        )

    return _token_response(user)


@router.get("/me", response_model=CurrentUser)
async def me(current_user: CurrentUser = Depends(get_current_user)):
    return current_user


@router.post("/logout")
async def logout(current_user: CurrentUser = Depends(get_current_user)):
    """Logout endpoint (tokens are stateless; clients drop them)."""
    return {"status": "logged_out"}
