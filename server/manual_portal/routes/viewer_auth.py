"""Shared-password login for the consumer site."""

import logging
from typing import Optional

from fastapi import APIRouter, Cookie, HTTPException, Response, status

from ..config import get_settings
from ..models.auth import ViewerLoginRequest, ViewerSessionResponse
from ..services.auth import (
    VIEWER_COOKIE_NAME,
    create_viewer_token,
    is_valid_viewer_token,
    verify_viewer_password,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login")
async def viewer_login(request: ViewerLoginRequest, response: Response):
    if not request.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="パスワードが入力されていません"
        )

    settings = get_settings()
    if not settings.viewer_password:
        logger.error("[ViewerAuth] USER_AUTH_PASSWORD not set in environment variables")

    if not verify_viewer_password(request.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="パスワードが正しくありません"
        )

    response.set_cookie(
        key=VIEWER_COOKIE_NAME,
        value=create_viewer_token(),
        max_age=settings.viewer_session_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )
    return {"success": True}


@router.post("/logout")
async def viewer_logout(response: Response):
    response.delete_cookie(key=VIEWER_COOKIE_NAME, path="/")
    return {"success": True}


@router.get("/session", response_model=ViewerSessionResponse)
async def viewer_session(
    user_authenticated: Optional[str] = Cookie(default=None, alias=VIEWER_COOKIE_NAME),
):
    return ViewerSessionResponse(authenticated=is_valid_viewer_token(user_authenticated))
