import logging
import os
import secrets
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
]


@dataclass
class Settings:
    # Database
    database_url: str

    # Server
    port: int

    # Auth
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 30
    jwt_refresh_token_expire_days: int = 7

    # Viewer gate (shared site password)
    viewer_password: str = ""
    viewer_session_days: int = 30
    cookie_secure: bool = False

    # Email (MailerSend)
    mailersend_api_key: Optional[str] = None
    mailersend_from_email: str = "noreply@example.com"
    mailersend_from_name: str = "マニュアルポータル"
    admin_notification_email: str = "admin@example.com"

    app_base_url: str = "http://localhost:3000"


# Global settings instance
_settings: Optional[Settings] = None


def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_origins(value: Optional[str]) -> list[str]:
    if not value:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in value.split(",") if origin.strip()]


def load_settings() -> Settings:
    global _settings
    load_dotenv()

    database_url = os.getenv("DATABASE_URL", "")
    if not database_url:
        raise ValueError("DATABASE_URL environment variable is required")

    jwt_secret_key = os.getenv("JWT_SECRET_KEY", "")
    if not jwt_secret_key:
        # Generate a default for development, but warn
        jwt_secret_key = secrets.token_urlsafe(32)
        logger.warning("[Config] JWT_SECRET_KEY not set. Using random key (sessions won't persist across restarts)")

    viewer_password = os.getenv("USER_AUTH_PASSWORD", "")
    if not viewer_password:
        logger.warning("[Config] USER_AUTH_PASSWORD not set. Viewer login is disabled")

    _settings = Settings(
        database_url=database_url.strip().strip('"'),
        port=int(os.getenv("PORT", "8000")),
        jwt_secret_key=jwt_secret_key,
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_access_token_expire_minutes=int(os.getenv("JWT_ACCESS_TOKEN_EXPIRE_MINUTES", "30")),
        jwt_refresh_token_expire_days=int(os.getenv("JWT_REFRESH_TOKEN_EXPIRE_DAYS", "7")),
        viewer_password=viewer_password,
        viewer_session_days=int(os.getenv("USER_AUTH_SESSION_DAYS", "30")),
        cookie_secure=_parse_bool(os.getenv("COOKIE_SECURE")),
        mailersend_api_key=os.getenv("MAILERSEND_API_KEY") or None,
        mailersend_from_email=os.getenv("MAILERSEND_FROM_EMAIL", "noreply@example.com"),
        mailersend_from_name=os.getenv("MAILERSEND_FROM_NAME", "マニュアルポータル"),
        admin_notification_email=os.getenv("ADMIN_EMAIL", "admin@example.com"),
        app_base_url=os.getenv("APP_BASE_URL", "http://localhost:3000").rstrip("/"),
    )
    return _settings


def get_settings() -> Settings:
    """Get the loaded settings. Must call load_settings() first."""
    global _settings
    if _settings is None:
        raise RuntimeError("Settings not initialized. Call load_settings() first.")
    return _settings


def cors_origins_from_env() -> list[str]:
    """CORS origins are needed before the lifespan runs, so read them directly."""
    load_dotenv()
    return _parse_origins(os.getenv("CORS_ORIGINS"))
