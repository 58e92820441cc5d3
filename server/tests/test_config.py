import pytest

from manual_portal import config as config_module
from manual_portal.config import get_settings, load_settings


def test_get_settings_before_load_raises(monkeypatch):
    monkeypatch.setattr(config_module, "_settings", None)
    with pytest.raises(RuntimeError):
        get_settings()


def test_load_settings_requires_database_url(monkeypatch):
    monkeypatch.setattr(config_module, "load_dotenv", lambda: None)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(ValueError):
        load_settings()


def test_load_settings_reads_environment(monkeypatch):
    monkeypatch.setattr(config_module, "load_dotenv", lambda: None)
    monkeypatch.setattr(config_module, "_settings", None)
    monkeypatch.setenv("DATABASE_URL", '"postgresql://localhost/portal"')
    monkeypatch.setenv("JWT_SECRET_KEY", "secret")
    monkeypatch.setenv("USER_AUTH_PASSWORD", "letmein")
    monkeypatch.setenv("COOKIE_SECURE", "true")
    monkeypatch.setenv("APP_BASE_URL", "https://manuals.example.com/")
    monkeypatch.delenv("MAILERSEND_API_KEY", raising=False)

    settings = load_settings()

    assert settings.database_url == "postgresql://localhost/portal"
    assert settings.viewer_password == "letmein"
    assert settings.viewer_session_days == 30
    assert settings.cookie_secure is True
    assert settings.mailersend_api_key is None
    assert settings.app_base_url == "https://manuals.example.com"
    assert get_settings() is settings


def test_cors_origins_default_and_override(monkeypatch):
    monkeypatch.setattr(config_module, "load_dotenv", lambda: None)
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    assert config_module.cors_origins_from_env() == config_module.DEFAULT_CORS_ORIGINS

    monkeypatch.setenv("CORS_ORIGINS", "https://a.example.com, ,https://b.example.com")
    assert config_module.cors_origins_from_env() == ["https://a.example.com", "https://b.example.com"]
