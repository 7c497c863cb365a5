"""Unit tests for server configuration settings model.

Tests verify that the Settings model binds environment variables (and the
.env.example file) and that the grouped configuration views agree with it.
"""

from pathlib import Path

import pytest

from mentorconnect.server.core.config import (
    AuthConfig,
    CORSConfig,
    DatabaseConfig,
    MailConfig,
    PusherConfig,
    RecaptchaConfig,
    Settings,
)


@pytest.fixture
def env_example_path() -> Path:
    """Get path to .env.example file."""
    return Path(__file__).resolve().parents[4] / ".env.example"


@pytest.fixture
def isolated_env(monkeypatch):
    """Drop variables the test session sets so dotenv values are visible."""
    for name in ("DATABASE_URL", "AUTH_JWT_SECRET"):
        monkeypatch.delenv(name, raising=False)


class TestSettingsBinding:
    """Test Settings model environment variable binding."""

    def test_defaults(self, isolated_env):
        settings = Settings(_env_file=None)

        assert settings.server_host == "0.0.0.0"
        assert settings.server_port == 8000
        assert settings.cors_origins == ["*"]
        assert settings.auth_token_ttl_minutes == 60 * 24 * 7
        assert settings.auth_password_reset_ttl_minutes == 60
        assert settings.pusher_app_id is None
        assert settings.recaptcha_secret_key is None

    def test_env_example_is_loadable(self, env_example_path: Path, isolated_env):
        settings = Settings(_env_file=env_example_path)

        assert settings.server_port == 8000
        assert settings.database_url.startswith("postgresql+asyncpg://")
        assert settings.cors_origins == ["http://localhost:3000"]
        assert settings.public_base_url == "http://localhost:3000"
        assert settings.pusher.is_configured is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MENTORCONNECT_SERVER_PORT", "9001")
        monkeypatch.setenv("CORS_ORIGINS", '["https://a.example", "https://b.example"]')
        monkeypatch.setenv("AUTH_TOKEN_TTL_MINUTES", "15")
        monkeypatch.setenv("DATABASE_ECHO", "true")

        settings = Settings(_env_file=None)

        assert settings.server_port == 9001
        assert settings.cors_origins == ["https://a.example", "https://b.example"]
        assert settings.auth_token_ttl_minutes == 15
        assert settings.database_echo is True


class TestGroupedConfigs:
    """Test the computed configuration views."""

    @pytest.fixture
    def settings(self, monkeypatch) -> Settings:
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./dev.db")
        monkeypatch.setenv("AUTH_JWT_SECRET", "s3cret")
        monkeypatch.setenv("PUSHER_APP_ID", "1")
        monkeypatch.setenv("PUSHER_KEY", "k")
        monkeypatch.setenv("PUSHER_SECRET", "s")
        monkeypatch.setenv("PUSHER_CLUSTER", "eu")
        monkeypatch.setenv("RESEND_API_KEY", "re_123")
        monkeypatch.setenv("RECAPTCHA_SECRET_KEY", "captcha")
        return Settings(_env_file=None)

    def test_views(self, settings: Settings):
        assert isinstance(settings.database, DatabaseConfig)
        assert settings.database.url == "sqlite+aiosqlite:///./dev.db"
        assert isinstance(settings.cors, CORSConfig)
        assert isinstance(settings.auth, AuthConfig)
        assert settings.auth.jwt_secret == "s3cret"
        assert settings.auth.jwt_algorithm == "HS256"
        assert isinstance(settings.pusher, PusherConfig)
        assert settings.pusher.is_configured is True
        assert isinstance(settings.mail, MailConfig)
        assert settings.mail.resend_api_key == "re_123"
        assert isinstance(settings.recaptcha, RecaptchaConfig)
        assert settings.recaptcha.secret_key == "captcha"

    @pytest.mark.parametrize("missing", ["app_id", "key", "secret", "cluster"])
    def test_pusher_needs_every_credential(self, missing):
        values = {"app_id": "1", "key": "k", "secret": "s", "cluster": "eu", missing: ""}
        assert PusherConfig(**values).is_configured is False
