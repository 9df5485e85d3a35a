"""
BrandAgent Backend - Configuration Tests
==========================================

What we test:
    ✅ validate_required() refuses an empty signing secret
    ✅ field validators normalize or reject log level and JWT algorithm
    ✅ environment variables override defaults
    ✅ the app lifespan aborts startup on bad configuration
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from brandagent.config import Settings
from brandagent.exceptions import ConfigurationError
from brandagent.main import create_app


def make_settings(**overrides):
    values = {"jwt_secret": "config-test-secret-0123456789abcdef", "_env_file": None}
    values.update(overrides)
    return Settings(**values)


class TestValidateRequired:

    @pytest.mark.parametrize("secret", ["", "   "])
    def test_missing_secret_raises(self, secret):
        settings = make_settings(jwt_secret=secret)
        with pytest.raises(ConfigurationError) as exc_info:
            settings.validate_required()
        assert "JWT_SECRET" in str(exc_info.value)

    def test_configured_secret_passes(self):
        make_settings().validate_required()


class TestFieldValidators:

    def test_log_level_is_uppercased(self):
        assert make_settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            make_settings(log_level="LOUD")

    def test_jwt_algorithm_is_uppercased(self):
        assert make_settings(jwt_algorithm="hs512").jwt_algorithm == "HS512"

    @pytest.mark.parametrize("algorithm", ["RS256", "none", "ES256"])
    def test_asymmetric_or_none_algorithm_rejected(self, algorithm):
        with pytest.raises(PydanticValidationError):
            make_settings(jwt_algorithm=algorithm)

    def test_bcrypt_rounds_range(self):
        with pytest.raises(PydanticValidationError):
            make_settings(bcrypt_rounds=3)

    def test_cors_origins_list(self):
        settings = make_settings(cors_origins="https://a.example, https://b.example,")
        assert settings.cors_origins_list == ["https://a.example", "https://b.example"]


class TestEnvironment:

    def test_defaults(self, monkeypatch):
        for name in ("PORT", "HOST", "DATABASE_URL", "JWT_EXPIRES_HOURS", "SEED_DEMO_ACCOUNTS"):
            monkeypatch.delenv(name, raising=False)
        settings = make_settings()
        assert settings.port == 3000
        assert settings.database_url == "sqlite+aiosqlite:///./brand.db"
        assert settings.jwt_expires_hours == 24
        assert settings.seed_demo_accounts is True

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("JWT_SECRET", "env-secret-0123456789abcdef0123456789")
        monkeypatch.setenv("SEED_DEMO_ACCOUNTS", "false")

        settings = Settings(_env_file=None)

        assert settings.port == 8080
        assert settings.jwt_secret == "env-secret-0123456789abcdef0123456789"
        assert settings.seed_demo_accounts is False


class TestStartup:

    @pytest.mark.asyncio
    async def test_lifespan_refuses_to_start_without_secret(self, tmp_path):
        settings = make_settings(
            jwt_secret="",
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'never.db'}",
        )
        app = create_app(settings)

        with pytest.raises(ConfigurationError):
            async with app.router.lifespan_context(app):
                pass

        assert not (tmp_path / "never.db").exists()
