"""Tests for shared/config.py."""

import pytest
from unittest.mock import patch
import os

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings(_env_file=None)
        assert settings.app_name == "Quiz API"
        assert settings.app_version == "0.1.0"
        assert settings.port == 8000
        assert settings.host == "0.0.0.0"
        assert settings.jwt_algorithm == "HS256"
        assert settings.jwt_expire_minutes == 60 * 24 * 7
        assert settings.rate_limit_window == 900

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000", "RATE_LIMIT_REQUESTS": "5"}):
            settings = Settings(_env_file=None)
            assert settings.debug is True
            assert settings.port == 9000
            assert settings.rate_limit_requests == 5

    def test_loads_supabase_config_from_env(self):
        with patch.dict(os.environ, {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_SERVICE_ROLE_KEY": "test-service-key",
        }):
            settings = Settings(_env_file=None)
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_service_role_key == "test-service-key"

    def test_is_production(self):
        assert Settings(_env_file=None, environment="Production").is_production() is True
        assert Settings(_env_file=None, environment="development").is_production() is False


class TestMailConfigured:
    def test_requires_sender_and_region(self):
        settings = Settings(_env_file=None, mail_from="quiz@example.com", aws_region="eu-west-1")
        assert settings.mail_configured is True

    def test_static_keys_optional(self):
        settings = Settings(
            _env_file=None,
            mail_from="quiz@example.com",
            aws_region="eu-west-1",
            aws_access_key_id="",
            aws_secret_access_key="",
        )
        assert settings.mail_configured is True

    @pytest.mark.parametrize("missing", ["mail_from", "aws_region"])
    def test_any_missing_value_disables_mail(self, missing):
        values = {"mail_from": "quiz@example.com", "aws_region": "eu-west-1"}
        values[missing] = ""
        assert Settings(_env_file=None, **values).mail_configured is False


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
