"""
Unit tests for application settings and the config exports.
"""

import pytest
from pydantic import ValidationError

import config
from config import Settings


def make_settings(**overrides) -> Settings:
    values = {
        "supabase_url": "https://test-project.supabase.co",
        "supabase_key": "test-anon-key",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("API_KEY", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    """Tests for Settings validation"""

    def test_defaults(self):
        settings = make_settings()

        assert settings.environment == "development"
        assert settings.api_key is None
        assert settings.is_production is False
        assert settings.import_max_rows == 10000

    def test_production_requires_api_key(self):
        with pytest.raises(ValidationError) as exc:
            make_settings(environment="production")

        assert "API_KEY is required" in str(exc.value)

    def test_production_with_api_key(self):
        settings = make_settings(environment="production", api_key="secret-key")

        assert settings.is_production is True
        assert settings.api_key == "secret-key"

    def test_api_key_optional_outside_production(self):
        assert make_settings(environment="staging").api_key is None

    def test_only_used_supabase_credentials(self):
        assert "supabase_service_key" not in Settings.model_fields


class TestConfigExports:

    def test_exports(self):
        assert set(config.__all__) == {
            "settings",
            "get_settings",
            "Settings",
            "get_supabase_client",
            "store_error",
            "check_connection",
        }
