"""Unit tests for configuration module."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from error_mapping.core.config import (
    DEFAULT_REASON_PATTERN,
    AppConfig,
    AppEnvironment,
    ErrorMappingConfig,
    LogRecordFormat,
    Settings,
    get_settings,
    reload_settings,
)


class TestConfig:
    """Tests for configuration classes."""

    def test_app_config_defaults(self):
        """Test AppConfig has correct defaults."""
        with patch.dict("os.environ", {}, clear=True):
            config = AppConfig()
        assert config.name == "provider-error-mapping"
        assert config.env is AppEnvironment.LOCAL
        assert config.version == "0.1.0"
        assert config.debug is False

    def test_app_config_from_env(self):
        """Test AppConfig reads APP_ variables."""
        with patch.dict("os.environ", {"APP_ENV": "prod", "APP_LOG_LEVEL": "debug"}):
            config = AppConfig()
        assert config.env is AppEnvironment.PROD
        assert config.log_level.value == "DEBUG"

    def test_error_mapping_config_defaults(self):
        """Test ErrorMappingConfig has correct defaults."""
        with patch.dict("os.environ", {}, clear=True):
            config = ErrorMappingConfig()
        assert config.rules_path == ""
        assert config.reason_pattern == DEFAULT_REASON_PATTERN == "'%s' - '%s'"
        assert config.encoding == "utf-8"

    def test_error_mapping_config_from_env(self):
        """Test ErrorMappingConfig reads ERROR_MAPPING_ variables."""
        env = {
            "ERROR_MAPPING_RULES_PATH": "/etc/provider/errors.json",
            "ERROR_MAPPING_REASON_PATTERN": "%s: %s",
        }
        with patch.dict("os.environ", env):
            config = ErrorMappingConfig()
        assert config.rules_path == "/etc/provider/errors.json"
        assert config.reason_pattern == "%s: %s"

    def test_reason_pattern_must_take_two_values(self):
        """Test reason pattern validation."""
        with pytest.raises(ValidationError):
            ErrorMappingConfig(reason_pattern="%s only")

    def test_get_settings_cached(self):
        """Test that get_settings returns cached instance."""
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2

    def test_reload_settings_clears_cache(self):
        """Test reload_settings builds a new instance."""
        settings1 = get_settings()
        settings2 = reload_settings()
        assert settings1 is not settings2

    def test_settings_has_all_configs(self):
        """Test Settings has all required config objects."""
        settings = Settings()
        assert hasattr(settings, "app")
        assert hasattr(settings, "mapping")
        assert hasattr(settings, "observability")
        assert settings.observability.log_record_format in tuple(LogRecordFormat)
