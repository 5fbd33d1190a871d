"""Configuration management for the provider error mapping library.

Configuration is loaded from environment variables. The rule set itself
lives in a JSON file referenced by ``ERROR_MAPPING_RULES_PATH``.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_REASON_PATTERN = "'%s' - '%s'"


def check_reason_pattern(pattern: str) -> None:
    """Raise ValueError unless the pattern consumes exactly code and description."""
    try:
        pattern % ("code", "description")
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"reason_pattern must take two '%s' placeholders (code, description): {pattern!r}"
        ) from exc


class AppEnvironment(str, Enum):
    LOCAL = "local"
    TEST = "test"
    PROD = "prod"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogRecordFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"


class AppConfig(BaseSettings):
    name: str = Field(default="provider-error-mapping")
    env: AppEnvironment = Field(default=AppEnvironment.LOCAL)
    version: str = Field(default="0.1.0")
    debug: bool = Field(default=False)
    log_level: LogLevel = Field(default=LogLevel.INFO)

    model_config = SettingsConfigDict(env_prefix="APP_")

    @field_validator("env", mode="before")
    @classmethod
    def validate_env(cls, v: str | AppEnvironment) -> AppEnvironment:
        if isinstance(v, AppEnvironment):
            return v
        return AppEnvironment(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        if isinstance(v, LogLevel):
            return v
        return LogLevel(v.upper())


class ErrorMappingConfig(BaseSettings):
    rules_path: str = Field(default="")
    reason_pattern: str = Field(default=DEFAULT_REASON_PATTERN)
    encoding: str = Field(default="utf-8")

    model_config = SettingsConfigDict(env_prefix="ERROR_MAPPING_")

    @field_validator("reason_pattern", mode="after")
    @classmethod
    def validate_reason_pattern(cls, v: str) -> str:
        check_reason_pattern(v)
        return v


class ObservabilityConfig(BaseSettings):
    service_name: str = Field(default="provider-error-mapping")
    log_record_format: LogRecordFormat = Field(default=LogRecordFormat.JSON)

    model_config = SettingsConfigDict(env_prefix="OTEL_")


class Settings(BaseSettings):
    app: AppConfig = Field(default_factory=AppConfig)
    mapping: ErrorMappingConfig = Field(default_factory=ErrorMappingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reload_settings() -> Settings:
    """Reload settings (useful for testing)."""
    get_settings.cache_clear()
    return get_settings()
