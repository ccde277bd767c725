"""Configuration for the transaction processor.

Every section reads from environment variables with its own prefix.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"


class AppConfig(BaseSettings):
    name: str = Field(default="transaction-validator")
    version: str = Field(default="1.0.0")
    log_level: LogLevel = Field(default=LogLevel.INFO)

    model_config = SettingsConfigDict(env_prefix="APP_")

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        if isinstance(v, LogLevel):
            return v
        return LogLevel(v.upper())


class ObservabilityConfig(BaseSettings):
    log_record_format: LogFormat = Field(default=LogFormat.CONSOLE)

    model_config = SettingsConfigDict(env_prefix="OBS_")


class ProcessingConfig(BaseSettings):
    # Number of leading card digits looked up in the BIN table
    bin_prefix_length: int = Field(default=10, gt=0)
    debit_card_type: str = Field(default="DC")
    balance_decimals: int = Field(default=2, ge=0)

    model_config = SettingsConfigDict(env_prefix="PROCESSING_")


class ServerConfig(BaseSettings):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    model_config = SettingsConfigDict(env_prefix="SERVER_")


class Settings(BaseSettings):
    app: AppConfig = Field(default_factory=AppConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings()
