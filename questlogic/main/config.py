"""
Application Settings - Main Layer

Configuration read from environment variables, an optional .env file and
the defaults below.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from questlogic.domain.entities.prediction import DEFAULT_BETA
from questlogic.shared import EnumEnvironment, EnumLogLevel


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    mongo_uri: str = Field(
        default="mongodb://localhost:27017/questlogic",
        description="MongoDB connection URI",
    )
    database_name: str = Field(
        default="questlogic", description="Name of the MongoDB database"
    )
    collection_name: str = Field(
        default="prediction_events",
        description="Collection storing prediction events",
    )

    model_config = SettingsConfigDict(
        env_prefix="DB_", case_sensitive=False, extra="ignore"
    )


class ServiceSettings(BaseSettings):
    """HTTP service metadata and server options."""

    title: str = Field(default="Quest Logic Oracle", description="API title")
    description: str = Field(
        default="Scores the probability of taking an action from behavioral "
        "factors and records predictions for later verification",
        description="API description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="SERVICE_", case_sensitive=False, extra="ignore"
    )


class ScoringSettings(BaseSettings):
    """Scoring engine defaults."""

    default_beta: float = Field(
        default=DEFAULT_BETA,
        description="Beta used when a compute request omits model params",
    )

    model_config = SettingsConfigDict(
        env_prefix="SCORING_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    service: ServiceSettings = Field(default_factory=ServiceSettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Tests patch this to inject different settings.
    """
    return AppSettings()
