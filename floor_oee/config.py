"""
Floor OEE - Configuration Management

This module handles all configuration settings for the Floor OEE service.
It uses Pydantic Settings for environment variable management and validation.
"""

import os
from typing import List, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application Settings
    APP_NAME: str = "Floor OEE API"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="development")
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)
    LOG_LEVEL: str = Field(default="INFO")

    # CORS Settings
    ALLOWED_ORIGINS: Union[List[str], str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"]
    )

    # Input Data Settings
    DATA_DIRECTORY: str = Field(default=".")
    STATUS_FILE: str = Field(default="status.json")
    MANUAL_STATUS_FILE: str = Field(default="manual_status.json")
    PRODUCTION_FILE: str = Field(default="production.json")
    TIMESTAMP_FORMAT: str = Field(default="%Y/%m/%d %H:%M:%S")

    # Downtime Settings
    DEFAULT_DOWNTIME_REASON: str = Field(default="Status Down")

    # Monitoring Settings
    ENABLE_METRICS: bool = Field(default=True)

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def parse_allowed_origins(cls, v):
        """Parse comma-separated origins string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "staging", "production", "testing"]
        if v not in allowed_envs:
            raise ValueError(f"ENVIRONMENT must be one of {allowed_envs}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level setting."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of {allowed_levels}")
        return v.upper()

    def data_path(self, filename: str) -> str:
        """Resolve an input file name against the data directory."""
        if os.path.isabs(filename):
            return filename
        return os.path.join(self.DATA_DIRECTORY, filename)


# Environment-specific configurations
class DevelopmentSettings(Settings):
    """Development environment settings."""
    LOG_LEVEL: str = "DEBUG"


class StagingSettings(Settings):
    """Staging environment settings."""
    LOG_LEVEL: str = "INFO"


class ProductionSettings(Settings):
    """Production environment settings."""
    LOG_LEVEL: str = "WARNING"


def get_settings() -> Settings:
    """Get settings based on environment."""
    env = os.getenv("ENVIRONMENT", "development")

    if env == "development":
        return DevelopmentSettings()
    elif env == "staging":
        return StagingSettings()
    elif env == "production":
        return ProductionSettings()
    else:
        return Settings()


# Export the appropriate settings instance
settings = get_settings()
