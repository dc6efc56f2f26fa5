"""
Configuration module using Pydantic Settings.
Handles all environment variables and app configuration.
"""

from typing import List, Optional
from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # App settings
    app_name: str = Field(default="project-analytics-api", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    environment: str = Field(default="production", description="Environment name")

    # API
    api_prefix: str = Field(default="/api/v1", description="API path prefix")
    cors_origins: str = Field(default="", description="CORS allowed origins (comma-separated)")

    # Analytics
    anomaly_detection_sensitivity: float = Field(
        default=2.0,
        gt=0,
        description="Z-score above which an expense is flagged as anomalous"
    )
    default_forecast_periods: int = Field(default=12, ge=1, description="Periods forecast when none are requested")
    max_forecast_periods: int = Field(default=60, ge=1, description="Upper bound on requested forecast periods")
    max_history_points: int = Field(
        default=10000,
        ge=10,
        description="Largest history or expense list accepted from a request"
    )

    # Monitoring and logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, ge=1, le=65535, description="Server port")

    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        if not self.cors_origins:
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @validator("log_level")
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v.upper()

    @validator("environment")
    def validate_environment(cls, v):
        """Validate environment."""
        valid_envs = ["development", "testing", "staging", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Invalid environment. Must be one of: {valid_envs}")
        return v.lower()

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def docs_url(self) -> Optional[str]:
        """Get docs URL based on environment."""
        return "/docs" if self.debug or self.is_development else None

    @property
    def openapi_url(self) -> Optional[str]:
        """Get OpenAPI URL based on environment."""
        return "/openapi.json" if self.debug or self.is_development else None


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get settings instance. Useful for dependency injection."""
    return settings
