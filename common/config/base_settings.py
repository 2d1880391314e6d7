"""
Base settings class for environment configuration.

Uses Pydantic Settings for automatic environment variable loading.
Extend this class for application-specific settings.

Example:
    from common.config import BaseAppSettings

    class Settings(BaseAppSettings):
        SESSION_COOKIE_NAME: str = "token"

    settings = Settings()
    print(settings.MONGODB_URI)
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    """
    Base settings class with common configuration options.

    Automatically loads values from environment variables. Instances are
    frozen: settings are read once at process start and never mutated.
    """

    # ==========================================================================
    # Database Settings
    # ==========================================================================
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "BWU"

    # ==========================================================================
    # Authentication Settings
    # ==========================================================================
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"

    # ==========================================================================
    # Server Settings
    # ==========================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production
    LOG_LEVEL: str = "INFO"

    # CORS Settings (single frontend origin, credentials always allowed)
    CORS_ORIGIN: str = "http://localhost:5173"

    # ==========================================================================
    # Pydantic Settings Configuration
    # ==========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        frozen=True,
    )

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT.lower() == "development"

    def validate_required(self) -> None:
        """
        Validate that required settings are configured.

        Raises:
            ValueError: If required settings are missing
        """
        errors = []

        if self.is_production() and not self.JWT_SECRET:
            errors.append("JWT_SECRET is required in production")

        if self.CORS_ORIGIN.strip() in ("", "*"):
            errors.append("CORS_ORIGIN must name a single origin when credentials are allowed")

        if errors:
            raise ValueError("Configuration errors:\n- " + "\n- ".join(errors))
