"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me-in-production"  # noqa: S105


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./dealership.db")

    # JWT
    jwt_secret: str = Field(default=DEFAULT_JWT_SECRET)
    # Retired secrets still accepted when verifying tokens, newest first
    jwt_previous_secrets: list[str] = Field(default_factory=list)
    jwt_algorithm: str = Field(default="HS256")
    jwt_expiration_seconds: int = Field(default=3600, gt=0)

    # Password hashing
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # Inventory
    inventory_writes_require_auth: bool = Field(default=True)

    # API
    environment: str = Field(default="development")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = Field(default="INFO")
    host: str = Field(default="0.0.0.0")  # noqa: S104
    port: int = Field(default=5000)

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production":
            if self.jwt_secret == DEFAULT_JWT_SECRET:
                raise ValueError("JWT_SECRET must be changed in production")
            if self.database_url.startswith("sqlite"):
                raise ValueError("DATABASE_URL should not use SQLite in production")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
