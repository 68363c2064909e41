"""Application configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="null",
    )

    # Application
    app_name: str = Field(default="Clinic Scheduler API", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    api_v1_prefix: str = Field(default="/api/v1", alias="API_V1_PREFIX")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    reload: bool = Field(default=False, alias="RELOAD")

    # JWT. No default secret: the app refuses to start without one.
    jwt_secret: str = Field(..., alias="JWT_SECRET", min_length=1)
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_hours: int = Field(default=24, alias="ACCESS_TOKEN_EXPIRE_HOURS")

    # Accounts
    password_hash_rounds: int = Field(default=10, alias="PASSWORD_HASH_ROUNDS")
    allow_admin_registration: bool = Field(default=True, alias="ALLOW_ADMIN_REGISTRATION")

    # Demo data
    seed_demo_data: bool = Field(default=True, alias="SEED_DEMO_DATA")
    seed_days: int = Field(default=7, alias="SEED_DAYS")
    seed_slot_hours_str: str = Field(default="9,10,11,14,15,16", alias="SEED_SLOT_HOURS")
    seed_timezone: str = Field(default="UTC", alias="SEED_TIMEZONE")

    @property
    def seed_slot_hours(self) -> list[int]:
        """Get seeded slot start hours as a list."""
        return [int(hour) for hour in self.seed_slot_hours_str.split(",") if hour.strip()]

    # CORS
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")

    @property
    def cors_origins(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]


# Global settings instance
settings = get_settings()
