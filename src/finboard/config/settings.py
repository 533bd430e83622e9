"""Application settings and configuration."""

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Financial Analytics Dashboard API"
    app_version: str = "0.1.0"

    # "development" exposes unexpected error details in 500 responses
    environment: str = "production"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./finboard.db"

    # Bearer token verification
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"

    cors_origins: list[str] = ["http://localhost:5173"]

    # Market data settings
    quote_provider: Literal["alphavantage", "yahoo", "stub"] = "alphavantage"
    alpha_vantage_api_key: Optional[str] = None
    alpha_vantage_base_url: str = "https://www.alphavantage.co/query"
    quote_cache_ttl_seconds: int = 300
    quote_timeout_seconds: float = 10.0
    quote_max_workers: int = 8
    history_max_points: int = 100

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (used by tests and tooling)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
