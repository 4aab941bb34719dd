from datetime import date
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Shift Calendar"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    database_url: str = "postgresql+asyncpg://shiftcal:shiftcal@db:5432/shiftcal"
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Rotation anchor: team A works a day shift on this date.
    rotation_reference_date: date = date(2024, 5, 29)

    # Values used when a profile is created on first access.
    default_team_name: str = "A조"
    default_total_annual_leave: float = 15.0
    default_total_sick_leave: float = 0.0
    default_total_special_leave: float = 0.0


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
