"""Configuration management for ridertrack."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # SQLite Configuration
    sqlite_db_path: str = Field(default="./data/ridertrack.db", description="Path to the SQLite database file")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="development", description="Deployment environment name")

    # Device identity storage for the rider client
    device_storage_path: str = Field(
        default="~/.ridertrack/device.json",
        description="JSON file holding the rider client's device id and session",
    )


# Application Constants
class Constants:
    """Application-wide constants."""

    # Device identity
    DEVICE_ID_KEY: str = "rider_device_id"
    SESSION_KEY: str = "rider_session"
    DEVICE_ID_LENGTH: int = 32
    USER_AGENT_TAIL_LENGTH: int = 20
    SESSION_TTL_DAYS: int = 30  # Rolling window from the last session write

    # Aggregation windows
    ACTIVE_RIDER_WINDOW_DAYS: int = 3
    WEEK_START_WEEKDAY: int = 6  # Sunday (0=Monday, 6=Sunday)

    # Activity validation bounds
    MIN_EARNINGS: float = 0.0
    MAX_HOURS_PER_DAY: float = 24.0
    MIN_RATING: int = 1
    MAX_RATING: int = 5
    MOBILE_NUMBER_DIGITS: int = 10

    # Goal progress
    MAX_PROGRESS_PERCENTAGE: float = 100.0

    # Pagination Defaults
    DEFAULT_PER_PAGE_LIMIT: int = 100  # Default pagination limit for list queries
    FLEET_PER_PAGE_LIMIT: int = 10000  # Fleet views read every rider and activity in one page


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
