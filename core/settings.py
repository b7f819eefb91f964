"""
Centralized Settings Configuration

Uses Pydantic Settings to load configuration from environment variables
with validation and type coercion.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str
    db_max_connections: int = 20
    db_stale_timeout: int = 300

    # Auth collaborator
    session_cookie_name: str = "connect.sid"

    # Chat
    chat_history_limit: int = 50

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",  # Frontend dev server
        "http://localhost:5173",  # Vite
        "http://127.0.0.1:5173",
    ]

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"
    service_name: str = "fantasy-sports-hub"

    # Development mode
    development_mode: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is either json or console."""
        lower_v = v.lower()
        if lower_v not in {"json", "console"}:
            raise ValueError("log_format must be 'json' or 'console'")
        return lower_v

    @field_validator("chat_history_limit")
    @classmethod
    def validate_chat_history_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("chat_history_limit must be positive")
        return v


# Default settings instance for convenience
settings = Settings()
