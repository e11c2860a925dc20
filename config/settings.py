"""Application settings using Pydantic Settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    app_name: str = "FitQuest"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Remote API (users snapshot + squad chat)
    api_base_url: str = "http://localhost:4000"
    sync_timeout: float = 10.0

    # Tracker Configuration
    reference_year: int = 2026
    default_theme: str = "dark"

    # Chat Configuration
    message_ttl_seconds: int = 7 * 24 * 60 * 60
    chat_poll_interval: float = 5.0

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
