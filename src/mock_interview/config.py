"""Configuration management for the mock interview core."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Configuration
    debug: bool = Field(False, description="Enable debug mode")
    log_level: str = Field("INFO", description="Logging level")
    max_retries: int = Field(3, description="Maximum retry attempts on concurrent store writes")

    # Session Configuration
    default_difficulty: str = Field("medium", description="Difficulty used when none is requested")
    default_question_count: int = Field(5, description="Questions per session when none is requested")
    min_question_count: int = Field(3, description="Lower bound for questions per session")
    max_question_count: int = Field(10, description="Upper bound for questions per session")
    default_time_limit_minutes: int = Field(60, description="Advisory session time limit")
    min_time_limit_minutes: int = Field(30, description="Smallest advisory time limit accepted")
    session_idle_timeout_minutes: int = Field(
        120, description="Idle minutes after which an in-progress session is abandoned"
    )

    # History Configuration
    history_page_limit: int = Field(50, description="Maximum sessions returned per history page")
    improvement_window: int = Field(20, description="Completed sessions considered for trends")
    recommendation_window: int = Field(5, description="Recent sessions considered for recommendations")


# Global settings instance
settings = Settings()
