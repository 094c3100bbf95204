"""
Centralized configuration management for the rewrite gateway.

Uses pydantic-settings for type-safe configuration with environment variable support.
"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Completion service (OpenAI-compatible chat completions API)
    openai_api_key: Optional[str] = None
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"
    completion_timeout: float = 30.0  # seconds
    completion_temperature: float = 1.0  # high temperature favors variability
    completion_max_tokens: int = 2000

    # Input handling
    max_field_length: int = 6000
    default_tone: str = "friendly, conversational"

    # Humanization
    enable_humanization: bool = True
    humanization_seed: Optional[int] = None  # set for reproducible output

    # API Configuration
    api_title: str = "Anecdote Rewriter"
    api_version: str = "1.0.0"
    cors_allow_origins: List[str] = ["*"]
    log_level: str = "INFO"

    # Monitoring
    enable_metrics: bool = True

    class Config:
        """Pydantic config."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """
    Get application settings.

    Returns:
        Settings instance
    """
    return settings


def reload_settings():
    """Reload settings from environment (useful for testing)."""
    global settings
    settings = Settings()
    return settings
