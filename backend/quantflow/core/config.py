"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "QuantFlow Backend"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Simulated market data
    history_days: int = 730  # Calendar days of history per series
    market_data_seed: Optional[int] = None  # Fixed seed makes every series reproducible
    default_time_range: str = "1Y"

    # LLM Providers
    gemini_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    llm_primary_provider: str = "gemini"  # Options: gemini, anthropic, openai
    llm_chat_model: str = "gemini-2.5-pro"
    llm_image_model: str = "gemini-2.5-flash-image"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 2048

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
