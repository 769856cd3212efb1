"""
Configuration settings for the Video Analyst generation layer.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Video Analyst"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # === Generation backend (OpenAI-compatible chat API) ===
    GENERATION_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/openai"
    GENERATION_API_KEY: str = ""
    GENERATION_TIMEOUT: float = 60.0  # seconds, per backend call

    # Priority order: first = most preferred
    BACKEND_MODELS: list[str] = [
        "gemini-2.0-flash-lite",
        "gemini-1.5-flash",
        "gemini-1.5-flash-8b",
        "gemini-2.0-flash-exp",
    ]

    # === LLM Generation Parameters ===
    LLM_TEMPERATURE: float = 0.2
    LLM_MAX_TOKENS: int = 2048

    # === Retry & Fallback ===
    MAX_ATTEMPTS: int = 3  # per backend
    INITIAL_RETRY_DELAY: float = 1.0  # seconds, doubled after each failed attempt
    GENERATION_TIMEOUT_SECONDS: Optional[float] = None  # overall budget for one generate()

    # === Transcripts ===
    TRANSCRIPT_LANGUAGES: list[str] = ["en"]  # caption languages, most preferred first

    # === Grounding ===
    TOPIC_FALLBACK_COUNT: int = 5

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
