"""Configuration settings for the orchestration engine."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database (session store)
    database_url: str = "sqlite:///./orchestra.db"

    # Generative backends
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    image_model: str = "gpt-image-1"
    grounding_max_searches: int = 3

    # Orchestrator settings
    analysis_agent_id: str = "orchestrator"
    agent_timeout_seconds: float = 120.0
    per_agent_latency_ms: int = 5000  # display-only duration estimate
    default_estimated_tokens: int = 1000
    chars_per_token: int = 4  # approximation, not a tokenizer

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    redact_sensitive_data: bool = True

    # CORS
    cors_origins: str = "*"  # Comma-separated origins or * for all

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
