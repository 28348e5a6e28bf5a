"""Application configuration using Pydantic Settings."""

from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Text-generation endpoint (Ollama-compatible /api/generate)
    LLM_ENDPOINT: str = "http://localhost:11434/api/generate"
    LLM_MODEL: str = "llama3"
    LLM_TIMEOUT: float = 120.0

    # Analysis
    HISTORY_LIMIT: int = 10  # Documents embedded in cross-check prompts
    MAX_FINDINGS: int = 2  # Contradictions / motives requested per check
    DEFAULT_PIPELINE: Literal["fixed", "planned"] = "fixed"

    # Session
    DEFAULT_SUBJECT_NAME: str = "Politician X"

    # Server
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


# Global settings instance
settings = Settings()
