"""
JobTrack - Application configuration.

Centralized configuration using Pydantic Settings for environment variable management.

Environment Variables:
    All settings can be overridden via environment variables with JOBTRACK_ prefix.

    AI Settings:
        JOBTRACK_AI_ENABLED=true         - Toggle AI features
        JOBTRACK_OPENAI_API_KEY=...      - API key (OPENAI_API_KEY is also accepted)
        JOBTRACK_OPENAI_MODEL=...        - Model to use (e.g., gpt-3.5-turbo)
        JOBTRACK_AI_TIMEOUT=30           - Seconds before an AI request is abandoned

    Storage Settings:
        JOBTRACK_DATA_DIR=data           - Directory holding the jobs document
        JOBTRACK_JOBS_FILE=jobs.json     - File name of the jobs document
"""
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class AISettings(BaseSettings):
    """
    AI provider configuration settings.

    Any OpenAI-compatible chat completions endpoint works. Without an API key
    job analysis uses the keyword rules only.
    """
    ai_enabled: bool = True
    openai_api_key: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("JOBTRACK_OPENAI_API_KEY", "OPENAI_API_KEY"),
    )
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-3.5-turbo"
    ai_temperature: float = 0.7
    ai_max_tokens: int = 500
    ai_timeout: float = 30.0

    class Config:
        env_prefix = "JOBTRACK_"
        env_file = ".env"
        extra = "ignore"


class StorageSettings(BaseSettings):
    """JSON document storage settings."""
    data_dir: str = "data"
    jobs_file: str = "jobs.json"

    @property
    def jobs_path(self) -> Path:
        return Path(self.data_dir) / self.jobs_file

    class Config:
        env_prefix = "JOBTRACK_"
        env_file = ".env"
        extra = "ignore"


class Settings(BaseSettings):
    """Combined application settings."""
    ai: AISettings = AISettings()
    storage: StorageSettings = StorageSettings()

    # CORS allowed origins (comma-separated, e.g. "http://localhost:3000,https://myapp.com")
    allowed_origins: str = "*"

    class Config:
        env_prefix = "JOBTRACK_"
        env_file = ".env"
        extra = "ignore"


# Global settings instance
settings = Settings()
