from typing import List, Optional
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./promotion.db"
    LOG_LEVEL: str = "INFO"
    SCHEDULER_ENABLED: bool = True
    CORS_ORIGINS: List[str] = ["*"]

    # Narration endpoint (any OpenAI-compatible chat completions server)
    LLM_BASE_URL: Optional[str] = None
    LLM_API_KEY: Optional[str] = None
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_TIMEOUT_SECONDS: float = 120.0
    NARRATION_SIMPLIFIED_PROMPT: bool = False

    # Go up two levels from core/config.py → project root
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parents[2] / ".env"),
        extra="ignore",
    )

settings = Settings()
