# application settings loaded from environment variables and .env
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).parent.parent.parent

class Settings(BaseSettings):
    PROJECT_NAME: str = "Mroomy Post Generator API"
    PROJECT_VERSION: str = "1.0.0"

    # Anthropic configuration
    ANTHROPIC_API_KEY: Optional[str] = None
    ANTHROPIC_MODEL: str = "claude-sonnet-4-5-20250929"
    ANTHROPIC_BASE_URL: str = "https://api.anthropic.com"
    ANTHROPIC_VERSION: str = "2023-06-01"
    ANTHROPIC_TIMEOUT: Optional[float] = None  # seconds, unset means wait for the provider

    # generation parameters
    MAX_TOKENS: int = 4000
    TEMPERATURE: float = 0.7

    # prompt templates
    PROMPTS_DIR: Path = BASE_DIR / "prompts"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

settings = Settings()
