"""
Application configuration using pydantic-settings.
"""
from typing import List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from carousel.models.enums import ApifyMode, LLMProviderType


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    PROJECT_NAME: str = "YouTube Carousel Generator"
    BACKEND_CORS_ORIGINS: Union[List[str], str] = ["*"]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        return v

    # Concept extraction
    CONCEPT_LLM_PROVIDER: LLMProviderType = LLMProviderType.GEMINI

    # Gemini API
    GEMINI_MODEL_NAME: str = "gemini-2.0-flash"
    GEMINI_API_KEY: Optional[str] = None

    # Groq API (chat models and Whisper speech-to-text)
    GROQ_MODEL_NAME: str = "llama-3.3-70b-versatile"
    GROQ_TRANSCRIPTION_MODEL: str = "whisper-large-v3"
    GROQ_API_KEY: Optional[str] = None

    # Apify remote transcript scraper
    APIFY_API_TOKEN: Optional[str] = None
    APIFY_ACTOR_ID: str = "im_broke~youtube-transcript-scraper"
    APIFY_BASE_URL: str = "https://api.apify.com"
    APIFY_MODE: ApifyMode = ApifyMode.POLL
    APIFY_POLL_INTERVAL_SECONDS: float = 2.0
    APIFY_MAX_WAIT_SECONDS: float = 60.0

    # DataImpulse Proxy
    DATAIMPULSE_HOST: Optional[str] = None
    DATAIMPULSE_PORT: Optional[int] = None
    DATAIMPULSE_LOGIN: Optional[str] = None
    DATAIMPULSE_PASSWORD: Optional[str] = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = "logs/carousel.log"

    # Network and scratch space
    HTTP_TIMEOUT_SECONDS: float = 20.0
    AUDIO_TEMP_DIR: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
