from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List, Optional


class Settings(BaseSettings):
    # AstrologyAPI.com (Basic auth: user_id:api_key)
    ASTROLOGY_API_KEY: str = ""
    ASTROLOGY_USER_ID: str = "default"
    ASTROLOGY_API_BASE_URL: str = "https://json.astrologyapi.com/v1"

    # Gemini
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_API_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/models"

    # Transport timeout per outbound call, in seconds
    HTTP_TIMEOUT_SECONDS: float = 30.0

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        extra = "allow"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
