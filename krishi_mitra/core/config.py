import os
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    APP_NAME: str = "Krishi Mitra Advisory"
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    # Bound on every translation/classification/transcription/weather call
    COLLABORATOR_TIMEOUT_SECONDS: float = 5.0

    FARMER_HISTORY_LIMIT: int = 5
    ESCALATION_LIST_LIMIT: int = 50
    ANALYTICS_TOP_N: int = 5

    WEATHER_PROVIDER: str = os.environ.get("WEATHER_PROVIDER", "static")
    OPENWEATHERMAP_API_KEY: str = os.environ.get("OPENWEATHERMAP_API_KEY", "")

    SUPPORTED_TTS_LANGUAGES: List[str] = ["en", "ml", "hi"]


settings = Settings()
