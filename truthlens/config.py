from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List
import os

API_KEY_PLACEHOLDER = "your-api-key-here"


class Settings(BaseSettings):
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    ALLOWED_ORIGINS: str = "*"
    STATIC_DIR: str = "public"
    LOG_LEVEL: str = "INFO"

    # Remote providers (Google Cloud AI by default)
    USE_REAL_API: bool = False
    API_KEY: str = API_KEY_PLACEHOLDER
    TEXT_ANALYSIS_API: str = "https://language.googleapis.com/v1/documents:analyzeSentiment"
    IMAGE_ANALYSIS_API: str = "https://vision.googleapis.com/v1/images:annotate"
    VIDEO_ANALYSIS_API: str = "https://videointelligence.googleapis.com/v1/videos:annotate"
    DEEPFAKE_API: str = "https://vision.googleapis.com/v1/images:annotate"
    REMOTE_TIMEOUT_SECONDS: float = 30.0

    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # Simulated processing time per endpoint, 0 disables
    TEXT_DELAY_SECONDS: float = 1.5
    IMAGE_DELAY_SECONDS: float = 2.0
    VIDEO_DELAY_SECONDS: float = 3.0
    DEEPFAKE_DELAY_SECONDS: float = 2.5

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def origins(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def api_key_configured(self) -> bool:
        return bool(self.API_KEY) and self.API_KEY != API_KEY_PLACEHOLDER


@lru_cache()
def get_settings() -> Settings:
    return Settings()
