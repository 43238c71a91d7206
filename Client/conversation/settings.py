from functools import lru_cache

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class ClientSettings(BaseSettings):
    API_BASE_URL: str = "http://127.0.0.1:8000"
    ANALYZE_IMAGES_PATH: str = "/api/analyze-images"
    DEMO_MODE: bool = False
    REQUEST_TIMEOUT_SECONDS: float = 120.0
    ERROR_DISPLAY_SECONDS: float = 10.0

    class Config:
        env_prefix = "BATCHQUERY_"
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_client_settings():
    return ClientSettings()
