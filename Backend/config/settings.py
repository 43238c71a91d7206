import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


@lru_cache
def get_env_filename():
    runtime_env = os.getenv("ENV")
    return f".env.{runtime_env}" if runtime_env else ".env"


class Settings(BaseSettings):
    ENVIRONMENT: str = "production"
    APP_NAME: str = "BatchQuery Image Analysis"
    APP_VERSION: str = "0.1.0"
    APP_PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    OPENAI_API_KEY: Optional[str] = None
    MOCK_OPENAI: bool = False

    IMAGE_QUERY_AGENT_MODEL: str = "gpt-4o"
    IMAGE_QUERY_AGENT_MAX_TOKENS: int = 400

    MAX_IMAGES_PER_REQUEST: int = 4
    CORS_ALLOW_ORIGINS: str = "*"

    class Config:
        env_file = get_env_filename()
        # .env is shared with the client settings (BATCHQUERY_*)
        extra = "ignore"


@lru_cache
def get_settings():
    return Settings()
