from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from enum import Enum

class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"

class StoreBackend(str, Enum):
    MEMORY = "memory"
    SQL = "sql"

class Settings(BaseSettings):
    # Basic Settings
    APP_NAME: str = "Mock Interview Coach"
    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT
    DEBUG: bool = True
    API_PREFIX: str = "/api"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "DEBUG"

    # Interview flow
    MAX_TURNS: int = 8
    FEEDBACK_DELIMITER: str = "; "

    # Voice
    VOICE_CAPTURE_TIMEOUT: float | None = None

    # Storage
    STORE_BACKEND: StoreBackend = StoreBackend.SQL
    DATABASE_URL: str = "sqlite:///./interview_sessions.db"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra='ignore'
    )

@lru_cache
def get_settings() -> Settings:
    return Settings()
