from pydantic_settings import BaseSettings
from functools import lru_cache

class Settings(BaseSettings):
    # Database settings
    DATABASE_URL: str = "sqlite:///./gradebook.db"
    DATABASE_ECHO: bool = False

    # API settings
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Gradebook API"
    DEBUG: bool = True
    CORS_ORIGINS: list = ["*"]

    # Logging settings
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    # Grading settings
    DEFAULT_PROCESS_WEIGHT: float = 50.0
    DEFAULT_FINAL_EXAM_WEIGHT: float = 50.0
    MAX_SCORE: float = 10.0
    SCORE_DECIMALS: int = 2

    class Config:
        env_file = ".env"
        case_sensitive = True

@lru_cache()
def get_settings() -> Settings:
    """
    Get settings instance with caching
    Returns:
        Settings instance
    """
    return Settings()
