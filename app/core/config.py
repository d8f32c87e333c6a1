"""
Centralized application configuration implementing the 12-Factor App methodology.
Every value can be overridden through environment variables or a .env file.
"""
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Immutable configuration schema backed by environment variables."""

    APP_NAME: str = "SAC Simulator"
    VERSION: str = "1.0.0"
    DEBUG: bool = False

    HOST: str = "0.0.0.0"  # nosec
    PORT: int = 8000

    # The web client and third-party front-ends may call the API from any origin
    CORS_ORIGINS: List[str] = ["*"]

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()
