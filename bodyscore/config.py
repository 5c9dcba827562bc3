from pydantic_settings import BaseSettings
from typing import Optional
import logging


class Settings(BaseSettings):
    APP_NAME: str = "BodyScore"
    ENV: str = "development"

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s | %(levelname)s | %(message)s"

    # Weight preset applied to new scoring sessions.
    DEFAULT_PRESET: str = "default"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=settings.LOG_FORMAT,
    )
