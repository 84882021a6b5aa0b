import logging
from decimal import Decimal
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Project
    PROJECT_NAME: str = "billsplit"
    PROJECT_VERSION: str = "0.1.0"
    DESCRIPTION: str = "Balance and settlement engine for shared expenses"

    # Split validation
    SPLIT_TOLERANCE: Decimal = Decimal("0.01")
    PERCENTAGE_TOLERANCE: Decimal = Decimal("0.1")

    # Settlement
    SETTLED_THRESHOLD: Decimal = Decimal("0.01")
    MAX_ITERATION_FACTOR: int = 2

    # Logging
    LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_prefix="BILLSPLIT_",
        extra="ignore"
    )

settings = Settings()


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Apply the configured level to the package logger and return it."""
    logger = logging.getLogger("billsplit")
    logger.setLevel((level or settings.LOG_LEVEL).upper())
    return logger
