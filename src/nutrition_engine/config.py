"""Engine configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    environment: str = _ENVIRONMENT
    debug: bool = False
    log_level: str = "INFO"
    rounding_decimals: int = 2
    default_portion_grams: float = 100.0
    goal_adjustment_kcal: float = 500.0

    model_config = SettingsConfigDict(
        env_prefix="NUTRITION_ENGINE_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
