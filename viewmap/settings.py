from typing import Literal

from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    """

    link_service_url: str = "http://localhost:8080"
    link_service_timeout_seconds: float = 15.0
    default_window_days: int = 53
    max_window_days: int = 365
    level_scale: Literal["fixed", "relative"] = "fixed"
    level_thresholds: list[int] = [1, 3, 5, 8]
    log_level: str = "INFO"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1
    rate_limit_per_minute: int = 30
    rate_limit_window_seconds: int = 60

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
