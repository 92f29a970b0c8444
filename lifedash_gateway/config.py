"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    nessie_api_base: str = "http://api.nessieisreal.com"
    nessie_api_key: str = ""

    # Service
    service_name: str = "lifedash-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Analysis defaults
    anomaly_threshold: float = 1.5  # Standard deviations from the category mean
    recurring_timeframe_days: int = 90
    recurring_min_occurrences: int = 2
    trend_granularity: str = "monthly"


settings = Settings()
