"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="FINPULSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./finpulse.db"

    # Remote analysis endpoint (optional; local quick analysis when unset)
    analysis_api_url: Optional[str] = None
    analysis_timeout_seconds: float = 10.0
    analysis_max_retries: int = 1  # Only applied to idempotent GETs
    analysis_backoff_seconds: float = 0.5

    # Aggregation
    quick_analysis_top_n: int = Field(8, ge=1, le=8)

    # Service
    service_name: str = "finpulse"
    log_level: str = "INFO"


settings = Settings()
