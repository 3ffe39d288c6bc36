"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="LENDING_", extra="ignore"
    )

    # Service
    service_name: str = "lending-engine"
    log_level: str = "INFO"

    # Pricing
    base_interest_rate: float = 12.0  # annual %, adjusted by credit score


settings = Settings()
