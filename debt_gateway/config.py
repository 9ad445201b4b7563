"""Configuration management using Pydantic Settings"""

from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Record store
    store_backend: Literal["sql", "fixture"] = "sql"
    database_url: Optional[str] = None
    fixture_path: str = "mock/db.json"

    # Connection pool (sql backend only)
    db_pool_size: int = 10
    db_max_overflow: int = 10
    db_pool_recycle_seconds: int = 3600

    # Service
    service_name: str = "debt-gateway"
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]


settings = Settings()
