"""Application configuration."""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "svg_holder"
    mongodb_collection: str = "svgs"
    mongodb_timeout_ms: int = 10000

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = True

    # CORS
    cors_origins: List[str] = [
        "https://svgviewer-alpha.vercel.app",
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Uploads
    max_upload_size: int = 5 * 1024 * 1024
    request_timeout_seconds: float = 30.0

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    @property
    def is_development(self) -> bool:
        """Whether internal error details may be exposed to clients."""
        return self.environment.lower() == "development"


settings = Settings()
