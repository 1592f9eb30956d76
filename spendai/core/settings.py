"""Configuration and environment settings for the SpendAI backend."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:3002", "http://localhost:3003"]


class Settings(BaseSettings):
    """Application settings for the SpendAI backend."""

    database_url: str = "sqlite:///jobs/spendai.db"
    upload_backend: Literal["local", "s3"] = "local"
    upload_dir: str = "jobs/uploads"
    max_upload_bytes: int = 10 * 1024 * 1024
    csv_chunk_size: int = 500
    ingest_workers: int = 4
    default_owner_id: str = "system-user"
    cors_origins: list[str] = DEFAULT_CORS_ORIGINS
    log_file: str = "jobs/spendai.log"
    S3_ENDPOINT_URL: str | None = None
    S3_ACCESS_KEY: str | None = None
    S3_SECRET_KEY: str | None = None
    S3_BUCKET: str = "spendai-uploads"
    server_host: str = "127.0.0.1"
    server_port: int = 8000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


def get_settings() -> "Settings":
    """Return an instance of the application settings."""
    return Settings()
