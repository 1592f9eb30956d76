"""API package: provides FastAPI dependencies and route definitions for the application."""

from .dependencies import get_ingestion_runner, get_settings, get_storage  # noqa: F401
from .routes import router  # noqa: F401
