"""Shared fixtures: temporary SQLite storage, local upload directory, ingestion runner."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from main import app
from spendai.api.dependencies import get_ingestion_runner, get_storage
from spendai.core.db import SqlStorage, get_engine
from spendai.core.settings import Settings
from spendai.services.file_service import FileService, LocalFileBackend
from spendai.workers.ingestion_runner import IngestionRunner
from tests.helpers import OWNER_ID


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a temporary database and upload directory."""
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        upload_dir=str(tmp_path / "uploads"),
        ingest_workers=2,
        csv_chunk_size=2,
        default_owner_id=OWNER_ID,
    )


@pytest.fixture
def storage(settings: Settings) -> SqlStorage:
    """SQL storage on a fresh SQLite file."""
    store = SqlStorage(get_engine(settings.database_url))
    store.create_tables()
    return store


@pytest.fixture
def file_service(settings: Settings) -> FileService:
    """Local upload storage in a temporary directory."""
    return FileService(LocalFileBackend(settings.upload_dir))


@pytest.fixture
def runner(storage: SqlStorage, file_service: FileService, settings: Settings) -> Iterator[IngestionRunner]:
    """Ingestion runner whose worker pool is drained after the test."""
    ingestion_runner = IngestionRunner(storage, file_service, settings)
    yield ingestion_runner
    ingestion_runner.shutdown()


@pytest.fixture
def client(storage: SqlStorage, runner: IngestionRunner) -> Iterator[TestClient]:
    """API client wired to the temporary storage and runner."""
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_ingestion_runner] = lambda: runner
    yield TestClient(app)
    app.dependency_overrides.clear()
