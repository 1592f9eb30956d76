"""FastAPI dependencies for DI (settings, storage, ingestion runner).

The storage collaborator and the ingestion runner are process-wide singletons;
tests replace them through ``app.dependency_overrides``.
"""

from functools import lru_cache

from spendai.core.db import SqlStorage, get_engine
from spendai.core.settings import Settings, get_settings
from spendai.services.file_service import build_file_service
from spendai.workers.ingestion_runner import IngestionRunner


@lru_cache
def get_storage() -> SqlStorage:
    """Provide the SQL storage collaborator."""
    return SqlStorage(get_engine(get_settings().database_url))


@lru_cache
def get_ingestion_runner() -> IngestionRunner:
    """Provide the ingestion runner shared by all upload requests."""
    settings = get_settings()
    return IngestionRunner(get_storage(), build_file_service(settings), settings)


def get_owner_id() -> str:
    """Resolve the owner of the request; there is no authentication, so it is the default owner."""
    settings: Settings = get_settings()
    return settings.default_owner_id
