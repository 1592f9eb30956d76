"""Temporary storage for uploaded statement files.

Uploads are kept only until their ingestion batch reaches a terminal state.
The backing store is either a local directory or an S3 bucket.
"""

from pathlib import Path, PurePath
from typing import Protocol

from spendai.core.settings import Settings
from spendai.core.utils import ensure_dir, get_logger

from .s3_backend import S3UploadBackend

logger = get_logger("spendai.files")


class FileBackend(Protocol):
    """Byte storage addressed by string keys."""

    def put(self, key: str, data: bytes) -> None: ...

    def get(self, key: str) -> bytes: ...

    def delete(self, key: str) -> None: ...

    def exists(self, key: str) -> bool: ...


class LocalFileBackend:
    """File backend storing objects below a local directory."""

    def __init__(self, root: str | Path) -> None:
        """Initialize the backend and create its root directory."""
        self.root = Path(root)
        ensure_dir(self.root)

    def _path(self, key: str) -> Path:
        return self.root / PurePath(key).name

    def put(self, key: str, data: bytes) -> None:
        """Write the data under the given key."""
        self._path(key).write_bytes(data)

    def get(self, key: str) -> bytes:
        """Read the data stored under the given key."""
        return self._path(key).read_bytes()

    def delete(self, key: str) -> None:
        """Delete the file stored under the given key if it exists."""
        self._path(key).unlink(missing_ok=True)

    def exists(self, key: str) -> bool:
        """Check if a file exists for the given key."""
        return self._path(key).exists()


class FileService:
    """Service for upload file operations over a pluggable backend."""

    def __init__(self, backend: FileBackend) -> None:
        """Initialize FileService with a storage backend."""
        self.backend = backend

    def save_file(self, key: str, data: bytes) -> None:
        """Save a file under the given key."""
        self.backend.put(key, data)

    def get_file(self, key: str) -> bytes:
        """Retrieve a file by key."""
        return self.backend.get(key)

    def delete_file(self, key: str) -> None:
        """Delete a file by key."""
        self.backend.delete(key)
        logger.info(f"Deleted temporary upload {key}")

    def file_exists(self, key: str) -> bool:
        """Check if a file exists by key."""
        return self.backend.exists(key)

    def save_upload(self, batch_id: str, filename: str | None, data: bytes) -> str:
        """Store the raw upload of a batch and return its key."""
        suffix = PurePath(filename or "").suffix.lower()
        key = f"uploads/{batch_id}{suffix}"
        self.save_file(key, data)
        return key


def build_file_service(settings: Settings) -> FileService:
    """Create the FileService selected by the ``upload_backend`` setting."""
    if settings.upload_backend == "s3":
        return FileService(S3UploadBackend(settings))
    return FileService(LocalFileBackend(settings.upload_dir))
