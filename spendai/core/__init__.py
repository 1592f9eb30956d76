"""Core package: provides models, storage, settings, and shared utilities."""

from .models import BatchStatus, Transaction, UploadBatch  # noqa: F401
from .settings import Settings  # noqa: F401
from .storage import Storage  # noqa: F401
