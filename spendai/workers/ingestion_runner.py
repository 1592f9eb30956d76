"""Background orchestration of statement ingestion.

An upload becomes a batch that moves ``pending -> processing -> completed``
or ``failed``. Parsing runs on a worker pool so the upload request returns
as soon as the batch exists; callers poll the batch status through the
storage collaborator. Every terminal transition removes the temporary
upload file.
"""

import concurrent.futures
from typing import BinaryIO

from spendai.core.models import BatchStatus, Transaction, UploadBatchCreate
from spendai.core.settings import Settings
from spendai.core.storage import Storage
from spendai.core.utils import get_logger, utcnow_iso
from spendai.ingestion import deduplicate
from spendai.ingestion.base import BaseParser
from spendai.ingestion.errors import IngestionError, UnsupportedFileType
from spendai.ingestion.registry import ParserRegistry, resolve_file_kind
from spendai.services.file_service import FileService

logger = get_logger("spendai.worker")


class IngestionRunner:
    """IngestionRunner parses uploads into transactions on a thread pool."""

    def __init__(self, storage: Storage, file_service: FileService, settings: Settings) -> None:
        """Initialize the runner with its collaborators and worker pool."""
        self.storage = storage
        self.file_service = file_service
        self.settings = settings
        self.executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=settings.ingest_workers, thread_name_prefix="ingest"
        )
        self._futures: dict[str, concurrent.futures.Future] = {}

    def ingest(
        self,
        content: bytes | BinaryIO,
        mime_type: str | None,
        filename: str | None,
        owner_id: str | None = None,
    ) -> str:
        """Open a batch for the upload and schedule its parse; returns the batch id."""
        data = content if isinstance(content, bytes) else content.read()
        owner = owner_id or self.settings.default_owner_id
        batch_id = self.storage.create_batch(
            UploadBatchCreate(
                filename=filename or "",
                filetype=mime_type or "",
                owner_id=owner,
                file_size=len(data),
            )
        )
        try:
            file_key = self.file_service.save_upload(batch_id, filename, data)
        except Exception as exc:
            self._fail(batch_id, exc)
            return batch_id
        logger.info(f"Created batch {batch_id} for {filename} ({mime_type}, {len(data)} bytes)")
        try:
            kind = resolve_file_kind(mime_type, filename)
        except UnsupportedFileType as exc:
            self._discard_upload(file_key)
            self._fail(batch_id, exc)
            return batch_id
        future = self.executor.submit(self.run, batch_id, kind, file_key, owner)
        self._futures[batch_id] = future
        future.add_done_callback(lambda _: self._futures.pop(batch_id, None))
        logger.info(f"Scheduled {kind} ingestion for batch {batch_id}")
        return batch_id

    def run(self, batch_id: str, kind: str, file_key: str, owner_id: str) -> BatchStatus:
        """Parse, deduplicate and persist one batch, returning its terminal status.

        The temporary upload is removed before the terminal status is written.
        """
        try:
            count = self._process(batch_id, kind, file_key, owner_id)
        except Exception as exc:
            self._discard_upload(file_key)
            self._fail(batch_id, exc)
            return BatchStatus.FAILED
        self._discard_upload(file_key)
        try:
            self.storage.update_batch_status(batch_id, BatchStatus.COMPLETED, count=count)
        except Exception as exc:
            self._fail(batch_id, exc)
            return BatchStatus.FAILED
        logger.info(f"Batch {batch_id}: completed with {count} transactions")
        return BatchStatus.COMPLETED

    def _process(self, batch_id: str, kind: str, file_key: str, owner_id: str) -> int:
        self.storage.update_batch_status(batch_id, BatchStatus.PROCESSING)
        logger.info(f"Batch {batch_id}: processing {file_key}")
        parser = self._parser_for(kind)
        content = self.file_service.get_file(file_key)
        parsed = list(parser.parse(content))
        transactions = deduplicate(parsed)
        logger.info(
            f"Batch {batch_id}: parsed {len(parsed)} transactions, "
            f"{len(parsed) - len(transactions)} duplicates removed"
        )
        self._stamp(transactions, batch_id, owner_id)
        self.storage.save_transactions(batch_id, transactions)
        return len(transactions)

    def wait(self, batch_id: str, timeout: float | None = None) -> BatchStatus | None:
        """Block until a batch is terminal and return its status.

        A batch whose run already finished answers from storage. Returns None
        for unknown batches and for batches that were never scheduled.
        """
        future = self._futures.get(batch_id)
        if future is not None:
            return future.result(timeout=timeout)
        batch = self.storage.get_batch(batch_id)
        if batch is None or not batch.status.is_terminal:
            return None
        return batch.status

    def shutdown(self) -> None:
        """Stop accepting work and wait for in-flight batches."""
        self.executor.shutdown(wait=True)

    def _parser_for(self, kind: str) -> BaseParser:
        return ParserRegistry.get(kind).from_settings(self.settings)

    @staticmethod
    def _stamp(transactions: list[Transaction], batch_id: str, owner_id: str) -> None:
        uploaded_at = utcnow_iso()
        for txn in transactions:
            txn.upload_id = batch_id
            txn.uploaded_at = uploaded_at
            txn.owner_id = owner_id

    def _fail(self, batch_id: str, exc: Exception) -> None:
        if isinstance(exc, IngestionError):
            logger.error(f"Batch {batch_id} failed: {exc}")
        else:
            logger.exception(f"Batch {batch_id} failed unexpectedly")
        try:
            self.storage.update_batch_status(batch_id, BatchStatus.FAILED, count=0, error=str(exc))
        except Exception:
            logger.exception(f"Could not record the failure of batch {batch_id}")

    def _discard_upload(self, file_key: str) -> None:
        try:
            self.file_service.delete_file(file_key)
        except Exception:
            logger.exception(f"Could not delete temporary upload {file_key}")
