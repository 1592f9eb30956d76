"""Storage collaborator interface consumed by the ingestion pipeline and the API."""

from typing import Protocol

from spendai.core.models import BatchStatus, Transaction, UploadBatch, UploadBatchCreate


class Storage(Protocol):
    """Persistence operations for upload batches and their transactions.

    Implementations must apply ``update_batch_status`` atomically and must
    allow concurrent ingestions of different batches.
    """

    def create_batch(self, meta: UploadBatchCreate) -> str:
        """Open a ``pending`` batch and return its id."""
        ...

    def update_batch_status(
        self, batch_id: str, status: BatchStatus, count: int | None = None, error: str | None = None
    ) -> bool:
        """Move a non-terminal batch to ``status``; False when the batch is missing or already terminal."""
        ...

    def get_batch(self, batch_id: str) -> UploadBatch | None:
        """Return the batch record, or None when it does not exist."""
        ...

    def list_batches(self, owner_id: str) -> list[UploadBatch]:
        """Return the owner's batches, newest first."""
        ...

    def save_transactions(self, batch_id: str, transactions: list[Transaction]) -> None:
        """Persist every transaction of a batch in one unit of work."""
        ...

    def list_transactions(self, owner_id: str, upload_id: str | None = None) -> list[Transaction]:
        """Return the owner's transactions, most recent first, optionally for one batch."""
        ...

    def delete_all(self, owner_id: str) -> None:
        """Delete the owner's transactions and batches."""
        ...
