"""Pydantic models for the SpendAI backend.

This module defines the models shared by the ingestion pipeline, the storage
collaborator and the API: the normalized ``Transaction``, the ``UploadBatch``
that tracks one ingestion run, and the batch status lifecycle.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class BatchStatus(str, Enum):
    """Lifecycle of an upload batch. ``completed`` and ``failed`` are terminal."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Whether the batch can no longer change state."""
        return self in (BatchStatus.COMPLETED, BatchStatus.FAILED)


class Transaction(BaseModel):
    """Pydantic model representing a normalized transaction."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    date: str
    description: str
    merchant: str
    amount: float
    category: str = "Other"
    type: Literal["income", "expense"]
    is_recurring: bool = Field(default=False, alias="isRecurring")
    source: str | None = None
    upload_id: str | None = Field(default=None, alias="uploadId")
    uploaded_at: str | None = Field(default=None, alias="uploadedAt")
    owner_id: str | None = Field(default=None, alias="ownerId")

    def signature(self) -> tuple[str, str, float]:
        """Identity used for deduplication within one batch."""
        return (self.date, self.description, self.amount)

    def to_api(self) -> dict:
        """JSON shape exposed to the dashboard."""
        return {
            "id": self.id,
            "date": self.date,
            "description": self.description,
            "amount": self.amount,
            "category": self.category,
            "type": self.type,
            "isRecurring": self.is_recurring,
            "merchant": self.merchant,
            "uploadId": self.upload_id,
        }


class UploadBatchCreate(BaseModel):
    """Metadata needed to open a new upload batch."""

    filename: str
    filetype: str
    owner_id: str
    file_size: int = 0


class UploadBatch(BaseModel):
    """Pydantic model representing one upload and its ingestion status."""

    id: str
    filename: str
    filetype: str
    status: BatchStatus
    created_at: str
    completed_at: str | None = None
    transaction_count: int = 0
    file_size: int = 0
    owner_id: str
    error: str | None = None


class BatchStatusResponse(BaseModel):
    """Status-only view of a batch, returned by the polling endpoint."""

    status: BatchStatus
