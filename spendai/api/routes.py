"""FastAPI endpoints for the SpendAI backend.

This module defines the API routes for uploading bank statements, polling
upload status, listing transactions, and the dashboard aggregations. It wires
together the storage collaborator, the ingestion runner, and the analytics
service.
"""

from fastapi import APIRouter, Depends, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from spendai.api.dependencies import get_ingestion_runner, get_owner_id, get_storage
from spendai.core.models import BatchStatusResponse, UploadBatch
from spendai.core.settings import get_settings
from spendai.core.storage import Storage
from spendai.core.utils import get_logger
from spendai.services import analytics
from spendai.workers.ingestion_runner import IngestionRunner

router = APIRouter(prefix="/api")
logger = get_logger("spendai.api")


@router.get(
    "/health",
    summary="Health check",
    description="Simple health check endpoint. Returns status ok.",
    response_description="Status ok.",
    responses={200: {"description": "API is healthy.", "content": {"application/json": {"example": {"status": "ok"}}}}},
)
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


def _reject_too_large(filename: str, max_bytes: int) -> None:
    logger.warning(f"Rejected upload {filename}: exceeds {max_bytes} bytes")
    raise HTTPException(413, f"File exceeds the {max_bytes} byte upload limit")


@router.post(
    "/upload",
    status_code=202,
    summary="Upload a bank statement and start ingestion",
    description=(
        "Upload a CSV or PDF bank statement. "
        "The server opens an upload batch and parses it in the background. "
        "Poll `/api/uploads/{upload_id}/status` until the batch is `completed` or `failed`.\n\n"
        "**Request:**\n"
        "- Content-Type: multipart/form-data\n"
        "- Form field: `file` (CSV or PDF file)\n\n"
        "**Response:**\n"
        "- 202 Accepted: `{ 'upload_id': '<uuid>', 'status': '<status>' }`.\n"
        "- 400 Bad Request: If no file was sent.\n"
        "- 413 Payload Too Large: If the file exceeds the upload limit.\n\n"
        "Files that are neither CSV nor PDF are accepted and end in a `failed` batch."
    ),
    response_description="Batch accepted. Returns upload_id.",
    responses={
        202: {
            "description": "Batch accepted.",
            "content": {
                "application/json": {
                    "example": {"upload_id": "123e4567-e89b-12d3-a456-426614174000", "status": "pending"}
                }
            },
        },
        400: {"description": "No file uploaded."},
        413: {"description": "File too large."},
    },
)
async def upload_statement(
    file: UploadFile | None = None,
    runner: IngestionRunner = Depends(get_ingestion_runner),
    storage: Storage = Depends(get_storage),
    owner_id: str = Depends(get_owner_id),
) -> JSONResponse:
    """Upload a statement and schedule its ingestion."""
    if file is None or not file.filename:
        raise HTTPException(400, "No file uploaded")
    logger.info(f"Received upload request: filename={file.filename}, content_type={file.content_type}")
    max_bytes = get_settings().max_upload_bytes
    if file.size is not None and file.size > max_bytes:
        _reject_too_large(file.filename, max_bytes)
    # Never read more than one byte past the limit.
    data = await file.read(max_bytes + 1)
    if len(data) > max_bytes:
        _reject_too_large(file.filename, max_bytes)
    batch_id = runner.ingest(data, file.content_type, file.filename, owner_id=owner_id)
    batch = storage.get_batch(batch_id)
    status = batch.status.value if batch else "pending"
    return JSONResponse({"upload_id": batch_id, "status": status}, status_code=202)


@router.get("/uploads", summary="Upload history, newest first")
async def list_uploads(storage: Storage = Depends(get_storage), owner_id: str = Depends(get_owner_id)) -> dict:
    """List the owner's upload batches."""
    return {"uploads": [batch.model_dump(mode="json") for batch in storage.list_batches(owner_id)]}


@router.get(
    "/uploads/{upload_id}",
    response_model=UploadBatch,
    summary="Get an upload batch",
    responses={404: {"description": "Upload not found."}},
)
async def get_upload(upload_id: str, storage: Storage = Depends(get_storage)) -> UploadBatch:
    """Get the full record of an upload batch."""
    batch = storage.get_batch(upload_id)
    if batch is None:
        raise HTTPException(404, "Upload not found")
    return batch


@router.get(
    "/uploads/{upload_id}/status",
    response_model=BatchStatusResponse,
    summary="Get upload ingestion status",
    description=(
        "Check the status of an upload batch.\n\n"
        "**Response:**\n"
        "- 200 OK: `pending`, `processing`, `completed` or `failed`.\n"
        "- 404 Not Found: If the upload does not exist."
    ),
    responses={
        200: {"content": {"application/json": {"example": {"status": "completed"}}}},
        404: {"description": "Upload not found."},
    },
)
async def get_upload_status(upload_id: str, storage: Storage = Depends(get_storage)) -> BatchStatusResponse:
    """Get the status of an upload batch."""
    batch = storage.get_batch(upload_id)
    if batch is None:
        raise HTTPException(404, "Upload not found")
    return BatchStatusResponse(status=batch.status)


@router.get("/transactions", summary="List transactions, most recent first")
async def list_transactions(
    upload_id: str | None = None,
    storage: Storage = Depends(get_storage),
    owner_id: str = Depends(get_owner_id),
) -> dict:
    """List the owner's transactions, optionally only those of one upload."""
    transactions = storage.list_transactions(owner_id, upload_id=upload_id)
    logger.info(f"Returning {len(transactions)} transactions")
    return {"transactions": [txn.to_api() for txn in transactions]}


@router.get("/transactions/categories", summary="Totals per category")
async def transaction_categories(
    storage: Storage = Depends(get_storage), owner_id: str = Depends(get_owner_id)
) -> dict:
    """Transaction count and total per category."""
    return {"categories": analytics.compute_categories(storage.list_transactions(owner_id))}


@router.get("/transactions/monthly", summary="Income and expenses per month")
async def transaction_monthly(storage: Storage = Depends(get_storage), owner_id: str = Depends(get_owner_id)) -> dict:
    """Income, expenses and net per month."""
    return {"monthly": analytics.compute_monthly(storage.list_transactions(owner_id))}


@router.get("/analytics", summary="Spending analytics")
async def get_analytics(storage: Storage = Depends(get_storage), owner_id: str = Depends(get_owner_id)) -> dict:
    """Totals, average expense and date range."""
    return {"analytics": analytics.compute_analytics(storage.list_transactions(owner_id))}


@router.get("/summary", summary="Dashboard summary")
async def get_summary(storage: Storage = Depends(get_storage), owner_id: str = Depends(get_owner_id)) -> dict:
    """Headline spending figures and top categories."""
    return analytics.compute_summary(storage.list_transactions(owner_id))


@router.delete("/analysis/all-data", summary="Delete all transactions and upload history")
async def delete_all_data(storage: Storage = Depends(get_storage), owner_id: str = Depends(get_owner_id)) -> dict:
    """Delete every transaction and upload batch of the owner."""
    storage.delete_all(owner_id)
    return {"success": True, "message": "All transaction data and upload history has been deleted"}
