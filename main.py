"""Main entrypoint and application factory for the SpendAI backend API.

This module initializes the FastAPI application, configures logging, creates the database tables, and exposes the Scalar API reference endpoint for interactive OpenAPI documentation. It also includes the main entrypoint for running the app with Uvicorn.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from scalar_fastapi import get_scalar_api_reference
from sqlalchemy.exc import SQLAlchemyError

from spendai.api.dependencies import get_ingestion_runner, get_storage
from spendai.api.routes import router
from spendai.core.settings import get_settings
from spendai.core.utils import ROOT_LOGGER_NAME, ensure_dir, get_logger


# --- Logging Setup ---
def setup_logging() -> None:
    """Configure logging to file and console, and ensure the log directory exists."""
    log_file = Path(get_settings().log_file)
    ensure_dir(log_file.parent)
    logger = get_logger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.INFO)
    # Add file handler for persistent logs (not colorized)
    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(file_handler)
    logger.propagate = False


setup_logging()
logger = get_logger("spendai.app")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan event handler creating the uploads and transactions tables and draining the worker pool on exit."""
    storage = app.dependency_overrides.get(get_storage, get_storage)()
    if get_settings().database_url.startswith("sqlite:///"):
        ensure_dir(Path(get_settings().database_url.removeprefix("sqlite:///")).parent)
    try:
        storage.create_tables()
    except SQLAlchemyError:
        logger.exception("Failed to create uploads or transactions table")
        raise
    yield
    app.dependency_overrides.get(get_ingestion_runner, get_ingestion_runner)().shutdown()


settings = get_settings()
app = FastAPI(
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    title="SpendAI Backend API",
    description="""
    The SpendAI Backend API ingests bank statements (CSV or PDF), categorizes their transactions, and serves the aggregations behind the spending dashboard.

    **Endpoints:**
    - `POST /api/upload`: Upload a statement and start an ingestion batch. Returns an `upload_id`.
    - `GET /api/uploads/{{upload_id}}/status`: Check the status of an ingestion batch.
    - `GET /api/transactions`: List ingested transactions.
    - `GET /api/transactions/categories`, `GET /api/transactions/monthly`: Category and monthly breakdowns.
    - `GET /api/analytics`, `GET /api/summary`: Spending analytics and dashboard summary.
    - `DELETE /api/analysis/all-data`: Delete all transactions and upload history.
    - `GET /api/health`: Health check endpoint.
    - `GET /scalar`: Interactive Scalar OpenAPI documentation.
    """,
    version="1.0.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    """Translate unexpected errors into a JSON 500 response."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse({"error": "Something went wrong!", "message": str(exc)}, status_code=500)


@app.get("/scalar", include_in_schema=False)
async def scalar_docs() -> JSONResponse:
    """Return Scalar API reference."""
    return get_scalar_api_reference(openapi_url=app.openapi_url, title=app.title)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.server_host, port=settings.server_port, reload=True)
