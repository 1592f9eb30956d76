"""SQLAlchemy storage for upload batches and transactions."""

import uuid

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String, Text, create_engine, delete, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from spendai.core.models import BatchStatus, Transaction, UploadBatch, UploadBatchCreate
from spendai.core.utils import get_logger, utcnow_iso

Base = declarative_base()
logger = get_logger("spendai.db")

TERMINAL_STATUSES = [BatchStatus.COMPLETED.value, BatchStatus.FAILED.value]


class UploadRecord(Base):
    """One uploaded statement file and the state of its ingestion."""

    __tablename__ = "uploads"
    id = Column(String, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    filename = Column(String, nullable=False)
    filetype = Column(String, nullable=False)
    file_size = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False)
    created_at = Column(String, nullable=False)
    completed_at = Column(String, nullable=True)
    transaction_count = Column(Integer, nullable=False, default=0)
    error = Column(Text, nullable=True)


class TransactionRecord(Base):
    """A normalized transaction produced by an ingestion batch."""

    __tablename__ = "transactions"
    id = Column(String, primary_key=True)
    upload_id = Column(String, ForeignKey("uploads.id"), nullable=False, index=True)
    owner_id = Column(String, nullable=False, index=True)
    date = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False)
    merchant = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    category = Column(String, nullable=False)
    type = Column(String, nullable=False)
    is_recurring = Column(Boolean, nullable=False, default=False)
    source = Column(String, nullable=True)
    uploaded_at = Column(String, nullable=True)


def get_engine(url: str | None = None) -> Engine:
    """Create a SQLAlchemy engine using the given or configured database URL."""
    if url is None:
        from spendai.core.settings import get_settings

        url = get_settings().database_url
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


def _to_batch(record: UploadRecord) -> UploadBatch:
    return UploadBatch(
        id=record.id,
        filename=record.filename,
        filetype=record.filetype,
        status=BatchStatus(record.status),
        created_at=record.created_at,
        completed_at=record.completed_at,
        transaction_count=record.transaction_count,
        file_size=record.file_size,
        owner_id=record.owner_id,
        error=record.error,
    )


def _to_transaction(record: TransactionRecord) -> Transaction:
    return Transaction(
        id=record.id,
        date=record.date,
        description=record.description,
        merchant=record.merchant,
        amount=record.amount,
        category=record.category,
        type=record.type,
        is_recurring=record.is_recurring,
        source=record.source,
        upload_id=record.upload_id,
        uploaded_at=record.uploaded_at,
        owner_id=record.owner_id,
    )


class SqlStorage:
    """Storage collaborator backed by a relational database through SQLAlchemy."""

    def __init__(self, engine: Engine) -> None:
        """Initialize the storage with a SQLAlchemy engine."""
        self.engine = engine
        self.Session = sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)

    def create_tables(self) -> None:
        """Create the uploads and transactions tables if they do not exist."""
        Base.metadata.create_all(self.engine)

    def create_batch(self, meta: UploadBatchCreate) -> str:
        """Insert a new ``pending`` batch and return its id."""
        batch_id = str(uuid.uuid4())
        with self.Session() as session:
            session.add(
                UploadRecord(
                    id=batch_id,
                    owner_id=meta.owner_id,
                    filename=meta.filename,
                    filetype=meta.filetype,
                    file_size=meta.file_size,
                    status=BatchStatus.PENDING.value,
                    created_at=utcnow_iso(),
                    transaction_count=0,
                )
            )
            session.commit()
        return batch_id

    def update_batch_status(
        self, batch_id: str, status: BatchStatus, count: int | None = None, error: str | None = None
    ) -> bool:
        """Move a non-terminal batch to a new status in a single UPDATE.

        Returns False when the batch does not exist or is already terminal.
        """
        values: dict[str, object] = {"status": status.value}
        if count is not None:
            values["transaction_count"] = count
        if error is not None:
            values["error"] = error
        if status.is_terminal:
            values["completed_at"] = utcnow_iso()
        stmt = (
            update(UploadRecord)
            .where(UploadRecord.id == batch_id, UploadRecord.status.not_in(TERMINAL_STATUSES))
            .values(**values)
        )
        with self.Session() as session:
            result = session.execute(stmt)
            session.commit()
        if result.rowcount == 0:
            logger.warning(f"Batch {batch_id} not updated to {status.value}: missing or already terminal")
            return False
        return True

    def get_batch(self, batch_id: str) -> UploadBatch | None:
        """Retrieve a batch by its id."""
        with self.Session() as session:
            record = session.get(UploadRecord, batch_id)
            return _to_batch(record) if record else None

    def list_batches(self, owner_id: str) -> list[UploadBatch]:
        """List an owner's batches, newest first."""
        stmt = select(UploadRecord).where(UploadRecord.owner_id == owner_id).order_by(UploadRecord.created_at.desc())
        with self.Session() as session:
            return [_to_batch(record) for record in session.scalars(stmt)]

    def save_transactions(self, batch_id: str, transactions: list[Transaction]) -> None:
        """Insert all transactions of a batch in one database transaction."""
        with self.Session() as session, session.begin():
            session.add_all(
                TransactionRecord(
                    id=txn.id,
                    upload_id=batch_id,
                    owner_id=txn.owner_id,
                    date=txn.date,
                    description=txn.description,
                    merchant=txn.merchant,
                    amount=txn.amount,
                    category=txn.category,
                    type=txn.type,
                    is_recurring=txn.is_recurring,
                    source=txn.source,
                    uploaded_at=txn.uploaded_at,
                )
                for txn in transactions
            )

    def list_transactions(self, owner_id: str, upload_id: str | None = None) -> list[Transaction]:
        """List an owner's transactions, most recent date first."""
        stmt = select(TransactionRecord).where(TransactionRecord.owner_id == owner_id)
        if upload_id is not None:
            stmt = stmt.where(TransactionRecord.upload_id == upload_id)
        stmt = stmt.order_by(TransactionRecord.date.desc(), TransactionRecord.id)
        with self.Session() as session:
            return [_to_transaction(record) for record in session.scalars(stmt)]

    def delete_all(self, owner_id: str) -> None:
        """Delete an owner's transactions, then its batches."""
        with self.Session() as session, session.begin():
            session.execute(delete(TransactionRecord).where(TransactionRecord.owner_id == owner_id))
            session.execute(delete(UploadRecord).where(UploadRecord.owner_id == owner_id))
        logger.info(f"Deleted all transactions and uploads of owner {owner_id}")
