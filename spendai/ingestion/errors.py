"""Error taxonomy of the statement-ingestion pipeline."""


class IngestionError(Exception):
    """Base class for every ingestion failure."""


class UnsupportedFileType(IngestionError):
    """The declared MIME type and filename match neither CSV nor PDF."""

    def __init__(self, mime_type: str | None, filename: str | None) -> None:
        """Record the declared MIME type and filename that were rejected."""
        self.mime_type = mime_type
        self.filename = filename
        super().__init__(f"Unsupported file type: mime={mime_type!r}, filename={filename!r}")


class StreamReadError(IngestionError):
    """The CSV source could not be read."""


class PdfDecodeError(IngestionError):
    """Text could not be extracted from the PDF content."""


class RowSkipped(IngestionError):
    """Unexpected fault while processing a single row; the row is dropped."""


class CandidateRejected(IngestionError):
    """A transaction candidate failed validation and is silently discarded."""


class InvalidAmount(CandidateRejected):
    """The amount token is not a finite number."""


class InvalidDate(CandidateRejected):
    """The date token cannot be parsed."""


class EmptyDescription(CandidateRejected):
    """The description is empty after trimming."""
