"""CSV statement parser.

Streams the CSV in chunks with pandas, so large statements never need to be
held in memory as one frame. Each row goes through field extraction, amount
and date normalization, categorization and recurrence detection. Rows that
fail validation are dropped; only a failure to read the stream itself aborts
the parse. Exports that are not UTF-8 (cp1252, latin-1) are decoded with the
first encoding that fits.
"""

import io
from collections.abc import Iterator
from typing import BinaryIO

import pandas as pd

from spendai.core.models import Transaction
from spendai.core.settings import Settings
from spendai.core.utils import get_logger
from spendai.ingestion.base import BaseParser
from spendai.ingestion.errors import CandidateRejected, RowSkipped, StreamReadError
from spendai.ingestion.fields import extract_fields
from spendai.ingestion.normalize import build_transaction

logger = get_logger("spendai.ingestion.csv")

DEFAULT_CHUNK_SIZE = 500
# Tried in order for in-memory content; latin-1 decodes any byte sequence.
CANDIDATE_ENCODINGS = ("utf-8-sig", "cp1252")
FALLBACK_ENCODING = "latin-1"
MAX_ROW_LOG_LEN = 300


def _truncate(value: object) -> str:
    text = str(value)
    if len(text) > MAX_ROW_LOG_LEN:
        text = text[: MAX_ROW_LOG_LEN - 3] + "..."
    return text


def _log_bad_line(line: list[str]) -> None:
    logger.warning(f"Skipping malformed CSV line: {_truncate(line)}")


def _detect_encoding(content: bytes) -> str:
    for encoding in CANDIDATE_ENCODINGS:
        try:
            content.decode(encoding)
        except UnicodeDecodeError:
            continue
        return encoding
    return FALLBACK_ENCODING


class CsvStatementParser(BaseParser):
    """Parser for delimited statements with a header row."""

    source = "csv"

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        """Initialize the parser with the number of rows read per chunk."""
        self.chunk_size = chunk_size

    @classmethod
    def from_settings(cls, settings: Settings) -> "CsvStatementParser":
        """Create a parser reading ``csv_chunk_size`` rows per chunk."""
        return cls(chunk_size=settings.csv_chunk_size)

    def parse(self, content: bytes | BinaryIO) -> Iterator[Transaction]:
        """Yield a transaction for every valid row of the CSV content."""
        if isinstance(content, bytes | bytearray):
            encoding = _detect_encoding(bytes(content))
            stream = io.BytesIO(content)
        else:
            # Streams are not rewound; undecodable bytes become U+FFFD.
            encoding = "utf-8-sig"
            stream = content
        if encoding != "utf-8-sig":
            logger.info(f"CSV content is not UTF-8, decoding as {encoding}")
        row_number = 0
        try:
            reader = pd.read_csv(
                stream,
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
                encoding=encoding,
                encoding_errors="replace",
                engine="python",
                on_bad_lines=_log_bad_line,
                chunksize=self.chunk_size,
            )
            for chunk in reader:
                for record in chunk.to_dict(orient="records"):
                    row_number += 1
                    txn = self._parse_row(record, row_number)
                    if txn is not None:
                        yield txn
        except pd.errors.EmptyDataError:
            logger.info("CSV source is empty, no rows to parse")
            return
        except (OSError, pd.errors.ParserError) as exc:
            msg = f"Failed to read CSV stream after {row_number} rows: {exc}"
            raise StreamReadError(msg) from exc
        logger.info(f"Read {row_number} CSV rows")

    def _parse_row(self, record: dict, row_number: int) -> Transaction | None:
        """Normalize one row, returning None when the row is discarded or skipped."""
        try:
            fields = extract_fields(record)
            return build_transaction(
                fields.date,
                fields.description,
                fields.amount,
                type_hint=fields.type_hint,
                source=self.source,
            )
        except CandidateRejected as exc:
            logger.debug(f"[CSV ROW {row_number}] Discarded: {exc}")
        except Exception as exc:
            skipped = RowSkipped(f"[CSV ROW {row_number}] {exc}")
            logger.warning(f"{skipped} Raw: {_truncate(record)}", exc_info=True)
        return None
