"""PDF statement parser.

Best-effort line heuristic: the PDF text is extracted with pdfplumber and
every line is scanned for ``<date> <description> <amount>``. Lines without
that shape are ignored.
"""

import io
import re
from collections.abc import Iterator
from typing import BinaryIO

import pdfplumber

from spendai.core.models import Transaction
from spendai.core.utils import get_logger
from spendai.ingestion.base import BaseParser
from spendai.ingestion.errors import CandidateRejected, PdfDecodeError
from spendai.ingestion.normalize import build_transaction

logger = get_logger("spendai.ingestion.pdf")

DATE_PATTERN = r"\d{1,2}/\d{1,2}/\d{2,4}|\d{4}-\d{2}-\d{2}"
AMOUNT_PATTERN = r"[-+]?\$?\d[\d,]*(?:\.\d+)?"
TRANSACTION_LINE_RX = re.compile(
    rf"(?P<date>{DATE_PATTERN})\s+(?P<description>.+?)\s+(?P<amount>{AMOUNT_PATTERN})(?=\s|$)"
)


def extract_text(content: bytes) -> str:
    """Extract the plain text of every page, raising ``PdfDecodeError`` on malformed input."""
    try:
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as exc:
        msg = f"Failed to extract text from PDF: {exc}"
        raise PdfDecodeError(msg) from exc
    logger.info(f"Extracted text from {len(pages)} PDF pages")
    return "\n".join(pages)


def parse_lines(text: str, source: str = "pdf") -> Iterator[Transaction]:
    """Yield a transaction for every line matching the transaction pattern."""
    for line_number, line in enumerate(text.splitlines(), start=1):
        match = TRANSACTION_LINE_RX.search(line)
        if not match:
            continue
        try:
            yield build_transaction(
                match.group("date"),
                match.group("description"),
                match.group("amount"),
                source=source,
            )
        except CandidateRejected as exc:
            logger.debug(f"[PDF LINE {line_number}] Discarded: {exc}")


class PdfStatementParser(BaseParser):
    """Parser for text-based PDF statements."""

    source = "pdf"

    def parse(self, content: bytes | BinaryIO) -> Iterator[Transaction]:
        """Yield the transactions found in the PDF content."""
        data = content if isinstance(content, bytes | bytearray) else content.read()
        yield from parse_lines(extract_text(bytes(data)), source=self.source)
