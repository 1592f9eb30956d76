"""Tests for file-type resolution and the parser registry."""

import pytest

from spendai.ingestion import CsvStatementParser, PdfStatementParser
from spendai.ingestion.errors import UnsupportedFileType
from spendai.ingestion.registry import ParserRegistry, resolve_file_kind


@pytest.mark.parametrize(
    ("mime", "filename", "expected"),
    [
        ("text/csv", "statement.txt", "csv"),
        ("text/csv; charset=utf-8", None, "csv"),
        ("application/pdf", "scan", "pdf"),
        ("application/octet-stream", "Statement.CSV", "csv"),
        (None, "march.pdf", "pdf"),
        ("", "march.Pdf", "pdf"),
    ],
)
def test_resolve_file_kind(mime: str | None, filename: str | None, expected: str) -> None:
    """MIME type is checked first, then the filename extension."""
    if resolve_file_kind(mime, filename) != expected:
        msg = f"resolve_file_kind({mime!r}, {filename!r}) != {expected!r}"
        raise AssertionError(msg)


@pytest.mark.parametrize(("mime", "filename"), [("image/png", "receipt.png"), (None, None), ("text/plain", "csv")])
def test_resolve_file_kind_rejects_other_types(mime: str | None, filename: str | None) -> None:
    """Anything that is neither CSV nor PDF is unsupported."""
    with pytest.raises(UnsupportedFileType):
        resolve_file_kind(mime, filename)


def test_registry_holds_both_parsers() -> None:
    """Importing the ingestion package registers the CSV and PDF parsers."""
    if ParserRegistry.get("csv") is not CsvStatementParser or ParserRegistry.get("pdf") is not PdfStatementParser:
        msg = f"Unexpected registry contents: {ParserRegistry.available()}"
        raise AssertionError(msg)
