"""Ingestion package: statement parsers, normalization rules and the parser registry."""

from .csv_parser import CsvStatementParser
from .dedupe import deduplicate  # noqa: F401
from .pdf_parser import PdfStatementParser
from .registry import ParserRegistry, resolve_file_kind  # noqa: F401

ParserRegistry.register("csv", CsvStatementParser)
ParserRegistry.register("pdf", PdfStatementParser)
