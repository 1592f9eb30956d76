"""Parser registry and file-type resolution.

Parsers register under a file kind (``csv``, ``pdf``); the orchestrator
resolves the kind of an upload from its declared MIME type or filename and
asks the registry for the matching parser class.
"""

from pathlib import PurePath
from typing import ClassVar

from spendai.ingestion.base import BaseParser
from spendai.ingestion.errors import UnsupportedFileType

MIME_KINDS = {"text/csv": "csv", "application/pdf": "pdf"}
EXTENSION_KINDS = {".csv": "csv", ".pdf": "pdf"}


class ParserRegistry:
    """Registry for parser classes."""

    _registry: ClassVar[dict[str, type[BaseParser]]] = {}

    @classmethod
    def register(cls, kind: str, parser_cls: type[BaseParser]) -> None:
        """Register a parser class for a file kind."""
        cls._registry[kind] = parser_cls

    @classmethod
    def get(cls, kind: str) -> type[BaseParser]:
        """Retrieve a parser class by file kind."""
        return cls._registry[kind]

    @classmethod
    def available(cls) -> list[str]:
        """List all registered file kinds."""
        return list(cls._registry.keys())


def resolve_file_kind(mime_type: str | None, filename: str | None) -> str:
    """Return ``csv`` or ``pdf`` for an upload, raising ``UnsupportedFileType`` otherwise."""
    mime = (mime_type or "").split(";", 1)[0].strip().lower()
    if mime in MIME_KINDS:
        return MIME_KINDS[mime]
    suffix = PurePath(filename or "").suffix.lower()
    if suffix in EXTENSION_KINDS:
        return EXTENSION_KINDS[suffix]
    raise UnsupportedFileType(mime_type, filename)
