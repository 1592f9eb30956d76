"""Base parser abstraction for statement parsers.

Every statement parser turns the raw content of one uploaded file into a lazy
sequence of normalized ``Transaction`` candidates.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import BinaryIO

from spendai.core.models import Transaction
from spendai.core.settings import Settings


class BaseParser(ABC):
    """Abstract base class for all statement parsers."""

    source: str = ""

    @classmethod
    def from_settings(cls, settings: Settings) -> "BaseParser":  # noqa: ARG003
        """Create a parser configured from the application settings."""
        return cls()

    @abstractmethod
    def parse(self, content: bytes | BinaryIO) -> Iterator[Transaction]:
        """Yield the normalized transactions found in the content."""
