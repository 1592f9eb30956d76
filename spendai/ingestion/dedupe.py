"""Removal of duplicate transactions within one ingestion batch."""

from collections.abc import Iterable

from spendai.core.models import Transaction


def deduplicate(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Keep the first occurrence of each (date, description, amount), preserving order."""
    seen: set[tuple[str, str, float]] = set()
    survivors = []
    for txn in transactions:
        key = txn.signature()
        if key in seen:
            continue
        seen.add(key)
        survivors.append(txn)
    return survivors
