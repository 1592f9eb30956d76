"""Field extraction from structured statement rows."""

from collections.abc import Mapping

import pandas as pd

DATE_KEYS = ("date", "transaction date")
DESCRIPTION_KEYS = ("description", "merchant")
AMOUNT_KEYS = ("amount", "value")
TYPE_KEYS = ("type", "transaction type")


class RowFields:
    """Raw date/description/amount/type tokens located in one row."""

    __slots__ = ("amount", "date", "description", "type_hint")

    def __init__(self, date: str, description: str, amount: str, type_hint: str) -> None:
        """Hold the raw tokens; missing fields are empty strings."""
        self.date = date
        self.description = description
        self.amount = amount
        self.type_hint = type_hint

    def __repr__(self) -> str:
        return (
            f"RowFields(date={self.date!r}, description={self.description!r}, "
            f"amount={self.amount!r}, type_hint={self.type_hint!r})"
        )


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if not isinstance(value, str) and pd.isna(value):
        return ""
    return str(value)


def _lookup(index: dict[str, object], keys: tuple[str, ...]) -> str:
    for key in keys:
        if key in index:
            return _as_text(index[key])
    return ""


def extract_fields(row: Mapping[str, object]) -> RowFields:
    """Locate the transaction fields of a CSV row under their common column names.

    Column names are matched case-insensitively, ignoring surrounding
    whitespace and a UTF-8 byte-order mark. The first present variant wins;
    missing fields come back as empty strings.
    """
    index = {str(key).lstrip("\ufeff").strip().lower(): value for key, value in row.items()}
    return RowFields(
        date=_lookup(index, DATE_KEYS),
        description=_lookup(index, DESCRIPTION_KEYS),
        amount=_lookup(index, AMOUNT_KEYS),
        type_hint=_lookup(index, TYPE_KEYS),
    )
