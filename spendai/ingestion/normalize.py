"""Amount, date and candidate normalization shared by every statement parser."""

import math
import re
import uuid

import pandas as pd

from spendai.core.models import Transaction
from spendai.core.utils import to_float
from spendai.ingestion.categories import categorize, is_recurring
from spendai.ingestion.errors import EmptyDescription, InvalidAmount, InvalidDate

DEBIT_HINTS = frozenset({"DEBIT", "WITHDRAWAL"})
CREDIT_HINTS = frozenset({"CREDIT", "DEPOSIT"})
AMOUNT_TOKEN_RX = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)")


def normalize_amount(raw: str, type_hint: str | None = None) -> float:
    """Convert an amount token into a signed amount (expense negative).

    ``$`` and thousands separators are stripped; what remains must be plain
    digits with an optional sign and decimal part. A debit or
    withdrawal hint forces the sign negative, a credit or deposit hint forces
    it positive; any other hint keeps the parsed sign.
    """
    cleaned = str(raw).replace("$", "").replace(",", "").strip()
    amount = to_float(cleaned) if AMOUNT_TOKEN_RX.fullmatch(cleaned) else None
    if amount is None or not math.isfinite(amount):
        msg = f"Invalid amount: {raw!r}"
        raise InvalidAmount(msg)
    hint = (type_hint or "").strip().upper()
    if hint in DEBIT_HINTS:
        return -abs(amount)
    if hint in CREDIT_HINTS:
        return abs(amount)
    return amount


def normalize_date(raw: str) -> str:
    """Normalize a date token to ``YYYY-MM-DD``; slash dates are read month first."""
    text = str(raw).strip()
    try:
        parsed = pd.to_datetime(text, errors="coerce") if text else pd.NaT
    except (ValueError, OverflowError) as exc:
        msg = f"Invalid date: {raw!r}"
        raise InvalidDate(msg) from exc
    if pd.isna(parsed):
        msg = f"Invalid date: {raw!r}"
        raise InvalidDate(msg)
    return parsed.strftime("%Y-%m-%d")


def build_transaction(
    date: str,
    description: str,
    amount: str,
    type_hint: str | None = None,
    source: str | None = None,
) -> Transaction:
    """Build a normalized transaction candidate from raw tokens.

    Raises a ``CandidateRejected`` subclass when the candidate must be discarded.
    """
    text = str(description).strip()
    if not text:
        msg = "Empty description"
        raise EmptyDescription(msg)
    signed = normalize_amount(amount, type_hint)
    return Transaction(
        id=str(uuid.uuid4()),
        date=normalize_date(date),
        description=text,
        merchant=text,
        amount=signed,
        category=categorize(text),
        type="income" if signed >= 0 else "expense",
        is_recurring=is_recurring(text),
        source=source,
    )
