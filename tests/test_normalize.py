"""Tests for amount, date and candidate normalization."""

import pytest

from spendai.ingestion.errors import EmptyDescription, InvalidAmount, InvalidDate
from spendai.ingestion.normalize import build_transaction, normalize_amount, normalize_date


@pytest.mark.parametrize(
    ("raw", "hint", "expected"),
    [
        ("4.50", "DEBIT", -4.50),
        ("-4.50", "debit", -4.50),
        ("$1,234.56", "Withdrawal", -1234.56),
        ("-20", "CREDIT", 20.0),
        ("20", "deposit", 20.0),
        ("-7.25", "", -7.25),
        ("7.25", None, 7.25),
        ("7.25", "TRANSFER", 7.25),
    ],
)
def test_normalize_amount_sign(raw: str, hint: str | None, expected: float) -> None:
    """Type hints force the sign; unknown hints keep the parsed sign."""
    amount = normalize_amount(raw, hint)
    if amount != pytest.approx(expected):
        msg = f"normalize_amount({raw!r}, {hint!r}) = {amount}, expected {expected}"
        raise AssertionError(msg)


@pytest.mark.parametrize("raw", ["", "abc", "$", "nan", "inf", "1.2.3", "1_000", "1e3", "0x10", "- 5"])
def test_normalize_amount_rejects_non_numbers(raw: str) -> None:
    """Non-numeric and non-finite tokens raise InvalidAmount."""
    with pytest.raises(InvalidAmount):
        normalize_amount(raw)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("2024-01-05", "2024-01-05"), ("01/05/2024", "2024-01-05"), ("1/5/2024", "2024-01-05"), (" 2024-12-31 ", "2024-12-31")],
)
def test_normalize_date(raw: str, expected: str) -> None:
    """ISO and month-first slash dates normalize to YYYY-MM-DD."""
    if normalize_date(raw) != expected:
        msg = f"normalize_date({raw!r}) = {normalize_date(raw)!r}, expected {expected!r}"
        raise AssertionError(msg)


@pytest.mark.parametrize("raw", ["", "not a date", "2024-13-45"])
def test_normalize_date_rejects_garbage(raw: str) -> None:
    """Unparseable dates raise InvalidDate."""
    with pytest.raises(InvalidDate):
        normalize_date(raw)


def test_build_transaction_scenario() -> None:
    """A debit coffee purchase becomes a negative Food & Dining expense."""
    txn = build_transaction("2024-01-05", "  Starbucks Coffee ", "4.50", type_hint="DEBIT", source="csv")
    expected = {
        "date": "2024-01-05",
        "description": "Starbucks Coffee",
        "merchant": "Starbucks Coffee",
        "amount": -4.50,
        "category": "Food & Dining",
        "type": "expense",
        "is_recurring": False,
        "source": "csv",
    }
    actual = {key: getattr(txn, key) for key in expected}
    if actual != expected:
        msg = f"Expected {expected}, got {actual}"
        raise AssertionError(msg)
    if not txn.id or txn.upload_id is not None:
        msg = "Expected a generated id and no upload id before stamping"
        raise AssertionError(msg)


def test_build_transaction_type_follows_sign() -> None:
    """Zero and positive amounts are income."""
    for raw, expected_type in (("0", "income"), ("10", "income"), ("-0.01", "expense")):
        txn = build_transaction("2024-01-01", "Something", raw)
        if txn.type != expected_type:
            msg = f"Amount {raw} gave type {txn.type}, expected {expected_type}"
            raise AssertionError(msg)


def test_build_transaction_rejects_empty_description() -> None:
    """Whitespace-only descriptions are rejected even when date and amount are valid."""
    with pytest.raises(EmptyDescription):
        build_transaction("2024-01-05", "   ", "4.50")
