"""Tests for keyword categorization and recurrence detection."""

import pytest

from spendai.ingestion.categories import Category, categorize, is_recurring

CATEGORY_LABELS = {category.value for category in Category}


@pytest.mark.parametrize(
    ("description", "expected"),
    [
        ("Starbucks Coffee", "Food & Dining"),
        ("WHOLE FOODS GROCERY", "Food & Dining"),
        ("Amazon Marketplace", "Shopping"),
        ("Amazon Prime", "Shopping"),
        ("Monthly Netflix Subscription", "Entertainment"),
        ("Shell Gas Station", "Transportation"),
        ("Uber Trip", "Transportation"),
        ("Planet Fitness", "Health & Fitness"),
        ("City Water Dept", "Bills & Utilities"),
        ("Mortgage Payment", "Housing"),
        ("ACME Payroll", "Income"),
        ("Overdraft Fee", "Banking & Fees"),
        ("Mystery Vendor", "Other"),
        ("", "Other"),
    ],
)
def test_categorize(description: str, expected: str) -> None:
    """The first matching rule in table order decides the category."""
    if categorize(description) != expected:
        msg = f"categorize({description!r}) = {categorize(description)!r}, expected {expected!r}"
        raise AssertionError(msg)


def test_food_rule_precedes_shopping() -> None:
    """A description matching several groups takes the earliest group."""
    if categorize("Walmart Grocery") != "Food & Dining":
        msg = "Expected Food & Dining to win over Shopping"
        raise AssertionError(msg)


@pytest.mark.parametrize("description", ["", "x", "PAYROLL", "café ☕", "12345", "Spotify Premium"])
def test_categorize_is_total(description: str) -> None:
    """Every input maps to one of the fixed labels."""
    if categorize(description) not in CATEGORY_LABELS:
        msg = f"categorize({description!r}) returned an unknown label"
        raise AssertionError(msg)


@pytest.mark.parametrize(
    ("description", "expected"),
    [
        ("Monthly Netflix Subscription", True),
        ("Gold's GYM membership", True),
        ("Apartment Rent", True),
        ("State Farm Insurance", True),
        ("Starbucks Coffee", False),
        ("", False),
    ],
)
def test_is_recurring(description: str, expected: bool) -> None:
    """Recurring keywords are matched case-insensitively."""
    if is_recurring(description) is not expected:
        msg = f"is_recurring({description!r}) should be {expected}"
        raise AssertionError(msg)
