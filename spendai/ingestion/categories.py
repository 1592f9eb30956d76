"""Keyword-rule categorization and recurrence detection."""

from collections.abc import Callable
from enum import Enum


class Category(str, Enum):
    """Fixed category labels assigned to transactions."""

    FOOD_AND_DINING = "Food & Dining"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    TRANSPORTATION = "Transportation"
    HEALTH_AND_FITNESS = "Health & Fitness"
    BILLS_AND_UTILITIES = "Bills & Utilities"
    HOUSING = "Housing"
    INCOME = "Income"
    BANKING_AND_FEES = "Banking & Fees"
    OTHER = "Other"


def _contains_any(*keywords: str) -> Callable[[str], bool]:
    return lambda text: any(keyword in text for keyword in keywords)


# Evaluated top to bottom; the first matching rule decides the category.
CATEGORY_RULES: tuple[tuple[Category, Callable[[str], bool]], ...] = (
    (
        Category.FOOD_AND_DINING,
        _contains_any("starbucks", "coffee", "cafe", "grocery", "food", "restaurant", "dining"),
    ),
    (Category.SHOPPING, _contains_any("amazon", "shopping", "target", "walmart")),
    (Category.ENTERTAINMENT, _contains_any("netflix", "spotify", "subscription", "prime")),
    (Category.TRANSPORTATION, _contains_any("gas", "fuel", "uber", "lyft", "transport")),
    (Category.HEALTH_AND_FITNESS, _contains_any("gym", "fitness", "health", "pharmacy")),
    (Category.BILLS_AND_UTILITIES, _contains_any("utility", "electric", "water", "internet")),
    (Category.HOUSING, _contains_any("rent", "mortgage", "home")),
    (Category.INCOME, _contains_any("salary", "deposit", "income", "payroll")),
    (Category.BANKING_AND_FEES, _contains_any("bank", "fee", "charge")),
)

RECURRING_KEYWORDS = (
    "subscription",
    "netflix",
    "spotify",
    "gym",
    "membership",
    "monthly",
    "rent",
    "utility",
    "insurance",
)


def categorize(description: str) -> str:
    """Return the category label of a transaction description, ``Other`` when no rule matches."""
    text = (description or "").lower()
    for category, matches in CATEGORY_RULES:
        if matches(text):
            return category.value
    return Category.OTHER.value


def is_recurring(description: str) -> bool:
    """Whether the description looks like a recurring payment."""
    text = (description or "").lower()
    return any(keyword in text for keyword in RECURRING_KEYWORDS)
