"""Spending aggregations over stored transactions, computed with pandas."""

from collections.abc import Sequence

import pandas as pd

from spendai.core.models import Transaction

TOP_CATEGORY_LIMIT = 5


def _frame(transactions: Sequence[Transaction]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"date": t.date, "amount": t.amount, "category": t.category or "Other"} for t in transactions],
        columns=["date", "amount", "category"],
    )


def _money(value: float) -> float:
    return round(float(value), 2)


def compute_analytics(transactions: Sequence[Transaction]) -> dict:
    """Totals, average expense and date range of the transactions."""
    df = _frame(transactions)
    if df.empty:
        return {
            "total_transactions": 0,
            "total_spent": 0,
            "total_earned": 0,
            "avg_expense": 0,
            "earliest_date": None,
            "latest_date": None,
        }
    expenses = df.loc[df["amount"] < 0, "amount"]
    total_spent = abs(expenses.sum())
    return {
        "total_transactions": len(df),
        "total_spent": _money(total_spent),
        "total_earned": _money(df.loc[df["amount"] >= 0, "amount"].sum()),
        "avg_expense": _money(total_spent / len(expenses)) if len(expenses) else 0,
        "earliest_date": df["date"].min(),
        "latest_date": df["date"].max(),
    }


def compute_summary(transactions: Sequence[Transaction]) -> dict:
    """Dashboard headline figures and the biggest expense categories."""
    df = _frame(transactions)
    expenses = df[df["amount"] < 0]
    total_spent = abs(expenses["amount"].sum())
    total_income = df.loc[df["amount"] >= 0, "amount"].sum()
    top = expenses.groupby("category")["amount"].sum().abs().sort_values(ascending=False).head(TOP_CATEGORY_LIMIT)
    return {
        "totalSpent": _money(total_spent),
        "totalIncome": _money(total_income),
        "netAmount": _money(total_income - total_spent),
        "topCategories": [{"category": name, "amount": _money(amount)} for name, amount in top.items()],
    }


def compute_monthly(transactions: Sequence[Transaction]) -> list[dict]:
    """Income, expenses and net per calendar month, oldest month first."""
    df = _frame(transactions)
    if df.empty:
        return []
    df["month"] = df["date"].str.slice(0, 7)
    df["income"] = df["amount"].where(df["amount"] >= 0, 0.0)
    df["expenses"] = (-df["amount"]).where(df["amount"] < 0, 0.0)
    grouped = df.groupby("month").agg(
        income=("income", "sum"),
        expenses=("expenses", "sum"),
        net=("amount", "sum"),
        transaction_count=("amount", "size"),
    )
    return [
        {
            "month": month,
            "income": _money(row.income),
            "expenses": _money(row.expenses),
            "net": _money(row.net),
            "transaction_count": int(row.transaction_count),
        }
        for month, row in grouped.sort_index().iterrows()
    ]


def compute_categories(transactions: Sequence[Transaction]) -> list[dict]:
    """Transaction count and signed total per category, largest absolute total first."""
    df = _frame(transactions)
    if df.empty:
        return []
    grouped = df.groupby("category").agg(
        transaction_count=("amount", "size"),
        total_amount=("amount", "sum"),
    )
    grouped = grouped.assign(magnitude=grouped["total_amount"].abs()).sort_values("magnitude", ascending=False)
    return [
        {
            "category": category,
            "transaction_count": int(row.transaction_count),
            "total_amount": _money(row.total_amount),
        }
        for category, row in grouped.iterrows()
    ]
