"""Tests for locating transaction fields in CSV rows."""

from spendai.ingestion.fields import extract_fields


def test_standard_column_names() -> None:
    """Date/Description/Amount/Type are found under their canonical names."""
    fields = extract_fields({"Date": "2024-01-05", "Description": "Coffee", "Amount": "4.50", "Type": "DEBIT"})
    if (fields.date, fields.description, fields.amount, fields.type_hint) != ("2024-01-05", "Coffee", "4.50", "DEBIT"):
        msg = f"Unexpected fields: {fields}"
        raise AssertionError(msg)


def test_alternate_and_case_insensitive_names() -> None:
    """Variant column names match regardless of case and padding."""
    row = {" transaction date ": "01/05/2024", "MERCHANT": "Uber", "value": "$12.00", "Transaction Type": "credit"}
    fields = extract_fields(row)
    if (fields.date, fields.description, fields.amount, fields.type_hint) != ("01/05/2024", "Uber", "$12.00", "credit"):
        msg = f"Unexpected fields: {fields}"
        raise AssertionError(msg)


def test_first_present_variant_wins() -> None:
    """When both Description and Merchant exist, Description is used."""
    fields = extract_fields({"Merchant": "ACME", "Description": "Groceries", "Date": "2024-01-01", "Amount": "1"})
    if fields.description != "Groceries":
        msg = f"Expected Description to win, got {fields.description!r}"
        raise AssertionError(msg)


def test_missing_fields_are_empty_strings() -> None:
    """Missing columns and NaN cells come back as empty strings."""
    fields = extract_fields({"Date": float("nan"), "Other": "x"})
    if (fields.date, fields.description, fields.amount, fields.type_hint) != ("", "", "", ""):
        msg = f"Expected empty fields, got {fields}"
        raise AssertionError(msg)


def test_byte_order_mark_is_ignored() -> None:
    """A BOM glued to the first header still matches."""
    fields = extract_fields({"\ufeffDate": "2024-03-01"})
    if fields.date != "2024-03-01":
        msg = f"Expected BOM header to match, got {fields.date!r}"
        raise AssertionError(msg)
