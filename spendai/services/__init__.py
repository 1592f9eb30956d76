"""Services package: temporary upload storage and spending aggregations."""
