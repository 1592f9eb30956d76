"""SpendAI backend: bank-statement ingestion and spending aggregation service."""
