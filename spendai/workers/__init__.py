"""Workers package: background ingestion of uploaded statements."""
