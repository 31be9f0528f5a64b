"""Core pipeline logic: job processing and ingestion."""
