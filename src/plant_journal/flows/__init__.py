"""Prefect flows: batch analysis over a day range and weather backfill."""
