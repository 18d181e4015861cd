"""Workbook ingestion, header validation, column inference and basic stats."""

__version__ = "0.1.0"
