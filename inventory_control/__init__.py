"""Inventory control: categories and products in SQLite behind a small HTTP API."""

__version__ = "0.1.0"