"""Pagination SQL, spreadsheet import helpers, price summaries and page routes for property listings."""

__version__ = "0.1.0"