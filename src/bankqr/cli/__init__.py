"""
Command-line interface for bankqr.

Provides commands for building and validating payment records.
"""

from .main import app, main

__all__ = ["main", "app"]
