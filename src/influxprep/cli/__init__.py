"""
Command-line interface for influx-prep.

Provides commands for detecting, validating and preparing
sensor messages for the time-series database.
"""

from .main import app, main

__all__ = ["main", "app"]
