"""Utility functions for text cleanup and time handling."""

from .text import clean_html, split_paragraphs, truncate_text
from .timestamps import ensure_utc, format_timestamp, utc_now

__all__ = [
    # Text
    "clean_html",
    "split_paragraphs",
    "truncate_text",
    # Timestamps
    "utc_now",
    "ensure_utc",
    "format_timestamp",
]
