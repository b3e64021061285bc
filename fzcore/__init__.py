"""Fuzzy matching, ANSI colour extraction, chunked item storage, result merging and query history."""

__version__ = "0.60.0"