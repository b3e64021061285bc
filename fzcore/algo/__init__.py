"""Scoring schemes, Latin letter normalisation, and fuzzy, exact, prefix, suffix and equal matching."""