"""Errors surfaced from the report pipeline to the HTTP boundary."""
from __future__ import annotations


class RowSourceUnavailable(Exception):
    """The notification log store could not be queried."""


class InvalidDateRange(ValueError):
    """A date query parameter is not a ``YYYY-MM-DD`` calendar date."""
