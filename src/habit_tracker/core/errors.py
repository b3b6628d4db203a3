# src/habit_tracker/core/errors.py

from __future__ import annotations


class TrackerError(Exception):
    """Base class for recoverable errors raised by the tracker core."""


class ValidationError(TrackerError, ValueError):
    """Entity failed validation on save; nothing was applied."""


class InvalidDateInput(TrackerError, ValueError):
    """Custom date input could not be turned into a date range."""
