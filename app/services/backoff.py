"""
Capped exponential backoff schedule for batch status polling.
"""

from __future__ import annotations

from app.config import BulkImportSettings


def compute_backoff_delay(attempt: int, settings: BulkImportSettings) -> float:
    """
    Return the wait in seconds before the given 1-based poll attempt.
    """

    if attempt < 1:
        raise ValueError("attempt must be >= 1")
    delay = settings.initial_delay_seconds * (settings.backoff_multiplier ** (attempt - 1))
    return min(delay, settings.max_delay_seconds)


def backoff_schedule(settings: BulkImportSettings) -> list[float]:
    """
    Return every pre-attempt delay for a full polling budget.
    """

    return [compute_backoff_delay(attempt, settings) for attempt in range(1, settings.max_attempts + 1)]


def worst_case_wait_seconds(settings: BulkImportSettings) -> float:
    """
    Upper bound on time spent sleeping across one orchestration.
    """

    return sum(backoff_schedule(settings))
