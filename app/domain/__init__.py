"""
app/domain package marker.
"""

from app.domain.bulk_import import (
    TERMINAL_STATUSES,
    BatchJobStatus,
    ImportFileFormat,
    PollOutcome,
    is_terminal_status,
)

__all__ = [
    "BatchJobStatus",
    "ImportFileFormat",
    "PollOutcome",
    "TERMINAL_STATUSES",
    "is_terminal_status",
]
