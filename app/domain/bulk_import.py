"""
app/domain/bulk_import.py

Domain models for Marketo bulk lead import orchestration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class BatchJobStatus:
    QUEUED = "Queued"
    IMPORTING = "Importing"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    FAILED = "Failed"
    CANCELLED = "Cancelled"


TERMINAL_STATUSES = frozenset(
    {
        BatchJobStatus.COMPLETED,
        BatchJobStatus.FAILED,
        BatchJobStatus.CANCELLED,
    }
)


class ImportFileFormat:
    CSV = "csv"
    TSV = "tsv"
    SSV = "ssv"


FILE_FORMAT_CONTENT_TYPES: dict[str, str] = {
    ImportFileFormat.CSV: "text/csv",
    ImportFileFormat.TSV: "text/tab-separated-values",
    ImportFileFormat.SSV: "text/plain",
}

FILE_FORMAT_DELIMITERS: dict[str, str] = {
    ImportFileFormat.CSV: ",",
    ImportFileFormat.TSV: "\t",
    ImportFileFormat.SSV: ";",
}


def is_terminal_status(status: object) -> bool:
    return isinstance(status, str) and status in TERMINAL_STATUSES


def _as_int(value: Any) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class PollOutcome:
    """
    Terminal snapshot of a bulk import batch.
    """

    batch_id: str
    status: str
    rows_processed: int
    rows_failed: int
    rows_with_warning: int = 0
    warnings: list[str] | None = None
    message: str | None = None
    attempts: int = 0

    @property
    def succeeded(self) -> bool:
        return self.status == BatchJobStatus.COMPLETED

    @classmethod
    def from_status_payload(
        cls,
        *,
        batch_id: str,
        job: dict[str, Any],
        attempts: int,
    ) -> "PollOutcome":
        """
        Build an outcome from one ``result`` entry of the batch status endpoint.

        Row failure counts are reported as ``numOfRowsFailed`` by current
        Marketo releases and ``numOfRowsWithErrors`` by older ones.
        """

        failed = job.get("numOfRowsFailed")
        if failed is None:
            failed = job.get("numOfRowsWithErrors")

        raw_warnings = job.get("warnings")
        warnings = [str(item) for item in raw_warnings] if isinstance(raw_warnings, list) else None
        message = job.get("message")

        return cls(
            batch_id=batch_id,
            status=str(job.get("status")),
            rows_processed=_as_int(job.get("numOfRowsProcessed")),
            rows_failed=_as_int(failed),
            rows_with_warning=_as_int(job.get("numOfRowsWithWarning")),
            warnings=warnings or None,
            message=message if isinstance(message, str) and message else None,
            attempts=attempts,
        )
