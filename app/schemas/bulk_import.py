"""
app/schemas/bulk_import.py

Request and response schemas for the bulk import endpoint.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.domain.bulk_import import PollOutcome


class BulkImportRequest(BaseModel):
    """
    Bulk import payload.

    The older ``csvContent``/``lookupField``/``programName`` names are
    accepted alongside the current ones.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: str = Field(min_length=1, validation_alias=AliasChoices("content", "csvContent"))
    dedupe_key: str = Field(min_length=1, validation_alias=AliasChoices("dedupeKey", "lookupField"))
    label: str | None = Field(default=None, validation_alias=AliasChoices("label", "programName"))
    file_format: Literal["csv", "tsv", "ssv"] = Field(default="csv", validation_alias="format")
    field_mapping: dict[str, Any] | None = Field(default=None, validation_alias="fieldMapping")


class BulkImportResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str
    job_id: str = Field(serialization_alias="jobId")
    label: str | None = None
    success_rows: int = Field(ge=0, serialization_alias="successRows")
    error_rows: int = Field(ge=0, serialization_alias="errorRows")
    warning_rows: int = Field(default=0, ge=0, serialization_alias="warningRows")
    warnings: list[str] | None = None
    message: str

    @classmethod
    def from_outcome(cls, outcome: PollOutcome, *, label: str | None) -> "BulkImportResponse":
        return cls(
            status=outcome.status,
            job_id=outcome.batch_id,
            label=label,
            success_rows=outcome.rows_processed,
            error_rows=outcome.rows_failed,
            warning_rows=outcome.rows_with_warning,
            warnings=outcome.warnings,
            message=outcome.message or f"Marketo bulk import job {outcome.status}.",
        )

    def to_envelope(self) -> dict[str, Any]:
        payload = self.model_dump(by_alias=True)
        if payload.get("warnings") is None:
            payload.pop("warnings", None)
        return payload
