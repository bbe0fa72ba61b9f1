"""
app/schemas/leads.py

Request schemas for single-lead and generative endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SingleLeadRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    leads: list[dict[str, Any]] = Field(default_factory=list)
    program_name: str | None = Field(default=None, alias="programName")
    lookup_field: str | None = Field(default=None, alias="lookupField")


class ParseLeadsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    json_schema: dict[str, Any] = Field(alias="jsonSchema")


class DescribeTitleRequest(BaseModel):
    title: str
