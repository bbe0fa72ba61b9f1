"""
app/api/routers/lead_router.py

Single-lead upsert, field metadata and program search endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.envelope import payload_response, success_response
from app.schemas.leads import SingleLeadRequest
from app.services.lead_service import LeadService, get_lead_service

router = APIRouter(prefix="/api", tags=["leads"])


@router.post("/single-lead")
async def upsert_single_lead(
    payload: SingleLeadRequest,
    service: LeadService = Depends(get_lead_service),
) -> JSONResponse:
    result = await service.upsert_leads(
        leads=payload.leads,
        program_name=payload.program_name,
        lookup_field=payload.lookup_field,
    )
    return success_response(result=result)


@router.get("/fields")
async def list_fields(service: LeadService = Depends(get_lead_service)) -> JSONResponse:
    fields = await service.describe_fields()
    return success_response(fields=fields)


@router.get("/programs")
async def search_programs(
    search: str = Query(default="", description="Program name fragment"),
    service: LeadService = Depends(get_lead_service),
) -> JSONResponse:
    """
    Autocomplete program names.

    Blank terms and failed searches both answer 200 with an empty list.
    """

    programs = await service.search_programs(search)
    if programs is None:
        return payload_response({"status": "error", "programs": []})
    return success_response(programs=programs)
