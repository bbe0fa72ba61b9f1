"""
app/api/routers/generative_router.py

Generative-text endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.envelope import success_response
from app.schemas.leads import DescribeTitleRequest, ParseLeadsRequest
from app.services.generative_service import GenerativeService, get_generative_service

router = APIRouter(prefix="/api", tags=["generative"])


@router.post("/parse-leads")
async def parse_leads(
    payload: ParseLeadsRequest,
    service: GenerativeService = Depends(get_generative_service),
) -> JSONResponse:
    data = await service.parse_leads(text=payload.text, json_schema=payload.json_schema)
    return success_response(data=data)


@router.post("/describe-title")
async def describe_title(
    payload: DescribeTitleRequest,
    service: GenerativeService = Depends(get_generative_service),
) -> JSONResponse:
    description = await service.describe_title(title=payload.title)
    return success_response(description=description)
