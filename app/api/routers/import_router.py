"""
app/api/routers/import_router.py

Bulk lead import endpoint.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.envelope import payload_response
from app.schemas.bulk_import import BulkImportRequest, BulkImportResponse
from app.services.bulk_import_service import BulkImportService, get_bulk_import_service
from app.validators.import_validator import ImportPayloadValidator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["bulk-import"])


@router.post("/import")
async def run_import(
    payload: BulkImportRequest,
    service: BulkImportService = Depends(get_bulk_import_service),
) -> JSONResponse:
    """
    Import tabular lead data and wait for the Marketo batch to finish.

    A batch that ends ``Failed`` or ``Cancelled`` is still a 200 response;
    its ``status`` field carries the outcome.
    """

    ImportPayloadValidator().validate(
        content=payload.content,
        dedupe_key=payload.dedupe_key,
        file_format=payload.file_format,
    )

    outcome = await service.run_bulk_import(
        content=payload.content,
        dedupe_key=payload.dedupe_key,
        label=payload.label,
        file_format=payload.file_format,
    )
    if not outcome.succeeded:
        logger.warning(
            "Bulk import batch ended without completing batch_id=%s status=%s",
            outcome.batch_id,
            outcome.status,
        )

    response = BulkImportResponse.from_outcome(outcome, label=payload.label)
    return payload_response(response.to_envelope())
