"""
app/services package marker.
"""

from app.services.bulk_import_service import BulkImportService, get_bulk_import_service
from app.services.generative_service import GenerativeService, get_generative_service
from app.services.lead_service import LeadService, get_lead_service

__all__ = [
    "BulkImportService",
    "get_bulk_import_service",
    "GenerativeService",
    "get_generative_service",
    "LeadService",
    "get_lead_service",
]
