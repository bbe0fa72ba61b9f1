"""
app/schemas package marker.
"""

from app.schemas.bulk_import import BulkImportRequest, BulkImportResponse
from app.schemas.leads import DescribeTitleRequest, ParseLeadsRequest, SingleLeadRequest

__all__ = [
    "BulkImportRequest",
    "BulkImportResponse",
    "DescribeTitleRequest",
    "ParseLeadsRequest",
    "SingleLeadRequest",
]
