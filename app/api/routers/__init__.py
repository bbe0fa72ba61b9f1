"""
app/api/routers package marker.
"""

from app.api.routers.generative_router import router as generative_router
from app.api.routers.import_router import router as import_router
from app.api.routers.lead_router import router as lead_router

__all__ = [
    "generative_router",
    "import_router",
    "lead_router",
]
