"""
app/api/dependencies.py

Shared FastAPI dependencies.
"""

from __future__ import annotations

import httpx
from fastapi import Request


def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Return the process-wide async HTTP client opened in the app lifespan.
    """

    return request.app.state.http_client
