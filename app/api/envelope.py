"""
app/api/envelope.py

Uniform ``{status, ...}`` response bodies and cross-origin headers.
"""

from __future__ import annotations

from typing import Any

from fastapi import Response, status
from fastapi.responses import JSONResponse

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Max-Age": "86400",
}


def apply_cors_headers(response: Response) -> Response:
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response


def success_response(status_code: int = status.HTTP_200_OK, **fields: Any) -> JSONResponse:
    """
    Wrap result fields in a success envelope.
    """

    return JSONResponse(status_code=status_code, content={"status": "success", **fields})


def payload_response(payload: dict[str, Any], status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """
    Send a payload that already carries its own ``status`` field.
    """

    return JSONResponse(status_code=status_code, content=payload)


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "error", "message": message})


def preflight_response() -> Response:
    return apply_cors_headers(Response(status_code=status.HTTP_204_NO_CONTENT))
