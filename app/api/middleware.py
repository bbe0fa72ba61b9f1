"""
app/api/middleware.py

Exception handlers and the outermost CORS middleware.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.envelope import apply_cors_headers, error_response, preflight_response
from app.errors import ProxyError

logger = logging.getLogger(__name__)

_NOT_FOUND_STATUSES = {status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED}


async def handle_proxy_error(request: Request, exc: ProxyError) -> Response:
    if exc.status_code >= 500:
        logger.error(
            "Request failed path=%s error=%s message=%s",
            request.url.path,
            type(exc).__name__,
            exc.message,
        )
    return error_response(exc.message, exc.status_code)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> Response:
    """
    Render request body validation failures as a 400 envelope.
    """

    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        return error_response("Invalid JSON body.", status.HTTP_400_BAD_REQUEST)

    fields: list[str] = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        name = ".".join(location) or "body"
        if name not in fields:
            fields.append(name)
    return error_response(
        "Missing or invalid required fields: " + ", ".join(fields) + ".",
        status.HTTP_400_BAD_REQUEST,
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code in _NOT_FOUND_STATUSES:
        return error_response("Not Found", status.HTTP_404_NOT_FOUND)
    return error_response(str(exc.detail), exc.status_code)


async def cors_envelope_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """
    Answer preflight requests and guarantee CORS headers on every response.

    Anything that escapes the exception handlers becomes a generic 500
    envelope so callers never receive a stack trace or a non-JSON body.
    """

    if request.method == "OPTIONS":
        return preflight_response()

    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Unhandled error path=%s method=%s", request.url.path, request.method)
        response = error_response("Internal server error.", status.HTTP_500_INTERNAL_SERVER_ERROR)

    return apply_cors_headers(response)


def install_error_handling(application: FastAPI) -> None:
    application.add_exception_handler(ProxyError, handle_proxy_error)
    application.add_exception_handler(RequestValidationError, handle_validation_error)
    application.add_exception_handler(StarletteHTTPException, handle_http_exception)
    application.middleware("http")(cors_envelope_middleware)
