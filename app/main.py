from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

import httpx
from fastapi import FastAPI

from app.api.envelope import payload_response
from app.api.middleware import install_error_handling
from app.config import (
    get_bulk_import_settings,
    get_external_http_settings,
    get_generative_language_settings,
    get_marketo_settings,
    load_env_files,
)
from app.logging_utils import configure_logging
from app.services.backoff import worst_case_wait_seconds

logger = logging.getLogger(__name__)


def _report_env() -> None:
    """
    Log configuration problems at startup without refusing to boot.

    Missing credentials are reported per request as a configuration error,
    so the process still starts and can answer health checks and preflight.
    """

    missing = get_marketo_settings().missing_fields()
    if not get_generative_language_settings().api_key:
        missing.append("GEMINI_API_KEY")
    if missing:
        logger.warning(
            "Startup configuration incomplete; affected endpoints will return errors. Missing: %s",
            ", ".join(missing),
        )

    import_settings = get_bulk_import_settings()
    logger.info(
        "Bulk import polling max_attempts=%s initial_delay=%.1fs max_delay=%.1fs worst_case_wait=%.1fs",
        import_settings.max_attempts,
        import_settings.initial_delay_seconds,
        import_settings.max_delay_seconds,
        worst_case_wait_seconds(import_settings),
    )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Open the shared outbound HTTP client on boot; close it on exit."""
    http_settings = get_external_http_settings()
    application.state.http_client = httpx.AsyncClient(timeout=http_settings.timeout_seconds)
    logger.info("Outbound HTTP client ready timeout=%.1fs", http_settings.timeout_seconds)
    try:
        yield
    finally:
        await application.state.http_client.aclose()
        logger.info("Outbound HTTP client closed")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    load_env_files()
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))
    _report_env()

    application = FastAPI(
        title="Marketo Import Proxy",
        version="1.0.0",
        lifespan=_lifespan,
    )
    install_error_handling(application)

    from app.api.routers import generative_router, import_router, lead_router

    application.include_router(import_router)
    application.include_router(lead_router)
    application.include_router(generative_router)

    @application.get("/health")
    async def healthcheck():
        return payload_response({"status": "ok"})

    return application


app = create_app()
