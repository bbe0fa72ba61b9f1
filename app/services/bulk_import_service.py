"""
app/services/bulk_import_service.py

Orchestration service for Marketo bulk lead imports.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx
from fastapi import Depends

from app.api.dependencies import get_http_client
from app.config import (
    BulkImportSettings,
    MarketoSettings,
    get_bulk_import_settings,
    get_marketo_settings,
)
from app.connectors.marketo_auth import MarketoTokenProvider
from app.connectors.marketo_bulk import MarketoBulkClient
from app.domain.bulk_import import ImportFileFormat, PollOutcome, is_terminal_status
from app.errors import PollTimeoutError
from app.logging_utils import log_event
from app.services.backoff import compute_backoff_delay

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class BulkImportService:
    """
    Runs authenticate -> create job -> upload -> poll as one call.

    Each step depends on the one before it, so nothing runs concurrently and
    the first failure ends the orchestration.
    """

    def __init__(
        self,
        *,
        marketo_settings: MarketoSettings,
        import_settings: BulkImportSettings,
        http_client: httpx.AsyncClient,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._settings = import_settings
        self._http_client = http_client
        self._token_provider = MarketoTokenProvider(
            settings=marketo_settings,
            http_client=http_client,
        )
        self._sleep = sleep

    async def run_bulk_import(
        self,
        *,
        content: str,
        dedupe_key: str,
        label: str | None = None,
        file_format: str = ImportFileFormat.CSV,
    ) -> PollOutcome:
        """
        Import tabular content and wait for the batch to reach a terminal status.

        A ``Failed`` or ``Cancelled`` batch is returned as an outcome, not
        raised; callers inspect ``PollOutcome.status``.

        Raises:
            ConfigurationError: Marketo credentials are missing.
            AuthError: The token exchange failed.
            JobCreationError: No batch was allocated.
            UploadError: The content upload was rejected.
            PollError: A status query failed.
            PollTimeoutError: No terminal status within the attempt budget.
        """

        access_token = await self._token_provider.get_access_token()
        bulk_client = MarketoBulkClient(
            endpoint=self._token_provider.endpoint,
            http_client=self._http_client,
        )

        batch_id = await bulk_client.create_job(
            access_token=access_token,
            dedupe_key=dedupe_key,
            file_format=file_format,
        )
        log_event(
            logger,
            logging.INFO,
            "bulk_import_job_created",
            batch_id=batch_id,
            label=label,
            lookup_field=dedupe_key,
            format=file_format,
        )

        await bulk_client.upload_file(
            access_token=access_token,
            batch_id=batch_id,
            content=content,
            file_format=file_format,
        )
        log_event(
            logger,
            logging.INFO,
            "bulk_import_file_uploaded",
            batch_id=batch_id,
            size_bytes=len(content.encode("utf-8")),
        )

        outcome = await self._poll_until_terminal(
            bulk_client=bulk_client,
            access_token=access_token,
            batch_id=batch_id,
        )
        log_event(
            logger,
            logging.INFO,
            "bulk_import_finished",
            batch_id=batch_id,
            status=outcome.status,
            rows_processed=outcome.rows_processed,
            rows_failed=outcome.rows_failed,
            attempts=outcome.attempts,
        )
        return outcome

    async def _poll_until_terminal(
        self,
        *,
        bulk_client: MarketoBulkClient,
        access_token: str,
        batch_id: str,
    ) -> PollOutcome:
        max_attempts = self._settings.max_attempts

        for attempt in range(1, max_attempts + 1):
            delay = compute_backoff_delay(attempt, self._settings)
            await self._sleep(delay)

            job = await bulk_client.get_batch_status(
                access_token=access_token,
                batch_id=batch_id,
                attempt=attempt,
            )
            status = job.get("status")

            if is_terminal_status(status):
                return PollOutcome.from_status_payload(
                    batch_id=batch_id,
                    job=job,
                    attempts=attempt,
                )

            log_event(
                logger,
                logging.DEBUG,
                "bulk_import_poll_pending",
                batch_id=batch_id,
                attempt=attempt,
                max_attempts=max_attempts,
                status=status,
                waited_seconds=delay,
            )

        logger.warning(
            "Bulk import polling exhausted batch_id=%s attempts=%s",
            batch_id,
            max_attempts,
        )
        raise PollTimeoutError(batch_id=batch_id, attempts=max_attempts)


def get_bulk_import_service(
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> BulkImportService:
    """
    Build a request-scoped bulk import service.
    """

    return BulkImportService(
        marketo_settings=get_marketo_settings(),
        import_settings=get_bulk_import_settings(),
        http_client=http_client,
    )
