"""
app/connectors/marketo_bulk.py

Marketo bulk lead import API: job creation, file upload and status queries.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.connectors.base import BaseConnector, ConnectorRequestError
from app.domain.bulk_import import FILE_FORMAT_CONTENT_TYPES
from app.errors import JobCreationError, PollError, UploadError, summarize_remote_errors

logger = logging.getLogger(__name__)

CREATE_JOB_PATH = "/rest/bulk/v1/leads/create.json"
UPLOAD_FILE_PATH = "/rest/bulk/v1/leads/{batch_id}/file"
BATCH_STATUS_PATH = "/rest/bulk/v1/leads/batch/{batch_id}/status"

_MAX_UPLOAD_ERROR_CHARS = 300


class MarketoBulkClient(BaseConnector):
    """
    Thin client over the three bulk import endpoints.

    Each method performs exactly one request and raises the error class of
    its step, so callers can tell creation, upload and polling failures apart.
    """

    def __init__(self, *, endpoint: str, http_client: httpx.AsyncClient) -> None:
        super().__init__(source="marketo_bulk", http_client=http_client)
        self._endpoint = endpoint.rstrip("/")

    async def create_job(
        self,
        *,
        access_token: str,
        dedupe_key: str,
        file_format: str,
    ) -> str:
        """
        Allocate a bulk import batch and return its batch id.

        The request declares format and lookup field only; data is uploaded
        separately against the returned id.
        """

        try:
            response = await self._send(
                method="POST",
                url=f"{self._endpoint}{CREATE_JOB_PATH}",
                params={"format": file_format, "lookupField": dedupe_key},
                headers=self.bearer_headers(access_token),
            )
        except ConnectorRequestError as exc:
            raise JobCreationError("Marketo failed to create bulk import job: request failed.") from exc

        payload = self._try_decode_json(response)
        batch_id = _first_result(payload).get("batchId")

        if (
            not response.is_success
            or not isinstance(payload, dict)
            or payload.get("success") is not True
            or batch_id in (None, "")
        ):
            detail = summarize_remote_errors(payload)
            logger.error(
                "Bulk job creation failed status=%s detail=%s",
                response.status_code,
                detail,
            )
            raise JobCreationError(f"Marketo failed to create bulk import job: {detail}")

        return str(batch_id)

    async def upload_file(
        self,
        *,
        access_token: str,
        batch_id: str,
        content: str,
        file_format: str,
    ) -> None:
        """
        Upload tabular content to an allocated batch.

        Success is judged by HTTP status alone; Marketo may answer a
        successful upload with an empty body, so the body is never decoded
        on success.
        """

        headers = {
            **self.bearer_headers(access_token),
            "Content-Type": FILE_FORMAT_CONTENT_TYPES.get(file_format, "text/csv"),
            "Accept": "application/json",
        }

        try:
            response = await self._send(
                method="POST",
                url=f"{self._endpoint}{UPLOAD_FILE_PATH.format(batch_id=batch_id)}",
                headers=headers,
                content=content.encode("utf-8"),
            )
        except ConnectorRequestError as exc:
            raise UploadError(
                f"Marketo failed to upload data for batch {batch_id}: request failed.",
                batch_id=batch_id,
                upstream_status=0,
            ) from exc

        if not response.is_success:
            detail = response.text.strip()[:_MAX_UPLOAD_ERROR_CHARS] or "empty response"
            logger.error(
                "Bulk upload failed batch_id=%s status=%s detail=%s",
                batch_id,
                response.status_code,
                detail,
            )
            raise UploadError(
                f"Marketo failed to upload data for batch {batch_id}. "
                f"Status: {response.status_code}. Detail: {detail}",
                batch_id=batch_id,
                upstream_status=response.status_code,
            )

    async def get_batch_status(
        self,
        *,
        access_token: str,
        batch_id: str,
        attempt: int,
    ) -> dict[str, Any]:
        """
        Return the first ``result`` entry of the batch status endpoint.
        """

        try:
            response = await self._send(
                method="GET",
                url=f"{self._endpoint}{BATCH_STATUS_PATH.format(batch_id=batch_id)}",
                headers=self.bearer_headers(access_token),
            )
        except ConnectorRequestError as exc:
            raise PollError(
                f"Polling batch {batch_id} failed on attempt {attempt}: request failed.",
                batch_id=batch_id,
                attempt=attempt,
            ) from exc

        payload = self._try_decode_json(response)
        job = _first_result(payload)

        if (
            not response.is_success
            or not isinstance(payload, dict)
            or payload.get("success") is not True
            or not job
        ):
            detail = summarize_remote_errors(payload)
            logger.error(
                "Bulk status query failed batch_id=%s attempt=%s status=%s detail=%s",
                batch_id,
                attempt,
                response.status_code,
                detail,
            )
            raise PollError(
                f"Polling batch {batch_id} failed on attempt {attempt}: {detail}",
                batch_id=batch_id,
                attempt=attempt,
            )

        return job


def _first_result(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        return {}
    result = payload.get("result")
    if isinstance(result, list) and result and isinstance(result[0], dict):
        return result[0]
    return {}
