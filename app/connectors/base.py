"""
app/connectors/base.py

Base connector abstraction and shared async HTTP mechanics.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.errors import RemoteDecodeError, RemoteServiceError

logger = logging.getLogger(__name__)


class ConnectorRequestError(RemoteServiceError):
    """
    Raised when an outbound request fails at the transport level.
    """


class BaseConnector:
    """
    Shared request plumbing for upstream API connectors.

    Connectors never retry: each call is attempted once and the caller
    decides what a failure means.
    """

    source: str

    def __init__(
        self,
        *,
        source: str,
        http_client: httpx.AsyncClient,
    ) -> None:
        self.source = source
        self._client = http_client

    async def _send(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        json: Any = None,
        content: bytes | None = None,
    ) -> httpx.Response:
        """
        Execute one HTTP request and return the response whatever its status.
        """

        try:
            return await self._client.request(
                method,
                url,
                params=params,
                headers=headers,
                json=json,
                content=content,
            )
        except httpx.TimeoutException as exc:
            logger.error("Connector request timed out source=%s method=%s", self.source, method)
            raise ConnectorRequestError(f"{self.source}: request timed out.") from exc
        except httpx.HTTPError as exc:
            logger.error(
                "Connector transport failure source=%s method=%s error=%s",
                self.source,
                method,
                type(exc).__name__,
            )
            raise ConnectorRequestError(f"{self.source}: request could not be completed.") from exc

    def _decode_json(self, response: httpx.Response) -> Any:
        """
        Decode a response body as JSON.
        """

        try:
            return response.json()
        except ValueError as exc:
            raise RemoteDecodeError(f"{self.source}: response was not valid JSON.") from exc

    @staticmethod
    def _try_decode_json(response: httpx.Response) -> Any:
        """
        Decode a response body as JSON, returning the raw text when it is not.
        """

        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def bearer_headers(access_token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {access_token}"}
