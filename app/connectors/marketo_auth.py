"""
app/connectors/marketo_auth.py

Client-credentials token exchange against the Marketo identity service.
"""

from __future__ import annotations

import logging

import httpx

from app.config import MarketoSettings
from app.connectors.base import BaseConnector, ConnectorRequestError
from app.errors import AuthError, ConfigurationError, summarize_remote_errors

logger = logging.getLogger(__name__)

TOKEN_PATH = "/identity/oauth/token"


class MarketoTokenProvider(BaseConnector):
    """
    Exchanges stored client credentials for a short-lived bearer token.

    Tokens are fetched fresh on every call and never cached.
    """

    def __init__(
        self,
        *,
        settings: MarketoSettings,
        http_client: httpx.AsyncClient,
    ) -> None:
        super().__init__(source="marketo_identity", http_client=http_client)
        self._settings = settings

    @property
    def endpoint(self) -> str:
        self._ensure_configured()
        return self._settings.endpoint  # type: ignore[return-value]

    def _ensure_configured(self) -> None:
        missing = self._settings.missing_fields()
        if missing:
            raise ConfigurationError(
                "Marketo credentials are not configured: " + ", ".join(missing) + "."
            )

    async def get_access_token(self) -> str:
        """
        Return a bearer token for the configured Marketo instance.

        Raises:
            ConfigurationError: If endpoint, client id or client secret is missing.
            AuthError: If the exchange fails or returns no ``access_token``.
        """

        self._ensure_configured()

        try:
            response = await self._send(
                method="GET",
                url=f"{self._settings.endpoint}{TOKEN_PATH}",
                params={
                    "grant_type": "client_credentials",
                    "client_id": self._settings.client_id,
                    "client_secret": self._settings.client_secret,
                },
            )
        except ConnectorRequestError as exc:
            raise AuthError("Failed to reach the Marketo identity service.") from exc

        payload = self._try_decode_json(response)
        token = payload.get("access_token") if isinstance(payload, dict) else None

        if not response.is_success or not token:
            logger.error(
                "Marketo token exchange failed status=%s detail=%s",
                response.status_code,
                summarize_remote_errors(self._redact(payload)),
            )
            raise AuthError(
                "Failed to retrieve Marketo access token. Check client id and secret."
            )

        logger.debug("Marketo access token acquired expires_in=%s", payload.get("expires_in"))
        return str(token)

    def _redact(self, payload: object) -> object:
        """
        Strip configured secrets from a remote payload before it is logged.
        """

        if not isinstance(payload, str):
            return payload
        redacted = payload
        for secret in (self._settings.client_secret, self._settings.client_id):
            if secret:
                redacted = redacted.replace(secret, "***")
        return redacted
