"""
app/services/lead_service.py

Pass-through services for single-lead upsert, field metadata and program search.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from fastapi import Depends

from app.api.dependencies import get_http_client
from app.config import MarketoSettings, get_marketo_settings
from app.connectors.marketo_auth import MarketoTokenProvider
from app.connectors.marketo_rest import MarketoRestClient
from app.errors import ClientInputError, RemoteDecodeError, RemoteServiceError

logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_FIELD = "email"
MAX_PROGRAM_RESULTS = 10
PROGRAM_PAGE_SIZE = 200
MAX_PROGRAM_PAGES = 5


class LeadService:
    """
    Authenticates and issues exactly one Marketo REST call per operation.
    """

    def __init__(
        self,
        *,
        marketo_settings: MarketoSettings,
        http_client: httpx.AsyncClient,
    ) -> None:
        self._http_client = http_client
        self._token_provider = MarketoTokenProvider(
            settings=marketo_settings,
            http_client=http_client,
        )

    async def _authorized_client(self) -> tuple[MarketoRestClient, str]:
        access_token = await self._token_provider.get_access_token()
        client = MarketoRestClient(
            endpoint=self._token_provider.endpoint,
            http_client=self._http_client,
        )
        return client, access_token

    async def upsert_leads(
        self,
        *,
        leads: list[dict[str, Any]],
        program_name: str | None = None,
        lookup_field: str | None = None,
    ) -> list[Any]:
        """
        Create or update leads and return Marketo's per-record statuses.
        """

        if not leads:
            raise ClientInputError("Request must include a non-empty 'leads' list.")

        client, access_token = await self._authorized_client()
        result = await client.upsert_leads(
            access_token=access_token,
            leads=leads,
            lookup_field=lookup_field or DEFAULT_LOOKUP_FIELD,
            program_name=program_name,
        )
        logger.info(
            "Lead upsert completed leads=%s program=%s",
            len(leads),
            program_name,
        )
        return result

    async def describe_fields(self) -> list[dict[str, Any]]:
        """
        Return lead fields that can be written through the lead REST API.

        Fields without a ``rest`` descriptor exist only for SOAP or the UI
        and are dropped.
        """

        client, access_token = await self._authorized_client()
        fields = await client.describe_leads(access_token=access_token)
        return [field for field in fields if _is_rest_usable(field)]

    async def search_programs(self, search: str | None) -> list[str] | None:
        """
        Return up to ten program names containing the search term.

        Pages through ``programs.json`` with ``offset`` until ten names
        match, a short page signals the end of the list, or
        ``MAX_PROGRAM_PAGES`` pages have been read.

        Returns an empty list for a blank term without calling Marketo, and
        ``None`` when the remote search fails, so the caller can degrade to
        an empty result instead of an error.
        """

        term = (search or "").strip()
        if not term:
            return []

        client, access_token = await self._authorized_client()
        lowered = term.lower()
        names: list[str] = []
        for page in range(MAX_PROGRAM_PAGES):
            try:
                programs = await client.search_programs(
                    access_token=access_token,
                    name=term,
                    max_return=PROGRAM_PAGE_SIZE,
                    offset=page * PROGRAM_PAGE_SIZE,
                )
            except (RemoteServiceError, RemoteDecodeError) as exc:
                logger.warning("Program search degraded to empty result term=%r error=%s", term, exc)
                return None

            for program in programs:
                name = program.get("name") if isinstance(program, dict) else None
                if not isinstance(name, str) or lowered not in name.lower():
                    continue
                if name not in names:
                    names.append(name)
                if len(names) >= MAX_PROGRAM_RESULTS:
                    return names

            if len(programs) < PROGRAM_PAGE_SIZE:
                break
        return names


def _is_rest_usable(field: Any) -> bool:
    if not isinstance(field, dict):
        return False
    rest = field.get("rest")
    return isinstance(rest, dict) and bool(rest.get("name"))


def get_lead_service(
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> LeadService:
    return LeadService(
        marketo_settings=get_marketo_settings(),
        http_client=http_client,
    )
