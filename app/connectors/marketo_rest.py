"""
app/connectors/marketo_rest.py

Single-call Marketo REST endpoints: lead upsert, lead describe, program search.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.connectors.base import BaseConnector
from app.errors import RemoteDecodeError, RemoteServiceError, summarize_remote_errors

logger = logging.getLogger(__name__)

LEADS_PATH = "/rest/v1/leads.json"
LEADS_PUSH_PATH = "/rest/v1/leads/push.json"
LEADS_DESCRIBE_PATH = "/rest/v1/leads/describe.json"
PROGRAMS_PATH = "/rest/asset/v1/programs.json"


class MarketoRestClient(BaseConnector):
    """
    Wrapper for the Marketo lead and asset REST APIs.
    """

    def __init__(self, *, endpoint: str, http_client: httpx.AsyncClient) -> None:
        super().__init__(source="marketo_rest", http_client=http_client)
        self._endpoint = endpoint.rstrip("/")

    async def upsert_leads(
        self,
        *,
        access_token: str,
        leads: list[dict[str, Any]],
        lookup_field: str,
        program_name: str | None = None,
    ) -> list[Any]:
        """
        Create or update leads, pushing them into a program when one is named.
        """

        if program_name:
            url = f"{self._endpoint}{LEADS_PUSH_PATH}"
            body: dict[str, Any] = {
                "programName": program_name,
                "lookupField": lookup_field,
                "input": leads,
            }
        else:
            url = f"{self._endpoint}{LEADS_PATH}"
            body = {
                "action": "createOrUpdate",
                "lookupField": lookup_field,
                "input": leads,
            }

        payload = await self._call(
            method="POST",
            url=url,
            access_token=access_token,
            json=body,
            operation="lead upsert",
        )
        return _result_list(payload)

    async def describe_leads(self, *, access_token: str) -> list[Any]:
        payload = await self._call(
            method="GET",
            url=f"{self._endpoint}{LEADS_DESCRIBE_PATH}",
            access_token=access_token,
            operation="lead field describe",
        )
        return _result_list(payload)

    async def search_programs(
        self,
        *,
        access_token: str,
        name: str,
        max_return: int,
        offset: int = 0,
    ) -> list[Any]:
        payload = await self._call(
            method="GET",
            url=f"{self._endpoint}{PROGRAMS_PATH}",
            access_token=access_token,
            params={"name": name, "maxReturn": max_return, "offset": offset},
            operation="program search",
        )
        return _result_list(payload)

    async def _call(
        self,
        *,
        method: str,
        url: str,
        access_token: str,
        operation: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> dict[str, Any]:
        """
        Send one request and return the decoded Marketo success payload.
        """

        response = await self._send(
            method=method,
            url=url,
            params=params,
            headers=self.bearer_headers(access_token),
            json=json,
        )

        if not response.is_success:
            detail = summarize_remote_errors(self._try_decode_json(response))
            logger.error(
                "Marketo %s failed status=%s detail=%s",
                operation,
                response.status_code,
                detail,
            )
            raise RemoteServiceError(f"Marketo {operation} failed ({response.status_code}): {detail}")

        payload = self._decode_json(response)
        if not isinstance(payload, dict):
            raise RemoteDecodeError(f"Marketo {operation} returned an unexpected payload.")

        if payload.get("success") is not True:
            detail = summarize_remote_errors(payload)
            logger.error("Marketo %s rejected detail=%s", operation, detail)
            raise RemoteServiceError(f"Marketo {operation} failed: {detail}")

        return payload


def _result_list(payload: dict[str, Any]) -> list[Any]:
    result = payload.get("result")
    return result if isinstance(result, list) else []
