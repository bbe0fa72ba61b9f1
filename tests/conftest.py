"""
Shared fixtures: fake Marketo credentials, a respx router bound to the fake
endpoint, and a TestClient whose services use zero-delay polling.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import httpx
import pytest
import respx
from fastapi import Depends
from fastapi.testclient import TestClient

from app.api.dependencies import get_http_client
from app.config import BulkImportSettings, GenerativeLanguageSettings, MarketoSettings
from app.services.bulk_import_service import BulkImportService, get_bulk_import_service
from app.services.generative_service import GenerativeService, get_generative_service
from app.services.lead_service import LeadService, get_lead_service
from llm_synthesis.adapter import GeminiLLMAdapter

MARKETO_ENDPOINT = "https://123-abc-456.mktorest.test"
GEMINI_BASE_URL = "https://generativelanguage.test/v1beta"
TOKEN_PATH = "/identity/oauth/token"
CREATE_JOB_PATH = "/rest/bulk/v1/leads/create.json"


class RecordingSleep:
    """Stand-in for asyncio.sleep that records delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def upload_path(batch_id: str) -> str:
    return f"/rest/bulk/v1/leads/{batch_id}/file"


def status_path(batch_id: str) -> str:
    return f"/rest/bulk/v1/leads/batch/{batch_id}/status"


def status_response(status: str, **fields: object) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "requestId": "e42b#14272d07d78",
            "success": True,
            "result": [{"batchId": 800123, "status": status, **fields}],
        },
    )


def mock_token(mock: respx.MockRouter, token: str = "test-token") -> respx.Route:
    return mock.get(TOKEN_PATH).mock(
        return_value=httpx.Response(
            200,
            json={"access_token": token, "token_type": "bearer", "expires_in": 3599},
        )
    )


@pytest.fixture()
def marketo_settings() -> MarketoSettings:
    return MarketoSettings(
        endpoint=MARKETO_ENDPOINT,
        client_id="client-id-123",
        client_secret="client-secret-xyz",
    )


@pytest.fixture()
def import_settings() -> BulkImportSettings:
    return BulkImportSettings(
        max_attempts=10,
        initial_delay_seconds=2.0,
        backoff_multiplier=2.0,
        max_delay_seconds=30.0,
    )


@pytest.fixture()
def generative_settings() -> GenerativeLanguageSettings:
    return GenerativeLanguageSettings(
        api_key="gemini-test-key",
        base_url=GEMINI_BASE_URL,
        model="gemini-test",
    )


@pytest.fixture()
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture()
def marketo_mock() -> Iterator[respx.MockRouter]:
    with respx.mock(base_url=MARKETO_ENDPOINT, assert_all_called=False) as mock:
        yield mock


@pytest.fixture()
def gemini_mock() -> Iterator[respx.MockRouter]:
    with respx.mock(base_url=GEMINI_BASE_URL, assert_all_called=False) as mock:
        yield mock


@pytest.fixture()
async def http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture()
def client(
    marketo_settings: MarketoSettings,
    import_settings: BulkImportSettings,
    generative_settings: GenerativeLanguageSettings,
    recording_sleep: RecordingSleep,
) -> Iterator[TestClient]:
    from app.main import app

    def _bulk_import_service(
        shared_client: httpx.AsyncClient = Depends(get_http_client),
    ) -> BulkImportService:
        return BulkImportService(
            marketo_settings=marketo_settings,
            import_settings=import_settings,
            http_client=shared_client,
            sleep=recording_sleep,
        )

    def _lead_service(
        shared_client: httpx.AsyncClient = Depends(get_http_client),
    ) -> LeadService:
        return LeadService(marketo_settings=marketo_settings, http_client=shared_client)

    def _generative_service(
        shared_client: httpx.AsyncClient = Depends(get_http_client),
    ) -> GenerativeService:
        return GenerativeService(
            adapter=GeminiLLMAdapter(settings=generative_settings, http_client=shared_client)
        )

    app.dependency_overrides[get_bulk_import_service] = _bulk_import_service
    app.dependency_overrides[get_lead_service] = _lead_service
    app.dependency_overrides[get_generative_service] = _generative_service
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
