"""Unit tests for the Marketo token provider."""

from __future__ import annotations

import httpx
import pytest
from respx import MockRouter

from app.config import MarketoSettings
from app.connectors.marketo_auth import MarketoTokenProvider
from app.errors import AuthError, ConfigurationError
from conftest import MARKETO_ENDPOINT, TOKEN_PATH, mock_token


@pytest.mark.asyncio
async def test_returns_access_token_from_client_credentials_exchange(
    marketo_settings: MarketoSettings,
    http_client: httpx.AsyncClient,
    marketo_mock: MockRouter,
) -> None:
    route = mock_token(marketo_mock, token="abc-123")
    provider = MarketoTokenProvider(settings=marketo_settings, http_client=http_client)

    token = await provider.get_access_token()

    assert token == "abc-123"
    params = route.calls.last.request.url.params
    assert params["grant_type"] == "client_credentials"
    assert params["client_id"] == "client-id-123"
    assert params["client_secret"] == "client-secret-xyz"


@pytest.mark.asyncio
async def test_fetches_a_fresh_token_on_every_call(
    marketo_settings: MarketoSettings,
    http_client: httpx.AsyncClient,
    marketo_mock: MockRouter,
) -> None:
    route = mock_token(marketo_mock)
    provider = MarketoTokenProvider(settings=marketo_settings, http_client=http_client)

    await provider.get_access_token()
    await provider.get_access_token()

    assert route.call_count == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "settings, missing",
    [
        (MarketoSettings(client_id="id", client_secret="secret"), "MARKETO_ENDPOINT"),
        (MarketoSettings(endpoint=MARKETO_ENDPOINT, client_secret="secret"), "MARKETO_CLIENT_ID"),
        (MarketoSettings(endpoint=MARKETO_ENDPOINT, client_id="id"), "MARKETO_CLIENT_SECRET"),
    ],
)
async def test_missing_configuration_fails_before_any_network_call(
    settings: MarketoSettings,
    missing: str,
    http_client: httpx.AsyncClient,
    marketo_mock: MockRouter,
) -> None:
    provider = MarketoTokenProvider(settings=settings, http_client=http_client)

    with pytest.raises(ConfigurationError) as exc_info:
        await provider.get_access_token()

    assert missing in exc_info.value.message
    assert exc_info.value.status_code == 500
    assert len(marketo_mock.calls) == 0


@pytest.mark.asyncio
async def test_non_success_status_raises_auth_error_without_leaking_secret(
    marketo_settings: MarketoSettings,
    http_client: httpx.AsyncClient,
    marketo_mock: MockRouter,
) -> None:
    marketo_mock.get(TOKEN_PATH).mock(
        return_value=httpx.Response(
            401,
            json={"error": "unauthorized", "error_description": "Bad client credentials"},
        )
    )
    provider = MarketoTokenProvider(settings=marketo_settings, http_client=http_client)

    with pytest.raises(AuthError) as exc_info:
        await provider.get_access_token()

    assert "client-secret-xyz" not in str(exc_info.value)
    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_success_status_without_token_field_raises_auth_error(
    marketo_settings: MarketoSettings,
    http_client: httpx.AsyncClient,
    marketo_mock: MockRouter,
) -> None:
    marketo_mock.get(TOKEN_PATH).mock(return_value=httpx.Response(200, json={"token_type": "bearer"}))
    provider = MarketoTokenProvider(settings=marketo_settings, http_client=http_client)

    with pytest.raises(AuthError):
        await provider.get_access_token()


@pytest.mark.asyncio
async def test_transport_failure_raises_auth_error(
    marketo_settings: MarketoSettings,
    http_client: httpx.AsyncClient,
    marketo_mock: MockRouter,
) -> None:
    marketo_mock.get(TOKEN_PATH).mock(side_effect=httpx.ConnectError("connection refused"))
    provider = MarketoTokenProvider(settings=marketo_settings, http_client=http_client)

    with pytest.raises(AuthError):
        await provider.get_access_token()


def test_settings_repr_masks_credentials(marketo_settings: MarketoSettings) -> None:
    rendered = repr(marketo_settings)

    assert "client-secret-xyz" not in rendered
    assert "client-id-123" not in rendered
    assert MARKETO_ENDPOINT in rendered
