"""LLM adapters for generative-text calls.

Provides a base interface, an adapter for the Google Generative Language
API, and a deterministic mock for testing.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from app.config import GenerativeLanguageSettings
from app.connectors.base import BaseConnector
from app.errors import ConfigurationError, RemoteDecodeError, RemoteServiceError

logger = logging.getLogger(__name__)


class BaseLLMAdapter(ABC):
    """Abstract base for all LLM adapters."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Send a prompt to the model and return the raw response text.

        Args:
            prompt: The fully formatted prompt string.
            response_schema: Optional JSON schema the response must follow.
                When given, the model is asked for JSON output.

        Returns:
            Raw string response from the model.
        """


class GeminiLLMAdapter(BaseConnector, BaseLLMAdapter):
    """Adapter for the Generative Language ``generateContent`` endpoint.

    The API key travels in the ``x-goog-api-key`` header so it never shows
    up in request URLs.
    """

    def __init__(
        self,
        *,
        settings: GenerativeLanguageSettings,
        http_client: httpx.AsyncClient,
    ) -> None:
        super().__init__(source="generative_language", http_client=http_client)
        self._settings = settings

    async def generate(
        self,
        prompt: str,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> str:
        if not self._settings.api_key:
            raise ConfigurationError("Generative language API key is not configured: GEMINI_API_KEY.")

        generation_config: Dict[str, Any] = {"temperature": self._settings.temperature}
        if response_schema is not None:
            generation_config["responseMimeType"] = "application/json"
            generation_config["responseSchema"] = response_schema

        response = await self._send(
            method="POST",
            url=f"{self._settings.base_url}/models/{self._settings.model}:generateContent",
            headers={"x-goog-api-key": self._settings.api_key},
            json={
                "contents": [{"role": "user", "parts": [{"text": prompt}]}],
                "generationConfig": generation_config,
            },
        )

        if not response.is_success:
            detail = _error_message(self._try_decode_json(response))
            logger.error(
                "Generative language call failed status=%s model=%s detail=%s",
                response.status_code,
                self._settings.model,
                detail,
            )
            raise RemoteServiceError(
                f"Generative language API request failed ({response.status_code}): {detail}"
            )

        payload = self._decode_json(response)
        return _candidate_text(payload)


def _error_message(payload: Any) -> str:
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        return str(payload["error"].get("message") or payload["error"].get("status"))
    return str(payload)[:300] if payload else "empty response"


def _candidate_text(payload: Any) -> str:
    """Join the text parts of the first candidate."""
    candidates = payload.get("candidates") if isinstance(payload, dict) else None
    if not isinstance(candidates, list) or not candidates:
        block_reason = None
        if isinstance(payload, dict) and isinstance(payload.get("promptFeedback"), dict):
            block_reason = payload["promptFeedback"].get("blockReason")
        raise RemoteDecodeError(
            "Generative language API returned no candidates"
            + (f" (blocked: {block_reason})." if block_reason else ".")
        )

    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        raise RemoteDecodeError("Generative language API returned a candidate without content.")

    return "".join(
        part["text"] for part in parts if isinstance(part, dict) and isinstance(part.get("text"), str)
    )


# ---------------------------------------------------------------------------
# Fixed mock responses used for local testing.
# ---------------------------------------------------------------------------
_MOCK_STRUCTURED_RESPONSE = json.dumps(
    {"leads": [{"email": "jane@example.com", "firstName": "Jane", "lastName": "Doe"}]}
)

_MOCK_TEXT_RESPONSE = "A webinar series introducing the product to new prospects."


class MockLLMAdapter(BaseLLMAdapter):
    """Deterministic adapter that returns fixed responses.

    Used for local testing and CI pipelines where no model API is
    available. Records every prompt it receives.
    """

    def __init__(
        self,
        structured_response: str = _MOCK_STRUCTURED_RESPONSE,
        text_response: str = _MOCK_TEXT_RESPONSE,
    ) -> None:
        self._structured_response = structured_response
        self._text_response = text_response
        self.prompts: list = []

    async def generate(
        self,
        prompt: str,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> str:
        self.prompts.append(prompt)
        if response_schema is not None:
            return self._structured_response
        return self._text_response
