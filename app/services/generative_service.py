"""
app/services/generative_service.py

Pass-through services for the two generative-text endpoints.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from fastapi import Depends

from app.api.dependencies import get_http_client
from app.config import get_generative_language_settings
from app.errors import ClientInputError, RemoteDecodeError
from llm_synthesis.adapter import BaseLLMAdapter, GeminiLLMAdapter
from llm_synthesis.prompt_builder import LeadParsingPromptBuilder, TitleDescriptionPromptBuilder
from llm_synthesis.validator import (
    LLMOutputValidationError,
    normalize_description,
    parse_structured_output,
)

logger = logging.getLogger(__name__)


class GenerativeService:
    """
    Wraps one model call per operation and decodes its output.
    """

    def __init__(self, *, adapter: BaseLLMAdapter) -> None:
        self._adapter = adapter
        self._lead_prompts = LeadParsingPromptBuilder()
        self._title_prompts = TitleDescriptionPromptBuilder()

    async def parse_leads(self, *, text: str, json_schema: dict[str, Any]) -> Any:
        """
        Extract structured data from free text following the caller's schema.
        """

        if not text.strip():
            raise ClientInputError("Request must include non-empty 'text'.")
        if not json_schema:
            raise ClientInputError("Request must include a 'jsonSchema' object.")

        raw = await self._adapter.generate(
            self._lead_prompts.build_prompt(text),
            response_schema=json_schema,
        )
        try:
            return parse_structured_output(raw)
        except LLMOutputValidationError as exc:
            logger.warning("Lead parsing output rejected stage=%s errors=%s", exc.stage, exc.errors)
            raise RemoteDecodeError("Failed to decode structured lead data from the model.") from exc

    async def describe_title(self, *, title: str) -> str:
        if not title.strip():
            raise ClientInputError("Request must include a non-empty 'title'.")

        raw = await self._adapter.generate(self._title_prompts.build_prompt(title))
        try:
            return normalize_description(raw)
        except LLMOutputValidationError as exc:
            raise RemoteDecodeError("The model returned an empty description.") from exc


def get_generative_service(
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> GenerativeService:
    return GenerativeService(
        adapter=GeminiLLMAdapter(
            settings=get_generative_language_settings(),
            http_client=http_client,
        )
    )
