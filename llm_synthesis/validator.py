"""Validation layer for raw generative-text output.

Parses structured JSON responses and plain-text descriptions.
"""

import json
import re
from typing import Any, List


class LLMOutputValidationError(Exception):
    """Raised when model output fails parsing or validation.

    Attributes:
        stage: Which validation step failed ("json_parse" or "empty").
        errors: List of human-readable error descriptions.
        raw_response: The original string that failed validation.
    """

    def __init__(
        self,
        stage: str,
        errors: List[str],
        raw_response: str,
    ) -> None:
        self.stage = stage
        self.errors = errors
        self.raw_response = raw_response
        message = (
            f"Model output validation failed at stage '{stage}': "
            + "; ".join(errors)
        )
        super().__init__(message)


def _strip_markdown_fences(text: str) -> str:
    """Remove optional markdown code fences wrapping JSON.

    Models sometimes wrap output in ```json ... ``` even when structured
    output is requested.

    Args:
        text: Raw model response string.

    Returns:
        The text with leading/trailing code fences removed, if present.
    """
    stripped = text.strip()
    match = re.match(
        r"^```(?:json)?\s*\n?(.*?)\n?\s*```$",
        stripped,
        re.DOTALL,
    )
    if match:
        return match.group(1).strip()
    return stripped


def parse_structured_output(raw_response: str) -> Any:
    """Parse a structured-output response into JSON data.

    Any JSON value is accepted; the shape was already constrained by the
    response schema sent with the request.

    Raises:
        LLMOutputValidationError: If the response is empty or not JSON.
    """
    cleaned = _strip_markdown_fences(raw_response or "")
    if not cleaned:
        raise LLMOutputValidationError(
            stage="empty",
            errors=["model returned no content"],
            raw_response=raw_response,
        )

    try:
        return json.loads(cleaned)
    except (json.JSONDecodeError, TypeError) as exc:
        raise LLMOutputValidationError(
            stage="json_parse",
            errors=[str(exc)],
            raw_response=raw_response,
        ) from exc


def normalize_description(raw_response: str) -> str:
    """Trim a free-text description and drop wrapping quotes."""
    text = _strip_markdown_fences(raw_response or "").strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in {'"', "'"}:
        text = text[1:-1].strip()
    if not text:
        raise LLMOutputValidationError(
            stage="empty",
            errors=["model returned no content"],
            raw_response=raw_response,
        )
    return text
