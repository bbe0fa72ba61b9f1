"""
app/errors.py

Error taxonomy shared by connectors, services, and the HTTP layer.

Every error carries the HTTP status it is rendered with, so routers can let
them propagate and a single exception handler builds the error envelope.
"""

from __future__ import annotations

from typing import Any

_MAX_REMOTE_DETAIL_CHARS = 500


class ProxyError(Exception):
    """
    Base class for failures surfaced to the caller as an error envelope.
    """

    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(ProxyError):
    """
    Raised when required credentials or endpoints are not configured.
    """

    status_code = 500


class ClientInputError(ProxyError):
    """
    Raised when the caller omits or malforms a required request field.
    """

    status_code = 400


class AuthError(ProxyError):
    """
    Raised when the Marketo token exchange fails.
    """

    status_code = 500


class JobCreationError(ProxyError):
    """
    Raised when Marketo refuses to allocate a bulk import batch.
    """

    status_code = 502


class UploadError(ProxyError):
    """
    Raised when the payload upload for a created batch is rejected.
    """

    status_code = 502

    def __init__(self, message: str, *, batch_id: str, upstream_status: int) -> None:
        super().__init__(message)
        self.batch_id = batch_id
        self.upstream_status = upstream_status


class PollError(ProxyError):
    """
    Raised when a batch status query returns a failed or malformed response.
    """

    status_code = 502

    def __init__(self, message: str, *, batch_id: str, attempt: int) -> None:
        super().__init__(message)
        self.batch_id = batch_id
        self.attempt = attempt


class PollTimeoutError(ProxyError):
    """
    Raised when the polling budget runs out before a terminal status is seen.
    """

    status_code = 500

    def __init__(self, *, batch_id: str, attempts: int) -> None:
        super().__init__(
            f"Bulk import batch {batch_id} did not reach a terminal status "
            f"after {attempts} status checks."
        )
        self.batch_id = batch_id
        self.attempts = attempts


class RemoteServiceError(ProxyError):
    """
    Raised when a single-call upstream request does not succeed.
    """

    status_code = 502


class RemoteDecodeError(ProxyError):
    """
    Raised when an upstream response cannot be decoded into the expected shape.
    """

    status_code = 500


def summarize_remote_errors(payload: Any) -> str:
    """
    Render the error portion of a Marketo-style payload as a short string.

    Marketo reports failures as ``{"success": false, "errors": [{"code",
    "message"}]}``; anything else is rendered compactly and truncated.
    """

    if isinstance(payload, dict):
        errors = payload.get("errors")
        if isinstance(errors, list) and errors:
            parts: list[str] = []
            for error in errors:
                if isinstance(error, dict):
                    code = error.get("code")
                    message = error.get("message") or "unknown error"
                    parts.append(f"{code}: {message}" if code is not None else str(message))
                else:
                    parts.append(str(error))
            return "; ".join(parts)[:_MAX_REMOTE_DETAIL_CHARS]
        if "error" in payload:
            description = payload.get("error_description")
            text = f"{payload['error']}: {description}" if description else str(payload["error"])
            return text[:_MAX_REMOTE_DETAIL_CHARS]

    if payload is None or payload == "":
        return "empty response"
    return str(payload)[:_MAX_REMOTE_DETAIL_CHARS]
