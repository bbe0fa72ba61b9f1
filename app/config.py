"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

_MAX_POLL_DELAY_CEILING_SECONDS = 60.0


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class MarketoSettings:
    """
    Marketo REST credentials.

    Every field may be absent at load time; the token provider refuses to
    run until all three are present.
    """

    endpoint: str | None = None
    client_id: str | None = None
    client_secret: str | None = None

    def missing_fields(self) -> list[str]:
        """
        Return the environment names of credentials that are not set.
        """

        missing: list[str] = []
        if not self.endpoint:
            missing.append("MARKETO_ENDPOINT")
        if not self.client_id:
            missing.append("MARKETO_CLIENT_ID")
        if not self.client_secret:
            missing.append("MARKETO_CLIENT_SECRET")
        return missing

    def __repr__(self) -> str:
        return (
            f"MarketoSettings(endpoint={self.endpoint!r}, "
            f"client_id={'***' if self.client_id else None}, "
            f"client_secret={'***' if self.client_secret else None})"
        )


@dataclass(frozen=True)
class BulkImportSettings:
    """
    Polling budget for bulk import jobs.
    """

    max_attempts: int = 10
    initial_delay_seconds: float = 2.0
    backoff_multiplier: float = 2.0
    max_delay_seconds: float = 30.0


@dataclass(frozen=True)
class ExternalHTTPSettings:
    """
    Shared HTTP behavior settings for outbound calls.
    """

    timeout_seconds: float = 15.0


@dataclass(frozen=True)
class GenerativeLanguageSettings:
    """
    Google Generative Language API settings.
    """

    api_key: str | None = None
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    model: str = "gemini-2.0-flash"
    temperature: float = 0.2


@lru_cache(maxsize=1)
def get_marketo_settings() -> MarketoSettings:
    """
    Return cached Marketo credentials from environment variables.
    """

    endpoint = _get_optional_str_env("MARKETO_ENDPOINT")
    return MarketoSettings(
        endpoint=endpoint.rstrip("/") if endpoint else None,
        client_id=_get_optional_str_env("MARKETO_CLIENT_ID"),
        client_secret=_get_optional_str_env("MARKETO_CLIENT_SECRET"),
    )


@lru_cache(maxsize=1)
def get_bulk_import_settings() -> BulkImportSettings:
    """
    Return bulk import polling settings from environment variables.
    """

    initial_delay = max(0.0, _get_float_env("BULK_IMPORT_INITIAL_DELAY_SECONDS", 2.0))
    max_delay = min(
        _MAX_POLL_DELAY_CEILING_SECONDS,
        max(initial_delay, _get_float_env("BULK_IMPORT_MAX_DELAY_SECONDS", 30.0)),
    )
    return BulkImportSettings(
        max_attempts=max(1, _get_int_env("BULK_IMPORT_MAX_ATTEMPTS", 10)),
        initial_delay_seconds=initial_delay,
        backoff_multiplier=max(1.0, _get_float_env("BULK_IMPORT_BACKOFF_MULTIPLIER", 2.0)),
        max_delay_seconds=max_delay,
    )


@lru_cache(maxsize=1)
def get_external_http_settings() -> ExternalHTTPSettings:
    """
    Return shared outbound HTTP settings from environment variables.
    """

    return ExternalHTTPSettings(
        timeout_seconds=max(1.0, _get_float_env("EXTERNAL_HTTP_TIMEOUT_SECONDS", 15.0)),
    )


@lru_cache(maxsize=1)
def get_generative_language_settings() -> GenerativeLanguageSettings:
    """
    Return Generative Language API settings from environment variables.
    """

    return GenerativeLanguageSettings(
        api_key=_get_optional_str_env("GEMINI_API_KEY"),
        base_url=_get_str_env(
            "GEMINI_BASE_URL",
            "https://generativelanguage.googleapis.com/v1beta",
        ).rstrip("/"),
        model=_get_str_env("GEMINI_MODEL", "gemini-2.0-flash"),
        temperature=min(2.0, max(0.0, _get_float_env("GEMINI_TEMPERATURE", 0.2))),
    )
