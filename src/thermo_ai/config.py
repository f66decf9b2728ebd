"""Configuration loading for thermo-ai.

Reads settings from environment variables (with .env support via python-dotenv)
and validates that all required values are present.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_USER_AGENT = "ThermoAI-iCal-Parser/1.1"
DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_DEADLINE_SECONDS = 540.0

FEED_CHECK_MODES = ("lenient", "strict")


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        gemini_api_key: API key for Google Gemini.
        gemini_model: Gemini model identifier used for extraction.
        log_level: Logging level (default ``"INFO"``).
        user_agent: ``User-Agent`` header sent with every feed fetch.
        feed_check_mode: ``"lenient"`` (body contains
            ``begin:vcalendar``, any case) or ``"strict"`` (trimmed body
            starts with ``BEGIN:VCALENDAR``).
        require_calendar_content_type: Also reject responses whose
            ``Content-Type`` is not ``text/calendar``.
        sync_max_workers: Worker pool size for fleet syncs; ``1`` keeps
            the sequential behaviour.
        sync_deadline_seconds: Wall-clock budget for one fleet sync.
        properties_file: Optional path to a JSON property store.
    """

    gemini_api_key: str
    gemini_model: str = DEFAULT_MODEL
    log_level: str = "INFO"
    user_agent: str = DEFAULT_USER_AGENT
    feed_check_mode: str = "lenient"
    require_calendar_content_type: bool = False
    sync_max_workers: int = 1
    sync_deadline_seconds: float = DEFAULT_DEADLINE_SECONDS
    properties_file: Path | None = None

    def __repr__(self) -> str:
        return (
            f"Settings(gemini_api_key='***', "
            f"gemini_model={self.gemini_model!r}, "
            f"log_level={self.log_level!r}, "
            f"user_agent={self.user_agent!r}, "
            f"feed_check_mode={self.feed_check_mode!r}, "
            f"require_calendar_content_type={self.require_calendar_content_type!r}, "
            f"sync_max_workers={self.sync_max_workers!r}, "
            f"sync_deadline_seconds={self.sync_deadline_seconds!r}, "
            f"properties_file={self.properties_file!r})"
        )


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the project root
    is picked up automatically.

    Returns:
        A validated :class:`Settings` instance.

    Raises:
        ConfigError: If ``GEMINI_API_KEY`` is missing, empty, or
            whitespace-only, or if an optional variable holds a value that
            cannot be interpreted.  The error message names the offending
            variable.
    """
    load_dotenv()

    api_key = os.environ.get("GEMINI_API_KEY", "")
    if not api_key.strip():
        raise ConfigError("Missing required environment variables: GEMINI_API_KEY")

    values: dict[str, object] = {"gemini_api_key": api_key}

    # Optional settings with defaults handled by the dataclass.
    for env_var, field_name in (
        ("GEMINI_MODEL", "gemini_model"),
        ("LOG_LEVEL", "log_level"),
        ("ICAL_USER_AGENT", "user_agent"),
    ):
        raw = os.environ.get(env_var, "").strip()
        if raw:
            values[field_name] = raw

    check_mode = os.environ.get("FEED_CHECK_MODE", "").strip().lower()
    if check_mode:
        if check_mode not in FEED_CHECK_MODES:
            raise ConfigError(
                f"Invalid FEED_CHECK_MODE: {check_mode!r} "
                f"(expected one of {', '.join(FEED_CHECK_MODES)})"
            )
        values["feed_check_mode"] = check_mode

    content_type = os.environ.get("REQUIRE_CALENDAR_CONTENT_TYPE", "").strip()
    if content_type:
        values["require_calendar_content_type"] = _parse_bool(
            "REQUIRE_CALENDAR_CONTENT_TYPE", content_type
        )

    workers = os.environ.get("SYNC_MAX_WORKERS", "").strip()
    if workers:
        values["sync_max_workers"] = _parse_positive(
            "SYNC_MAX_WORKERS", workers, int
        )

    deadline = os.environ.get("SYNC_DEADLINE_SECONDS", "").strip()
    if deadline:
        values["sync_deadline_seconds"] = _parse_positive(
            "SYNC_DEADLINE_SECONDS", deadline, float
        )

    properties_file = os.environ.get("PROPERTIES_FILE", "").strip()
    if properties_file:
        values["properties_file"] = Path(properties_file)

    return Settings(**values)


def _parse_bool(env_var: str, raw: str) -> bool:
    lowered = raw.lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    raise ConfigError(f"Invalid {env_var}: {raw!r} (expected true or false)")


def _parse_positive(env_var: str, raw: str, kind: type) -> int | float:
    try:
        value = kind(raw)
    except ValueError:
        raise ConfigError(f"Invalid {env_var}: {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"Invalid {env_var}: {raw!r} (must be positive)")
    return value
