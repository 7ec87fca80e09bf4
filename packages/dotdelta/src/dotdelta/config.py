"""Settings read from ``DOTDELTA_*`` environment variables."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotdelta.errors import ConfigurationError

DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_POLL_INTERVAL = 60.0
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_JSON_INDENT = 2


@dataclass(slots=True, frozen=True)
class Settings:
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    log_level: str = DEFAULT_LOG_LEVEL
    json_indent: int | None = DEFAULT_JSON_INDENT

    @classmethod
    def from_env(cls, *, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from the environment, falling back to defaults."""
        env = os.environ if environ is None else environ

        return cls(
            http_timeout=_positive_float(env, "DOTDELTA_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
            poll_interval=_positive_float(env, "DOTDELTA_POLL_INTERVAL", DEFAULT_POLL_INTERVAL),
            log_level=parse_log_level(env.get("DOTDELTA_LOG_LEVEL") or DEFAULT_LOG_LEVEL),
            json_indent=_indent(env.get("DOTDELTA_JSON_INDENT")),
        )


def parse_log_level(value: str) -> str:
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"unknown log level: {value!r}")
    return level


def _positive_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}", cause=exc) from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def _indent(raw: str | None) -> int | None:
    if raw is None or raw.strip() == "":
        return DEFAULT_JSON_INDENT
    if raw.strip().lower() == "none":
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"DOTDELTA_JSON_INDENT must be an integer, got {raw!r}", cause=exc
        ) from exc
    if value < 0:
        raise ConfigurationError(f"DOTDELTA_JSON_INDENT must not be negative, got {raw!r}")
    return value or None
