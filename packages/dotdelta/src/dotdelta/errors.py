"""Error hierarchy for DOT ingestion, diffing and source loading."""

from __future__ import annotations


class DotDeltaError(Exception):
    """Base error for all dotdelta errors."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


# --- Syntax errors (terminal for the parse call that raised them) ---


class DotSyntaxError(DotDeltaError):
    """Malformed DOT text."""


class LexError(DotSyntaxError):
    """Invalid character or unterminated token."""

    def __init__(self, reason: str, *, offset: int):
        super().__init__(f"{reason} at offset {offset}")
        self.reason = reason
        self.offset = offset


class ParseError(DotSyntaxError):
    """Token stream does not match the grammar."""

    def __init__(self, *, position: int, expected: str, found: str):
        super().__init__(f"expected {expected} but found {found} at offset {position}")
        self.position = position
        self.expected = expected
        self.found = found


# --- Glue errors ---


class InterchangeError(DotDeltaError):
    """Interchange payload does not have the expected shape."""


class SourceError(DotDeltaError):
    """DOT text could not be loaded from a path, stdin or URL."""

    def __init__(self, message: str, *, location: str, cause: Exception | None = None):
        super().__init__(message, cause=cause)
        self.location = location


class ConfigurationError(DotDeltaError):
    """Invalid configuration value."""
