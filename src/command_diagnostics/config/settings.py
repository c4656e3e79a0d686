"""
Runtime settings for command diagnostics.

Settings are read from environment variables once, when the singleton is first
created, and can be changed afterwards through the setters (the redaction mode
is an operational toggle).

Environment Variables:
    COMMAND_DIAGNOSTICS_REDACT_LOGS: Redact every field value in diagnostic
        output, regardless of per-command sensitivity (default: false)
        Example: "true"

    COMMAND_DIAGNOSTICS_DOCUMENT_STYLE: How command documents are rendered,
        "shell" or "json" (default: shell)

    COMMAND_DIAGNOSTICS_MAX_DOCUMENT_LENGTH: Maximum length of a rendered
        document before it is cut with "..." (default: unlimited)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from typing import ClassVar

logger = logging.getLogger(__name__)


class DocumentStyle(str, Enum):
    """Rendering styles for command documents."""

    SHELL = "shell"  # Server toString() form: { a: 1, b: "x" }
    JSON = "json"  # Relaxed Extended JSON


# Environment variable names
ENV_REDACT_LOGS = "COMMAND_DIAGNOSTICS_REDACT_LOGS"
ENV_DOCUMENT_STYLE = "COMMAND_DIAGNOSTICS_DOCUMENT_STYLE"
ENV_MAX_DOCUMENT_LENGTH = "COMMAND_DIAGNOSTICS_MAX_DOCUMENT_LENGTH"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


class DiagnosticsSettings:
    """Process-wide settings for diagnostic printing."""

    _instance: ClassVar[DiagnosticsSettings | None] = None

    def __init__(self) -> None:
        self._redact_logs = False
        self._document_style = DocumentStyle.SHELL
        self._max_document_length: int | None = None
        self._load_from_env()

    @classmethod
    def get_instance(cls) -> DiagnosticsSettings:
        """Get or create the singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (for testing)."""
        cls._instance = None

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        redact_env = os.environ.get(ENV_REDACT_LOGS)
        if redact_env:
            self._redact_logs = redact_env.strip().lower() in _TRUE_VALUES

        style_env = os.environ.get(ENV_DOCUMENT_STYLE)
        if style_env:
            try:
                self._document_style = DocumentStyle(style_env.strip().lower())
            except ValueError:
                logger.warning(
                    "Unknown %s value %r, using %s",
                    ENV_DOCUMENT_STYLE,
                    style_env,
                    DocumentStyle.SHELL.value,
                )

        length_env = os.environ.get(ENV_MAX_DOCUMENT_LENGTH)
        if length_env:
            self._max_document_length = parse_max_document_length(length_env)

    def should_redact_logs(self) -> bool:
        """Whether every field value must be redacted."""
        return self._redact_logs

    def set_should_redact_logs(self, enabled: bool) -> None:
        """Toggle the redaction mode."""
        self._redact_logs = bool(enabled)

    @contextmanager
    def redact_logs_override(self, enabled: bool) -> Iterator[None]:
        """Temporarily set the redaction mode, restoring the previous value on exit."""
        previous = self._redact_logs
        self._redact_logs = bool(enabled)
        try:
            yield
        finally:
            self._redact_logs = previous

    @property
    def document_style(self) -> DocumentStyle:
        return self._document_style

    @document_style.setter
    def document_style(self, style: DocumentStyle) -> None:
        self._document_style = DocumentStyle(style)

    @property
    def max_document_length(self) -> int | None:
        return self._max_document_length

    @max_document_length.setter
    def max_document_length(self, length: int | None) -> None:
        if length is not None and length < 0:
            raise ValueError("max_document_length must be non-negative or None.")
        self._max_document_length = length


def parse_max_document_length(value: str) -> int | None:
    """Parse a document length limit.

    Args:
        value: Raw string value, usually from the environment.

    Returns:
        The limit, or None (unlimited) when the value is empty, not an
        integer, or negative.
    """
    value = value.strip()
    if not value:
        return None
    try:
        length = int(value)
    except ValueError:
        logger.warning("Invalid %s value %r, using unlimited", ENV_MAX_DOCUMENT_LENGTH, value)
        return None
    if length < 0:
        logger.warning("Negative %s value %d, using unlimited", ENV_MAX_DOCUMENT_LENGTH, length)
        return None
    return length


def get_settings() -> DiagnosticsSettings:
    """Return the singleton DiagnosticsSettings."""
    return DiagnosticsSettings.get_instance()


def should_redact_logs() -> bool:
    """Check if redaction mode is enabled.

    Convenience function that uses the singleton DiagnosticsSettings.
    """
    return DiagnosticsSettings.get_instance().should_redact_logs()


def set_should_redact_logs(enabled: bool) -> None:
    """Toggle redaction mode on the singleton DiagnosticsSettings."""
    DiagnosticsSettings.get_instance().set_should_redact_logs(enabled)
