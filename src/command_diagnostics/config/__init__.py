"""Configuration module for command diagnostics."""

from command_diagnostics.config.settings import (
    DiagnosticsSettings,
    DocumentStyle,
    get_settings,
    set_should_redact_logs,
    should_redact_logs,
)

__all__ = [
    "DiagnosticsSettings",
    "DocumentStyle",
    "get_settings",
    "set_should_redact_logs",
    "should_redact_logs",
]
