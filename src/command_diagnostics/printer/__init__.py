"""
Command diagnostic printing.

Resolves whether the running command may be shown and renders it with
confidential values redacted.
"""

from command_diagnostics.printer.document import format_document, format_value
from command_diagnostics.printer.printer import Printer
from command_diagnostics.printer.redactor import (
    REDACTION_MARKER,
    FieldRedactor,
    redact_document,
    render_redacted,
)
from command_diagnostics.printer.resolver import (
    OmissionReason,
    Omit,
    Resolution,
    ShowRedacted,
    resolve,
    resolve_snapshot,
)

__all__ = [
    "REDACTION_MARKER",
    "FieldRedactor",
    "OmissionReason",
    "Omit",
    "Printer",
    "Resolution",
    "ShowRedacted",
    "format_document",
    "format_value",
    "redact_document",
    "render_redacted",
    "resolve",
    "resolve_snapshot",
]
