"""command-diagnostics package."""

from .commands.base import Command, DiagnosticCapabilities, SensitiveFieldSource
from .commands.declarative import load_commands_from_yaml
from .commands.registry import CommandRegistry, find_command, get_registry
from .config.settings import DiagnosticsSettings, DocumentStyle, get_settings
from .logging import (
    ScopedCommandDiagnostics,
    current_command_diagnostics,
    log_command_diagnostics,
)
from .operation.context import Client, CurOp, CurOpSnapshot, NetworkOp, OperationContext
from .printer.printer import Printer
from .printer.redactor import REDACTION_MARKER, FieldRedactor
from .printer.resolver import OmissionReason, Omit, ShowRedacted, resolve

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "REDACTION_MARKER",
    "Client",
    "Command",
    "CommandRegistry",
    "CurOp",
    "CurOpSnapshot",
    "DiagnosticCapabilities",
    "DiagnosticsSettings",
    "DocumentStyle",
    "FieldRedactor",
    "NetworkOp",
    "OmissionReason",
    "Omit",
    "OperationContext",
    "Printer",
    "ScopedCommandDiagnostics",
    "SensitiveFieldSource",
    "ShowRedacted",
    "current_command_diagnostics",
    "find_command",
    "get_registry",
    "get_settings",
    "load_commands_from_yaml",
    "log_command_diagnostics",
    "resolve",
]
