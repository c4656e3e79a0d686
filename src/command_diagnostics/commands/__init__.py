"""
Command descriptors.

Command types declare which request fields are sensitive and whether their
contents may be printed when they fail.
"""

from command_diagnostics.commands.base import (
    Command,
    DiagnosticCapabilities,
    SensitiveFieldSource,
)
from command_diagnostics.commands.declarative import (
    CommandDefinition,
    DeclaredCommand,
    load_commands_from_yaml,
)
from command_diagnostics.commands.registry import CommandRegistry, find_command, get_registry

__all__ = [
    "Command",
    "CommandDefinition",
    "CommandRegistry",
    "DeclaredCommand",
    "DiagnosticCapabilities",
    "SensitiveFieldSource",
    "find_command",
    "get_registry",
    "load_commands_from_yaml",
]
