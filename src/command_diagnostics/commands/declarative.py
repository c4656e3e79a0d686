"""
Declarative Command Definitions.

Lets deployments declare the diagnostic capabilities of commands that have no
Python descriptor (plugins, server extensions) in YAML instead of code.

Example commands.yaml:
```yaml
commands:
  createSearchIndexes:
    diagnostic_printing: true
  setClusterSecret:
    sensitive_fields: [secret, previousSecret]
    diagnostic_printing: false
```
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from command_diagnostics.commands.base import Command, DiagnosticCapabilities
from command_diagnostics.commands.registry import CommandRegistry, get_registry

logger = logging.getLogger(__name__)


class CommandDefinition(BaseModel):
    """Declarative definition of one command type."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1, description="Command name.")
    sensitive_fields: frozenset[str] = Field(
        default_factory=frozenset,
        description="Top-level field names whose values are never printed.",
    )
    diagnostic_printing: bool = Field(
        default=False,
        description="Command contents may be printed on failure.",
    )


class DeclaredCommand(Command):
    """Command descriptor built from a :class:`CommandDefinition`."""

    def __init__(self, definition: CommandDefinition) -> None:
        self.name = definition.name
        self.capabilities = DiagnosticCapabilities(
            diagnostic_printing=definition.diagnostic_printing,
            sensitive_fields=definition.sensitive_fields,
        )


def parse_command_definitions(data: dict[str, Any]) -> list[CommandDefinition]:
    """Parse the ``commands`` mapping of a loaded YAML document.

    Invalid entries are logged and skipped.
    """
    definitions: list[CommandDefinition] = []
    commands_data = data.get("commands") or {}
    if not isinstance(commands_data, dict):
        logger.error(f"Expected 'commands' to be a mapping, got {type(commands_data).__name__}")
        return definitions

    for command_name, command_config in commands_data.items():
        if command_config is None:
            command_config = {}
        if not isinstance(command_config, dict):
            logger.error(f"Definition for command '{command_name}' must be a mapping")
            continue
        if "name" in command_config:
            # The mapping key is the command name.
            logger.error(f"Definition for command '{command_name}' must not set 'name'")
            continue
        config = {**command_config, "name": str(command_name)}
        try:
            definitions.append(CommandDefinition.model_validate(config))
        except ValidationError as e:
            logger.error(f"Invalid definition for command '{command_name}': {e}")
    return definitions


def load_commands_from_yaml(
    config_path: Path, registry: CommandRegistry | None = None
) -> list[Command]:
    """Load command definitions from a YAML file and register them.

    Returns:
        The registered command descriptors. An unreadable or malformed file
        registers nothing.
    """
    if not config_path.exists():
        logger.warning(f"Command definitions not found: {config_path}")
        return []

    try:
        data = yaml.safe_load(config_path.read_text()) or {}
    except (yaml.YAMLError, OSError) as e:
        logger.error(f"Failed to load command definitions: {e}")
        return []
    if not isinstance(data, dict):
        logger.error(f"Command definitions in {config_path} must be a mapping")
        return []

    registry = registry or get_registry()
    registered: list[Command] = []
    for definition in parse_command_definitions(data):
        try:
            registered.append(registry.register_command(DeclaredCommand(definition)))
        except ValueError as e:
            logger.error(f"Failed to register command '{definition.name}': {e}")

    logger.info(f"Loaded {len(registered)} command definitions from {config_path}")
    return registered
