"""Global registry of command descriptors."""

from __future__ import annotations

import logging
from importlib import metadata
from threading import RLock

from .base import Command
from .builtin import BUILTIN_COMMANDS

_ENTRY_POINT_GROUP = "command_diagnostics.commands"
_log = logging.getLogger(__name__)


class CommandRegistry:
    """Singleton registry of command descriptors, keyed by command name.

    The first ``CommandRegistry()`` call builds the registry: built-in commands
    are registered, then plugins from the ``command_diagnostics.commands``
    entry-point group. Later calls return the same registry.
    """

    _instance: CommandRegistry | None = None
    _instance_lock = RLock()
    _commands: dict[str, Command]
    _lock: RLock

    def __new__(cls) -> CommandRegistry:
        with cls._instance_lock:
            if cls._instance is None:
                registry = super().__new__(cls)
                registry._commands = {}
                registry._lock = RLock()
                # Published before loading so plugins may look it up while loading.
                cls._instance = registry
                for command_class in BUILTIN_COMMANDS:
                    registry.register_command(command_class)
                registry._discover_entry_points()
            return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next call rebuilds it (for testing)."""
        with cls._instance_lock:
            cls._instance = None

    def register_command(self, command: Command | type[Command]) -> Command:
        """Register a command descriptor (or a Command subclass, which is instantiated).

        Re-registering an equivalent descriptor is a no-op and returns the one
        already registered.
        """

        if isinstance(command, type):
            if not issubclass(command, Command):
                raise TypeError("command must be a Command instance or subclass.")
            command = command()
        elif not isinstance(command, Command):
            raise TypeError("command must be a Command instance or subclass.")

        name = (command.name or "").strip()
        if not name:
            raise ValueError("Command name must be a non-empty string.")
        with self._lock:
            existing = self._commands.get(name)
            if existing is not None:
                if not _same_definition(existing, command):
                    raise ValueError(
                        f"Command '{name}' is already registered to {type(existing).__name__}."
                    )
                return existing
            self._commands[name] = command
        _log.debug("Registered command: %s", name)
        return command

    def find_command(self, name: str) -> Command | None:
        """Return the descriptor registered under *name*, or None."""

        with self._lock:
            return self._commands.get(name.strip())

    def list_commands(self) -> list[str]:
        """Return a sorted list of registered command names."""

        with self._lock:
            return sorted(self._commands.keys())

    def _discover_entry_points(self) -> None:
        """Load and register command descriptors from entry points."""

        for entry_point in metadata.entry_points(group=_ENTRY_POINT_GROUP):
            try:
                loaded = entry_point.load()
            except Exception:
                _log.debug(
                    "Failed to load command entry point '%s'.", entry_point.name, exc_info=True
                )
                continue

            if not (
                isinstance(loaded, Command)
                or (isinstance(loaded, type) and issubclass(loaded, Command))
            ):
                _log.debug(
                    "Command entry point '%s' resolved to %r, not a Command; skipping.",
                    entry_point.name,
                    loaded,
                )
                continue

            try:
                self.register_command(loaded)
            except Exception:
                _log.warning(
                    "Failed to register command entry point '%s'.", entry_point.name, exc_info=True
                )


def _same_definition(a: Command, b: Command) -> bool:
    return type(a) is type(b) and a.name == b.name and a.capabilities == b.capabilities


def get_registry() -> CommandRegistry:
    """Return the global command registry singleton."""

    return CommandRegistry()


def find_command(name: str) -> Command | None:
    """Look up a command descriptor in the global registry."""

    return get_registry().find_command(name)
