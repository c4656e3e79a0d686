"""Built-in command descriptors.

Query and write commands opt into diagnostic printing. Authentication and
user-management commands carry credentials and never do.
"""

from __future__ import annotations

from command_diagnostics.commands.base import Command, DiagnosticCapabilities

_PRINTABLE = DiagnosticCapabilities(diagnostic_printing=True)


class FindCommand(Command):
    name = "find"
    capabilities = _PRINTABLE


class AggregateCommand(Command):
    name = "aggregate"
    capabilities = _PRINTABLE


class CountCommand(Command):
    name = "count"
    capabilities = _PRINTABLE


class DistinctCommand(Command):
    name = "distinct"
    capabilities = _PRINTABLE


class CreateIndexesCommand(Command):
    name = "createIndexes"
    capabilities = _PRINTABLE


class InsertCommand(Command):
    name = "insert"
    capabilities = _PRINTABLE


class UpdateCommand(Command):
    name = "update"
    capabilities = _PRINTABLE


class DeleteCommand(Command):
    name = "delete"
    capabilities = _PRINTABLE


class CreateUserCommand(Command):
    name = "createUser"
    capabilities = DiagnosticCapabilities(sensitive_fields=frozenset({"pwd"}))


class UpdateUserCommand(Command):
    name = "updateUser"
    capabilities = DiagnosticCapabilities(sensitive_fields=frozenset({"pwd"}))


class SaslStartCommand(Command):
    name = "saslStart"
    capabilities = DiagnosticCapabilities(sensitive_fields=frozenset({"payload"}))


class SaslContinueCommand(Command):
    name = "saslContinue"
    capabilities = DiagnosticCapabilities(sensitive_fields=frozenset({"payload"}))


BUILTIN_COMMANDS: tuple[type[Command], ...] = (
    FindCommand,
    AggregateCommand,
    CountCommand,
    DistinctCommand,
    CreateIndexesCommand,
    InsertCommand,
    UpdateCommand,
    DeleteCommand,
    CreateUserCommand,
    UpdateUserCommand,
    SaslStartCommand,
    SaslContinueCommand,
)
