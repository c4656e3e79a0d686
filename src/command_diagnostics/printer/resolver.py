"""
Omission resolution.

Decides whether a command's contents may be shown in failure diagnostics. The
checks run in a fixed order and the first one that matches decides:

1. no operation context at all
2. no command bound to the current operation
3. the current operation asked to omit diagnostic information
4. the command type does not support diagnostic printing

Only when none of them match is the command shown, with its values redacted.
"""

from __future__ import annotations

from collections.abc import Set
from dataclasses import dataclass
from enum import Enum
from typing import Any

from command_diagnostics.operation.context import CurOpSnapshot, OperationContext


class OmissionReason(str, Enum):
    """Why command contents were left out. Values are the placeholder messages."""

    OP_CTX_IS_NULL = "opCtx is null"
    UNRECOGNIZED_COMMAND = "omitted: unrecognized command"
    UNSUPPORTED_CUR_OP = "omitted: this CurOp does not support diagnostic printing"
    UNSUPPORTED_COMMAND = "omitted: command does not support diagnostic printing"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class Omit:
    """Nothing may be shown; print the placeholder for *reason* instead."""

    reason: OmissionReason


@dataclass(frozen=True)
class ShowRedacted:
    """The command may be shown with sensitive values redacted."""

    command_name: str
    namespace: str | None
    document: Any
    sensitive_fields: Set[str]


Resolution = Omit | ShowRedacted


def resolve(op_ctx: OperationContext | None) -> Resolution:
    """Resolve what may be printed for the operation running on *op_ctx*."""
    if op_ctx is None:
        return Omit(OmissionReason.OP_CTX_IS_NULL)
    return resolve_snapshot(op_ctx.snapshot())


def resolve_snapshot(snapshot: CurOpSnapshot | None) -> Resolution:
    """Resolve what may be printed for an already copied CurOp state."""
    command = snapshot.command if snapshot is not None else None
    if command is None:
        return Omit(OmissionReason.UNRECOGNIZED_COMMAND)
    if snapshot.should_omit_diagnostic_information:
        return Omit(OmissionReason.UNSUPPORTED_CUR_OP)
    if not command.enable_diagnostic_printing_on_failure():
        return Omit(OmissionReason.UNSUPPORTED_COMMAND)
    sensitive_fields = _as_field_names(command.sensitive_field_names())
    if sensitive_fields is None:
        # Sensitivity is unknown, so nothing may be shown.
        return Omit(OmissionReason.UNRECOGNIZED_COMMAND)
    return ShowRedacted(
        command_name=command.name,
        namespace=snapshot.ns,
        document=snapshot.op_description,
        sensitive_fields=sensitive_fields,
    )


def _as_field_names(names: Any) -> frozenset[str] | None:
    """Normalize a command's sensitive field names, or None if they are unusable.

    A bare string is one field name, not a collection of characters.
    """
    if isinstance(names, str):
        return frozenset({names})
    try:
        fields = frozenset(names)
    except TypeError:
        return None
    if not all(isinstance(name, str) for name in fields):
        return None
    return fields
