"""
Operation context and current-operation state.

A minimal model of the execution context a command runs on. The thread running
the operation mutates its :class:`CurOp`; other threads (watchdogs, crash
handlers) read it through :meth:`OperationContext.snapshot`, which copies every
field the printer needs in one critical section under the client lock.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from threading import RLock
from typing import Any

from bson.son import SON

from command_diagnostics.commands.base import Command

# A request document: any mapping, or raw BSON bytes.
Document = Mapping[str, Any] | bytes


class NetworkOp(str, Enum):
    """Wire protocol operation a request arrived on."""

    DB_MSG = "dbMsg"
    DB_QUERY = "dbQuery"
    DB_UPDATE = "dbUpdate"
    DB_INSERT = "dbInsert"
    DB_DELETE = "dbDelete"
    DB_GET_MORE = "dbGetMore"
    DB_KILL_CURSORS = "dbKillCursors"


@dataclass
class Client:
    """A connection. Its lock guards every operation's CurOp state."""

    desc: str = "conn"
    lock: RLock = field(default_factory=RLock, repr=False, compare=False)


@dataclass(frozen=True)
class CurOpSnapshot:
    """Immutable copy of the CurOp fields read by diagnostic printing."""

    command: Command | None = None
    op_description: Document | None = None
    ns: str | None = None
    should_omit_diagnostic_information: bool = False
    network_op: NetworkOp | None = None


class CurOp:
    """Live record of the command currently executing on an operation."""

    def __init__(self, lock: RLock) -> None:
        self._lock = lock
        self._command: Command | None = None
        self._op_description: Document | None = None
        self._ns: str | None = None
        self._network_op: NetworkOp | None = None
        self._should_omit_diagnostic_information = False

    def set_generic_op_request_details(
        self,
        ns: str | None,
        command: Command | None,
        cmd_obj: Document | None,
        network_op: NetworkOp = NetworkOp.DB_QUERY,
    ) -> None:
        """Bind the command being executed and a copy of its request document."""
        cmd_obj = _owned_document(cmd_obj)
        with self._lock:
            self._ns = ns
            self._command = command
            self._op_description = cmd_obj
            self._network_op = network_op

    def set_should_omit_diagnostic_information(self, omit: bool) -> None:
        """Mark this operation's state as unsafe or inconsistent for diagnostic printing."""
        with self._lock:
            self._should_omit_diagnostic_information = bool(omit)

    @property
    def command(self) -> Command | None:
        return self._command

    @property
    def op_description(self) -> Document | None:
        return self._op_description

    @property
    def ns(self) -> str | None:
        return self._ns

    @property
    def network_op(self) -> NetworkOp | None:
        return self._network_op

    @property
    def should_omit_diagnostic_information(self) -> bool:
        return self._should_omit_diagnostic_information

    def snapshot(self) -> CurOpSnapshot:
        """Copy the current state under the client lock."""
        with self._lock:
            return CurOpSnapshot(
                command=self._command,
                op_description=self._op_description,
                ns=self._ns,
                should_omit_diagnostic_information=self._should_omit_diagnostic_information,
                network_op=self._network_op,
            )


def _owned_document(cmd_obj: Any) -> Any:
    """Copy a request document so later changes by the caller do not show through."""
    if isinstance(cmd_obj, (bytes, bytearray, memoryview)):
        return bytes(cmd_obj)
    if isinstance(cmd_obj, Mapping):
        try:
            return SON(copy.deepcopy(list(cmd_obj.items())))
        except (TypeError, copy.Error):
            return SON(cmd_obj)
    return cmd_obj


class OperationContext:
    """Execution context of a single operation on a client."""

    def __init__(self, client: Client | None = None) -> None:
        self.client = client or Client()
        self._cur_op = CurOp(self.client.lock)

    @property
    def cur_op(self) -> CurOp:
        return self._cur_op

    def snapshot(self) -> CurOpSnapshot:
        """Return a consistent copy of the current operation's state."""
        return self._cur_op.snapshot()

    def __repr__(self) -> str:
        return f"<OperationContext client={self.client.desc!r}>"
