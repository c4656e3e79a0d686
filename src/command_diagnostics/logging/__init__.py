"""
Secret-safe logging of command diagnostics.

Diagnostics are passed to the logger as lazy ``%s`` arguments, so the current
operation is only inspected (and redacted) when a record is actually emitted.
"""

from __future__ import annotations

import logging
import threading
from types import TracebackType

from command_diagnostics.operation.context import OperationContext
from command_diagnostics.printer.printer import Printer

_DIAGNOSTICS_LOGGER_NAME = "command_diagnostics.diagnostics"
_scopes = threading.local()


def _get_logger(logger: logging.Logger | None) -> logging.Logger:
    return logger or logging.getLogger(_DIAGNOSTICS_LOGGER_NAME)


def _scope_stack() -> list[Printer]:
    stack = getattr(_scopes, "stack", None)
    if stack is None:
        stack = []
        _scopes.stack = stack
    return stack


def log_command_diagnostics(
    op_ctx: OperationContext | None,
    message: str = "Command diagnostics",
    logger: logging.Logger | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log a description of the command running on *op_ctx*."""
    _get_logger(logger).log(level, "%s: %s", message, Printer(op_ctx))


class ScopedCommandDiagnostics:
    """Keep an operation's diagnostics available while a block runs.

    While the block runs, :func:`current_command_diagnostics` includes this
    operation (crash handlers use it to describe what the thread was doing).
    An exception escaping the block is logged with the diagnostics and then
    propagates unchanged.

    Example:
        with ScopedCommandDiagnostics(op_ctx):
            run_command(op_ctx, request)
    """

    def __init__(
        self,
        op_ctx: OperationContext | None,
        logger: logging.Logger | None = None,
        level: int = logging.ERROR,
    ) -> None:
        self._printer = Printer(op_ctx)
        self._logger = _get_logger(logger)
        self._level = level

    @property
    def printer(self) -> Printer:
        return self._printer

    def __enter__(self) -> Printer:
        _scope_stack().append(self._printer)
        return self._printer

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        stack = _scope_stack()
        for i in range(len(stack) - 1, -1, -1):
            if stack[i] is self._printer:
                del stack[i]
                break
        if exc_type is not None and issubclass(exc_type, Exception):
            self._logger.log(
                self._level,
                "Operation failed with %s: %s",
                exc_type.__name__,
                self._printer,
            )
        return False


def current_command_diagnostics() -> list[str]:
    """Render every active diagnostics scope of the calling thread, outermost first."""
    return [printer.format() for printer in _scope_stack()]


__all__ = [
    "ScopedCommandDiagnostics",
    "current_command_diagnostics",
    "log_command_diagnostics",
]
