"""Operation context and current-operation state."""

from command_diagnostics.operation.context import (
    Client,
    CurOp,
    CurOpSnapshot,
    Document,
    NetworkOp,
    OperationContext,
)

__all__ = [
    "Client",
    "CurOp",
    "CurOpSnapshot",
    "Document",
    "NetworkOp",
    "OperationContext",
]
