"""Lazy diagnostic printer for the command running on an operation."""

from __future__ import annotations

import logging

from command_diagnostics.config.settings import DiagnosticsSettings
from command_diagnostics.operation.context import OperationContext
from command_diagnostics.printer.redactor import FieldRedactor
from command_diagnostics.printer.resolver import OmissionReason, Omit, Resolution, resolve

logger = logging.getLogger(__name__)


class Printer:
    """Describes the command currently running on an operation context.

    Nothing is read at construction time: the current operation is inspected
    every time the printer is formatted (``str(printer)``, ``f"{printer}"``, or
    as a lazy ``%s`` logging argument), so it always reflects the state at
    format time. Formatting never raises.
    """

    __slots__ = ("_op_ctx", "_settings")

    OP_CTX_IS_NULL_MSG = OmissionReason.OP_CTX_IS_NULL.message
    OMIT_UNRECOGNIZED_COMMAND_MSG = OmissionReason.UNRECOGNIZED_COMMAND.message
    OMIT_UNSUPPORTED_CUR_OP_MSG = OmissionReason.UNSUPPORTED_CUR_OP.message
    OMIT_UNSUPPORTED_COMMAND_MSG = OmissionReason.UNSUPPORTED_COMMAND.message

    def __init__(
        self,
        op_ctx: OperationContext | None,
        settings: DiagnosticsSettings | None = None,
    ) -> None:
        self._op_ctx = op_ctx
        self._settings = settings

    @property
    def op_ctx(self) -> OperationContext | None:
        return self._op_ctx

    def resolve(self) -> Resolution:
        """Resolve what may be printed right now."""
        return resolve(self._op_ctx)

    def format(self) -> str:
        """Render the diagnostic line for the current state."""
        if self._op_ctx is None:
            return self.OP_CTX_IS_NULL_MSG
        try:
            resolution = self.resolve()
            if isinstance(resolution, Omit):
                return resolution.reason.message
            redactor = self._make_redactor()
            return redactor.render(
                resolution.command_name,
                resolution.namespace,
                resolution.document,
                resolution.sensitive_fields,
            )
        except Exception:
            # Must not raise; callers are failure handlers.
            logger.debug("Failed to format command diagnostics", exc_info=True)
            return self.OMIT_UNRECOGNIZED_COMMAND_MSG

    def _make_redactor(self) -> FieldRedactor:
        # Settings are read once per format call.
        settings = self._settings or DiagnosticsSettings.get_instance()
        return FieldRedactor(
            redact_all=settings.should_redact_logs(),
            style=settings.document_style,
            max_document_length=settings.max_document_length,
        )

    def __str__(self) -> str:
        return self.format()

    def __format__(self, format_spec: str) -> str:
        return format(self.format(), format_spec)

    def __repr__(self) -> str:
        return f"<Printer op_ctx={self._op_ctx!r}>"
