"""
Field redaction.

Replaces the values of confidential top-level fields with :data:`REDACTION_MARKER`
while keeping every field name, then renders the result. Nested documents are
matched by their top-level key only; a non-sensitive top-level field is rendered
in full, including any nested fields.
"""

from __future__ import annotations

import logging
from collections.abc import Set
from dataclasses import dataclass
from typing import Any

from bson.son import SON

from command_diagnostics.config.settings import DocumentStyle
from command_diagnostics.printer.document import as_document, format_document, format_value

logger = logging.getLogger(__name__)

REDACTION_MARKER = "###"


def redact_document(
    document: Any,
    sensitive_fields: Set[str] = frozenset(),
    redact_all: bool = False,
) -> SON:
    """Return a copy of *document* with disallowed values replaced by the marker.

    Args:
        document: Mapping or raw BSON bytes. Anything else yields an empty document.
        sensitive_fields: Top-level field names whose values must be hidden.
        redact_all: Hide every value, regardless of *sensitive_fields*.

    Returns:
        An ordered copy with the same field names in the same order.
    """
    doc = as_document(document)
    redacted = SON()
    if doc is None:
        return redacted
    for name, value in doc.items():
        if is_sensitive(name, sensitive_fields, redact_all):
            redacted[name] = REDACTION_MARKER
        else:
            redacted[name] = value
    return redacted


@dataclass(frozen=True)
class FieldRedactor:
    """Renders a command as a single redacted diagnostic line."""

    redact_all: bool = False
    style: DocumentStyle = DocumentStyle.SHELL
    max_document_length: int | None = None

    def render_document(self, document: Any, sensitive_fields: Set[str] = frozenset()) -> str:
        """Render *document* with disallowed values redacted. Never raises."""
        try:
            redacted = redact_document(document, sensitive_fields, self.redact_all)
            return format_document(redacted, self.style, self.max_document_length)
        except Exception:
            logger.debug("Failed to render command document", exc_info=True)
            return format_document({}, self.style)

    def render(
        self,
        command_name: str,
        namespace: str | None,
        document: Any,
        sensitive_fields: Set[str] = frozenset(),
    ) -> str:
        """Render the command name, its namespace and its redacted document.

        The command name is always shown. In redact-all mode the namespace is
        hidden too, since it usually repeats the first field's value.
        """
        if namespace is None:
            shown_namespace = ""
        elif self.redact_all:
            shown_namespace = REDACTION_MARKER
        else:
            shown_namespace = namespace
        return "{{'commandName': {}, 'namespace': {}, 'command': {}}}".format(
            format_value(str(command_name), self.style),
            format_value(shown_namespace, self.style),
            self.render_document(document, sensitive_fields),
        )


def render_redacted(
    command_name: str,
    namespace: str | None,
    document: Any,
    sensitive_fields: Set[str] = frozenset(),
    redact_all: bool = False,
) -> str:
    """Convenience wrapper around :meth:`FieldRedactor.render`."""
    return FieldRedactor(redact_all=redact_all).render(
        command_name, namespace, document, sensitive_fields
    )


def is_sensitive(name: str, sensitive_fields: Set[str], redact_all: bool = False) -> bool:
    """Whether the value of top-level field *name* must be hidden."""
    return redact_all or name in sensitive_fields
