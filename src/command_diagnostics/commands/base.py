"""Base command descriptor definitions for command-diagnostics."""

from __future__ import annotations

from collections.abc import Set
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class DiagnosticCapabilities(BaseModel):
    """Diagnostic printing capabilities declared by a command type."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    diagnostic_printing: bool = Field(
        default=False,
        description="Command contents may be printed when the command fails.",
    )
    sensitive_fields: frozenset[str] = Field(
        default_factory=frozenset,
        description="Top-level field names whose values must never be printed.",
    )


@runtime_checkable
class SensitiveFieldSource(Protocol):
    """Anything that can declare which command fields are sensitive."""

    def sensitive_field_names(self) -> Set[str]:
        """Return the top-level field names whose values are confidential."""


class Command:
    """Registered definition of a command type.

    Subclasses should:
    - set :attr:`name` to the command's name as it appears as the first field
      of the request document (e.g. "find", "createIndexes")
    - either set :attr:`capabilities` or override
      :meth:`sensitive_field_names` and
      :meth:`enable_diagnostic_printing_on_failure`

    Sensitivity is a property of the command type, fixed when the command is
    registered, never of an individual request.
    """

    name: str = ""
    capabilities: DiagnosticCapabilities = DiagnosticCapabilities()

    def sensitive_field_names(self) -> Set[str]:
        """Return the top-level field names whose values are confidential."""

        return self.capabilities.sensitive_fields

    def enable_diagnostic_printing_on_failure(self) -> bool:
        """Return True if this command's contents may appear in failure diagnostics."""

        return self.capabilities.diagnostic_printing

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
