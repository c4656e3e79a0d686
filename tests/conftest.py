"""Pytest configuration and shared fixtures for command-diagnostics tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from bson.son import SON

from command_diagnostics.commands.base import Command, DiagnosticCapabilities
from command_diagnostics.commands.registry import CommandRegistry
from command_diagnostics.config import settings as settings_module
from command_diagnostics.config.settings import DiagnosticsSettings
from command_diagnostics.operation.context import OperationContext

CMD_NAME = "mockCmd"
CMD_VALUE = "abcdefgh"
SENSITIVE_FIELD_NAME = "sensitive"
SENSITIVE_VALUE = "12345678"
NAMESPACE = "myDB.myColl"


class MockCmd(Command):
    """Command with one sensitive field that supports diagnostic printing."""

    name = CMD_NAME

    def sensitive_field_names(self) -> frozenset[str]:
        return frozenset({SENSITIVE_FIELD_NAME})

    def enable_diagnostic_printing_on_failure(self) -> bool:
        return True


class MockCmdWithoutDiagnosticPrinting(MockCmd):
    """Same command, opted out of diagnostic printing."""

    def enable_diagnostic_printing_on_failure(self) -> bool:
        return False


class DeclaredMockCmd(Command):
    """Mock command declaring its capabilities instead of overriding methods."""

    name = "declaredMockCmd"
    capabilities = DiagnosticCapabilities(
        diagnostic_printing=True, sensitive_fields=frozenset({"secret"})
    )


@pytest.fixture(autouse=True)
def _reset_singletons(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate every test from process-wide settings and registrations."""
    for env_var in (
        settings_module.ENV_REDACT_LOGS,
        settings_module.ENV_DOCUMENT_STYLE,
        settings_module.ENV_MAX_DOCUMENT_LENGTH,
    ):
        monkeypatch.delenv(env_var, raising=False)
    DiagnosticsSettings.reset()
    CommandRegistry.reset()
    yield
    DiagnosticsSettings.reset()
    CommandRegistry.reset()


@pytest.fixture
def mock_cmd() -> MockCmd:
    return MockCmd()


@pytest.fixture
def cmd_bson() -> SON:
    """The mock command's request document."""
    return SON([(CMD_NAME, CMD_VALUE), (SENSITIVE_FIELD_NAME, SENSITIVE_VALUE)])


@pytest.fixture
def op_ctx() -> OperationContext:
    return OperationContext()


@pytest.fixture
def op_ctx_with_mock_cmd(op_ctx: OperationContext, mock_cmd: MockCmd, cmd_bson: SON) -> OperationContext:
    """Operation context with the mock command bound to its CurOp."""
    with op_ctx.client.lock:
        op_ctx.cur_op.set_generic_op_request_details(NAMESPACE, mock_cmd, cmd_bson)
    return op_ctx
