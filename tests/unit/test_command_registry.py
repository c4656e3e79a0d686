from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import pytest

from command_diagnostics.commands.base import Command, DiagnosticCapabilities
from command_diagnostics.commands.registry import CommandRegistry, find_command


class DummyCommand(Command):
    name = "dummy"
    capabilities = DiagnosticCapabilities(diagnostic_printing=True)


class OtherDummyCommand(Command):
    name = "dummy"


class PluginCommand(Command):
    name = "pluginCmd"
    capabilities = DiagnosticCapabilities(sensitive_fields=frozenset({"token"}))


def test_registry_is_singleton() -> None:
    r1 = CommandRegistry()
    r2 = CommandRegistry()
    assert r1 is r2


def test_reset_rebuilds_registry() -> None:
    registry = CommandRegistry()
    registry.register_command(DummyCommand)

    CommandRegistry.reset()
    rebuilt = CommandRegistry()

    assert rebuilt is not registry
    assert rebuilt.find_command("dummy") is None
    assert rebuilt.find_command("find") is not None


def test_concurrent_first_use_builds_one_registry() -> None:
    barrier = threading.Barrier(8)
    registries: list[CommandRegistry] = []

    def build() -> None:
        barrier.wait()
        registries.append(CommandRegistry())

    threads = [threading.Thread(target=build) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len({id(r) for r in registries}) == 1
    assert registries[0].find_command("find") is not None


def test_builtin_commands_are_registered() -> None:
    registry = CommandRegistry()

    assert {"find", "aggregate", "createIndexes", "createUser", "saslStart"} <= set(
        registry.list_commands()
    )
    assert registry.find_command("find").enable_diagnostic_printing_on_failure()
    create_user = registry.find_command("createUser")
    assert not create_user.enable_diagnostic_printing_on_failure()
    assert "pwd" in create_user.sensitive_field_names()


def test_register_class_and_find_instance() -> None:
    registry = CommandRegistry()

    registered = registry.register_command(DummyCommand)

    assert isinstance(registered, DummyCommand)
    assert registry.find_command("dummy") is registered
    assert find_command("dummy") is registered


def test_find_unknown_command_returns_none() -> None:
    assert CommandRegistry().find_command("noSuchCommand") is None


def test_command_names_are_case_sensitive() -> None:
    assert CommandRegistry().find_command("createindexes") is None


def test_reregistering_equivalent_command_is_noop() -> None:
    registry = CommandRegistry()

    first = registry.register_command(DummyCommand())
    second = registry.register_command(DummyCommand())

    assert second is first


def test_register_duplicate_name_rejected() -> None:
    registry = CommandRegistry()

    registry.register_command(DummyCommand)
    with pytest.raises(ValueError):
        registry.register_command(OtherDummyCommand)


def test_register_rejects_non_commands() -> None:
    registry = CommandRegistry()

    with pytest.raises(TypeError):
        registry.register_command(object)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        registry.register_command("find")  # type: ignore[arg-type]


def test_register_rejects_empty_name() -> None:
    class Nameless(Command):
        pass

    with pytest.raises(ValueError):
        CommandRegistry().register_command(Nameless)


@dataclass(frozen=True)
class _FakeEntryPoint:
    name: str
    value: Any

    def load(self) -> Any:
        if isinstance(self.value, Exception):
            raise self.value
        return self.value


class _FakeEntryPoints:
    def __init__(self, items: Iterable[_FakeEntryPoint]) -> None:
        self._items = list(items)

    def __iter__(self):
        return iter(self._items)


def test_entry_point_auto_discovery(monkeypatch: pytest.MonkeyPatch) -> None:
    from command_diagnostics.commands import registry as registry_module

    def fake_entry_points(*, group: str) -> _FakeEntryPoints:
        assert group == "command_diagnostics.commands"
        return _FakeEntryPoints(
            [
                _FakeEntryPoint(name="pluginCmd", value=PluginCommand),
                _FakeEntryPoint(name="broken", value=ImportError("missing module")),
                _FakeEntryPoint(name="notACommand", value=object()),
            ]
        )

    monkeypatch.setattr(registry_module.metadata, "entry_points", fake_entry_points)

    registry = CommandRegistry()
    assert "pluginCmd" in registry.list_commands()
    assert "broken" not in registry.list_commands()
    assert "notACommand" not in registry.list_commands()
