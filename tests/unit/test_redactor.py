from __future__ import annotations

from bson.son import SON

from command_diagnostics.config.settings import DocumentStyle
from command_diagnostics.printer.redactor import (
    REDACTION_MARKER,
    FieldRedactor,
    redact_document,
    render_redacted,
)


def _login_request() -> SON:
    return SON(
        [
            ("login", "users"),
            ("user", "alice"),
            ("pwd", "hunter2"),
            ("options", SON([("pwd", "nested-secret"), ("ttl", 30)])),
        ]
    )


def test_redacts_only_sensitive_top_level_fields() -> None:
    redacted = redact_document(_login_request(), frozenset({"pwd"}))

    assert list(redacted.keys()) == ["login", "user", "pwd", "options"]
    assert redacted["pwd"] == REDACTION_MARKER
    assert redacted["user"] == "alice"


def test_nested_fields_are_matched_by_top_level_key_only() -> None:
    redacted = redact_document(_login_request(), frozenset({"pwd"}))

    assert redacted["options"]["pwd"] == "nested-secret"


def test_sensitive_nested_structure_redacted_as_a_whole() -> None:
    redacted = redact_document(_login_request(), frozenset({"options"}))

    assert redacted["options"] == REDACTION_MARKER


def test_redact_all_hides_every_value() -> None:
    redacted = redact_document(_login_request(), redact_all=True)

    assert list(redacted.keys()) == ["login", "user", "pwd", "options"]
    assert set(redacted.values()) == {REDACTION_MARKER}


def test_does_not_modify_input() -> None:
    request = _login_request()

    redact_document(request, frozenset({"pwd"}), redact_all=True)

    assert request["pwd"] == "hunter2"


def test_non_document_yields_empty_document() -> None:
    assert redact_document(None) == SON()
    assert redact_document(42) == SON()
    assert redact_document(["not", "a", "document"]) == SON()


def test_render_includes_name_namespace_and_fields() -> None:
    output = render_redacted("login", "admin.users", _login_request(), frozenset({"pwd"}))

    assert output.startswith("{'commandName': \"login\", 'namespace': \"admin.users\", ")
    assert 'pwd: "###"' in output
    assert "hunter2" not in output
    assert 'user: "alice"' in output


def test_render_redact_all_keeps_command_name_and_hides_namespace() -> None:
    output = render_redacted("login", "admin.users", _login_request(), redact_all=True)

    assert "'commandName': \"login\"" in output
    assert "admin.users" not in output
    for value in ("users", "alice", "hunter2", "nested-secret"):
        assert value not in output
    for name in ("login", "user", "pwd", "options"):
        assert f"{name}: " in output


def test_render_without_namespace() -> None:
    output = render_redacted("ping", None, {"ping": 1})

    assert "'namespace': \"\"" in output
    assert "{ ping: 1 }" in output


def test_render_json_style() -> None:
    redactor = FieldRedactor(style=DocumentStyle.JSON)

    output = redactor.render("login", "admin.users", _login_request(), frozenset({"pwd"}))

    assert '"pwd": "###"' in output
    assert '"ttl": 30' in output


def test_render_document_truncates() -> None:
    redactor = FieldRedactor(max_document_length=5)

    assert redactor.render_document({"ping": 1}) == "{ pin..."
