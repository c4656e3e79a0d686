#!/usr/bin/env python3
"""
Failure Diagnostics Example

This example demonstrates how a server's failure paths describe the command
they were running without leaking confidential values:
- Binding a command to an operation
- Logging redacted diagnostics when the command fails
- Switching on process-wide log redaction

Usage:
    python examples/failure_diagnostics.py
"""

import logging

from bson.son import SON

from command_diagnostics import (
    OperationContext,
    Printer,
    ScopedCommandDiagnostics,
    find_command,
    get_settings,
    log_command_diagnostics,
)


def run_command(op_ctx: OperationContext) -> None:
    raise RuntimeError("simulated crash while executing the command")


def main():
    """Run failure diagnostics examples."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 70)
    print("Command Diagnostics - Failure Example")
    print("=" * 70)

    op_ctx = OperationContext()
    print("\n[Example 1] No command bound yet")
    print("-" * 70)
    print(Printer(op_ctx))

    request = SON([("find", "orders"), ("filter", SON([("customer", "alice")])), ("limit", 5)])
    op_ctx.cur_op.set_generic_op_request_details("shop.orders", find_command("find"), request)

    print("\n[Example 2] Command fails inside a diagnostics scope")
    print("-" * 70)
    try:
        with ScopedCommandDiagnostics(op_ctx):
            run_command(op_ctx)
    except RuntimeError:
        pass

    print("\n[Example 3] Log redaction enabled")
    print("-" * 70)
    with get_settings().redact_logs_override(True):
        log_command_diagnostics(op_ctx, "Operation exceeded time limit", level=logging.WARNING)

    print("\n[Example 4] Credentials are never printed")
    print("-" * 70)
    op_ctx.cur_op.set_generic_op_request_details(
        "admin.$cmd",
        find_command("createUser"),
        SON([("createUser", "bob"), ("pwd", "hunter2"), ("roles", [])]),
    )
    print(Printer(op_ctx))


if __name__ == "__main__":
    main()
