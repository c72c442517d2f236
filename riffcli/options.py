"""Bridges between command run functions and options objects."""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

from riffcli.command import Command, ExecContext
from riffcli.fielderrors import FieldErrors

__all__ = ["Validatable", "Executable", "DryRunable", "validate_options", "exec_options"]


@runtime_checkable
class Validatable(Protocol):
    """Options that can check themselves before a command runs."""

    def validate(self, ctx: ExecContext | None) -> FieldErrors | None: ...


@runtime_checkable
class Executable(Protocol):
    """Options that carry out the work of a command."""

    def exec(self, ctx: ExecContext, config: Any) -> Any: ...


@runtime_checkable
class DryRunable(Protocol):
    """Options that may only print what they would do."""

    def is_dry_run(self) -> bool: ...


def validate_options(ctx: ExecContext | None, opts: Validatable) -> Callable[[Command, list], None]:
    """Return a pre-run function that validates ``opts``.

    Validation errors are raised as one aggregate error; on success the
    command's usage is silenced for any later failure.
    """

    def pre_run(cmd: Command, argv: list) -> None:
        errs = opts.validate(ctx)
        if errs:
            raise FieldErrors(errs).to_aggregate()
        cmd.silence_usage = True

    return pre_run


def exec_options(ctx: ExecContext | None, config: Any, opts: Executable) -> Callable[[Command, list], Any]:
    """Return a run function that executes ``opts`` with the running command.

    For a dry run, the original stdout is kept for resources and normal
    output is sent to stderr.
    """

    def run(cmd: Command, argv: list) -> Any:
        exec_ctx = (ctx or ExecContext()).with_command(cmd)
        if isinstance(opts, DryRunable) and opts.is_dry_run():
            exec_ctx = exec_ctx.with_stdout(config.stdout)
            config.stdout = config.stderr
        return opts.exec(exec_ctx, config)

    return run