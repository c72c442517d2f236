"""A small command runner with flags, positional argument binding and helpers."""

from __future__ import annotations

import getpass
import sys
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable, Sequence

__all__ = [
    "NAME_ARGUMENT_NAME",
    "NAMES_ARGUMENT_NAME",
    "CommandError",
    "IgnoreArg",
    "Flag",
    "Command",
    "Arg",
    "ExecContext",
    "sequence",
    "visit",
    "read_stdin",
    "args",
    "format_args",
    "name_arg",
    "names_arg",
    "bare_double_dash_args",
]

NAME_ARGUMENT_NAME = "name"
NAMES_ARGUMENT_NAME = "name(s)"

_TRUE_VALUES = {"1", "t", "T", "true", "TRUE", "True"}
_FALSE_VALUES = {"0", "f", "F", "false", "FALSE", "False"}

RunFunc = Callable[["Command", list], Any]


class CommandError(Exception):
    """Raised when the command line cannot be parsed or bound."""


class IgnoreArg(Exception):
    """Raised by an argument setter to skip the argument without consuming it."""


@dataclass
class Flag:
    """A named option of a command."""

    name: str
    shorthand: str = ""
    default: Any = None
    usage: str = ""
    is_bool: bool = False
    value: Any = None
    changed: bool = False
    annotations: dict[str, list[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.value is None:
            self.value = self.default

    def set(self, raw: str) -> None:
        """Set the flag from its command line text."""
        if self.is_bool:
            if raw in _TRUE_VALUES:
                self.value = True
            elif raw in _FALSE_VALUES:
                self.value = False
            else:
                raise CommandError(f'invalid argument "{raw}" for "--{self.name}" flag')
        else:
            self.value = raw
        self.changed = True


@dataclass
class Arg:
    """A positional argument definition.

    ``arity`` is the number of arguments consumed, or -1 for all remaining.
    ``set`` is called as ``set(cmd, argv, offset)`` and may raise
    :class:`IgnoreArg` to leave the arguments for the next definition.
    """

    name: str = ""
    arity: int = 0
    optional: bool = False
    set: Callable[["Command", list, int], Any] | None = None


@dataclass(frozen=True)
class ExecContext:
    """Values handed from the command runner to the options being executed."""

    command: Command | None = None
    stdout: Any = None

    def with_command(self, cmd: Command) -> ExecContext:
        return replace(self, command=cmd)

    def with_stdout(self, stdout: Any) -> ExecContext:
        return replace(self, stdout=stdout)


class Command:
    """A command with flags, positional argument validation and subcommands."""

    def __init__(
        self,
        use: str = "",
        run: RunFunc | None = None,
        pre_run: RunFunc | None = None,
        args: Callable[[Command, list], Any] | None = None,
    ) -> None:
        self.use = use
        self.run = run
        self.pre_run = pre_run
        self.args = args
        self.annotations: dict[str, str] = {}
        self.commands: list[Command] = []
        self.parent: Command | None = None
        self.silence_usage = False
        self.args_len_at_dash = -1
        self.out: Any = None
        self._flags: dict[str, Flag] = {}

    @property
    def name(self) -> str:
        parts = self.use.split()
        return parts[0] if parts else ""

    @property
    def command_path(self) -> str:
        if self.parent is None:
            return self.name
        return f"{self.parent.command_path} {self.name}"

    @property
    def out_or_stdout(self) -> Any:
        if self.out is not None:
            return self.out
        if self.parent is not None:
            return self.parent.out_or_stdout
        return sys.stdout

    @property
    def flags(self) -> list[Flag]:
        return list(self._flags.values())

    def add_command(self, cmd: Command) -> None:
        """Attach ``cmd`` as a subcommand."""
        cmd.parent = self
        self.commands.append(cmd)

    def _add_flag(self, flag: Flag) -> Flag:
        if flag.name in self._flags:
            raise ValueError(f"flag redefined: {flag.name}")
        if flag.shorthand and any(f.shorthand == flag.shorthand for f in self._flags.values()):
            raise ValueError(f"unable to redefine {flag.shorthand!r} shorthand")
        self._flags[flag.name] = flag
        return flag

    def add_string_flag(self, name: str, shorthand: str = "", default: str = "", usage: str = "") -> Flag:
        """Define a string flag and return it."""
        return self._add_flag(Flag(name=name, shorthand=shorthand, default=default, usage=usage))

    def add_bool_flag(self, name: str, default: bool = False, usage: str = "") -> Flag:
        """Define a boolean flag and return it."""
        return self._add_flag(Flag(name=name, default=default, usage=usage, is_bool=True))

    def flag(self, name: str) -> Flag | None:
        """Return the flag called ``name``, or None."""
        return self._flags.get(name)

    def usage(self) -> str:
        line = self.command_path + format_args(self)
        if self._flags:
            line += " [flags]"
        return f"Usage:\n  {line}\n"

    def execute(self, argv: Sequence[str] | None = None) -> None:
        """Parse ``argv`` and run the matching command; errors are raised."""
        if argv is None:
            argv = sys.argv[1:]
        cmd, rest = self._find(list(argv))
        try:
            positional = cmd._parse_flags(rest)
            cmd._run(positional)
        except Exception:
            if not cmd.silence_usage:
                cmd.out_or_stdout.write(cmd.usage())
            raise

    def _find(self, argv: list[str]) -> tuple[Command, list[str]]:
        cmd = self
        while argv and not argv[0].startswith("-"):
            child = next((c for c in cmd.commands if c.name == argv[0]), None)
            if child is None:
                break
            cmd, argv = child, argv[1:]
        return cmd, argv

    def _shorthand(self, short: str) -> Flag | None:
        return next((f for f in self._flags.values() if f.shorthand == short), None)

    def _parse_flags(self, argv: list[str]) -> list[str]:
        positional: list[str] = []
        self.args_len_at_dash = -1
        i = 0
        while i < len(argv):
            token = argv[i]
            i += 1
            if token == "--":
                self.args_len_at_dash = len(positional)
                positional.extend(argv[i:])
                break
            if token.startswith("--"):
                name, sep, value = token[2:].partition("=")
                flag = self._flags.get(name)
                if flag is None:
                    raise CommandError(f"unknown flag: --{name}")
                has_value = bool(sep)
            elif token.startswith("-") and len(token) > 1:
                flag = self._shorthand(token[1])
                if flag is None:
                    raise CommandError(f"unknown shorthand flag: {token[1]!r} in {token}")
                value = token[2:]
                if value.startswith("="):
                    value = value[1:]
                    has_value = True
                else:
                    has_value = bool(value)
            else:
                positional.append(token)
                continue

            if flag.is_bool:
                flag.set(value if has_value else "true")
                continue
            if not has_value:
                if i >= len(argv):
                    raise CommandError(f"flag needs an argument: --{flag.name}")
                value = argv[i]
                i += 1
            flag.set(value)
        return positional

    def _run(self, positional: list[str]) -> None:
        if self.args is not None:
            self.args(self, positional)
        elif self.commands and positional:
            _no_args(self, positional)
        if self.pre_run is not None:
            self.pre_run(self, positional)
        if self.run is not None:
            self.run(self, positional)
        elif self.pre_run is None:
            self.out_or_stdout.write(self.usage())


def _no_args(cmd: Command, rest: Sequence[str]) -> None:
    if rest:
        raise CommandError(f'unknown command "{rest[0]}" for "{cmd.command_path}"')


def sequence(*args: RunFunc) -> RunFunc:
    """Return a run function that calls each of ``args`` in order."""

    def run(cmd: Command, argv: list) -> None:
        for item in args:
            item(cmd, argv)

    return run


def visit(cmd: Command, fn: Callable[[Command], Any]) -> None:
    """Call ``fn`` on ``cmd`` and then, depth first, on all its subcommands."""
    fn(cmd)
    for child in cmd.commands:
        visit(child, fn)


def _is_terminal(stream: Any) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def read_stdin(config: Any, sink: Callable[[bytes], Any], prompt: str) -> RunFunc:
    """Return a run function that reads standard input and passes it to ``sink``.

    On a terminal the input is read without echo after showing ``prompt``.
    """

    def run(cmd: Command, argv: list) -> None:
        if _is_terminal(config.stdin):
            data: Any = getpass.getpass(f"{prompt}: ", stream=config.stdout)
        else:
            data = config.stdin.read()
        if isinstance(data, str):
            data = data.encode("utf-8")
        sink(data)

    return run


def args(cmd: Command, *args: Arg) -> None:
    """Bind positional arguments of ``cmd`` to the given definitions.

    Extra arguments that no definition consumes are an error.
    """
    definitions = args

    def validate(command: Command, argv: list) -> None:
        offset = 0
        for definition in definitions:
            arity = definition.arity
            if arity == -1:
                arity = len(argv) - offset
            if len(argv) - offset < arity:
                if definition.optional:
                    continue
                raise CommandError("missing required argument(s)")
            if definition.set is not None:
                try:
                    definition.set(command, argv, offset)
                except IgnoreArg:
                    continue
            offset += arity
        _no_args(command, argv[offset:])

    cmd.args = validate
    cmd.annotations["args.length"] = str(len(definitions))
    for i, definition in enumerate(definitions):
        cmd.annotations[f"args[{i}].name"] = definition.name
        cmd.annotations[f"args[{i}].arity"] = str(definition.arity)
        cmd.annotations[f"args[{i}].optional"] = "true" if definition.optional else "false"


def format_args(cmd: Command) -> str:
    """Return the positional arguments of ``cmd`` for a usage line."""
    try:
        length = int(cmd.annotations.get("args.length", "0"))
    except ValueError:
        length = 0
    parts: Iterable[str] = (
        f"[{name}]" if cmd.annotations.get(f"args[{i}].optional") == "true" else f"<{name}>"
        for i in range(length)
        if (name := cmd.annotations.get(f"args[{i}].name", ""))
    )
    return "".join(" " + part for part in parts)


def name_arg(setter: Callable[[str], Any]) -> Arg:
    """A required single ``name`` argument."""
    return Arg(
        name=NAME_ARGUMENT_NAME,
        arity=1,
        set=lambda cmd, argv, offset: setter(argv[offset]),
    )


def names_arg(setter: Callable[[list], Any]) -> Arg:
    """All remaining arguments as names."""
    return Arg(
        name=NAMES_ARGUMENT_NAME,
        arity=-1,
        set=lambda cmd, argv, offset: setter(list(argv[offset:])),
    )


def bare_double_dash_args(setter: Callable[[list], Any]) -> Arg:
    """The arguments that follow a bare ``--``, if there is one."""

    def set_(cmd: Command, argv: list, offset: int) -> None:
        if cmd.args_len_at_dash == -1:
            return
        setter(list(argv[cmd.args_len_at_dash:]))

    return Arg(arity=-1, set=set_)