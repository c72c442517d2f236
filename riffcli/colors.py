"""Coloured text output using ANSI escape sequences."""

from __future__ import annotations

import os
import sys
from typing import Any, Protocol

__all__ = [
    "Color",
    "FAINT",
    "FG_CYAN",
    "FG_GREEN",
    "FG_YELLOW",
    "FG_RED",
    "FAINT_COLOR",
    "INFO_COLOR",
    "SUCCESS_COLOR",
    "WARN_COLOR",
    "ERROR_COLOR",
    "color_enabled",
    "set_color_enabled",
    "sfaintf",
    "sinfof",
    "ssuccessf",
    "swarnf",
    "serrorf",
]

FAINT = 2
FG_RED = 31
FG_GREEN = 32
FG_YELLOW = 33
FG_CYAN = 36


class _TextSink(Protocol):
    def write(self, text: str) -> object: ...


def _detect_color() -> bool:
    if "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb":
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


_state = {"enabled": _detect_color()}


def color_enabled() -> bool:
    """Return whether coloured output is currently produced."""
    return _state["enabled"]


def set_color_enabled(enabled: bool) -> None:
    """Turn coloured output on or off for the whole process."""
    _state["enabled"] = bool(enabled)


def _format(fmt: str, args: tuple[Any, ...]) -> str:
    return fmt % args if args else fmt


class Color:
    """A combination of ANSI display attributes."""

    def __init__(self, *attributes: int) -> None:
        self.attributes = attributes

    def _wrap(self, text: str) -> str:
        if not color_enabled():
            return text
        codes = ";".join(str(a) for a in self.attributes)
        return f"\x1b[{codes}m{text}\x1b[0m"

    def sprint(self, *args: Any) -> str:
        """Return the arguments joined together, coloured."""
        return self._wrap("".join(str(a) for a in args))

    def sprintf(self, fmt: str, *args: Any) -> str:
        """Return ``fmt % args``, coloured."""
        return self._wrap(_format(fmt, args))

    def fprintf(self, stream: _TextSink, fmt: str, *args: Any) -> int:
        """Write ``fmt % args`` coloured to ``stream``; return the length written."""
        text = self.sprintf(fmt, *args)
        stream.write(text)
        return len(text)


FAINT_COLOR = Color(FAINT)
INFO_COLOR = Color(FG_CYAN)
SUCCESS_COLOR = Color(FG_GREEN)
WARN_COLOR = Color(FG_YELLOW)
ERROR_COLOR = Color(FG_RED)


def sfaintf(fmt: str, *args: Any) -> str:
    """Format text in the faint colour."""
    return FAINT_COLOR.sprintf(fmt, *args)


def sinfof(fmt: str, *args: Any) -> str:
    """Format text in the info colour."""
    return INFO_COLOR.sprintf(fmt, *args)


def ssuccessf(fmt: str, *args: Any) -> str:
    """Format text in the success colour."""
    return SUCCESS_COLOR.sprintf(fmt, *args)


def swarnf(fmt: str, *args: Any) -> str:
    """Format text in the warning colour."""
    return WARN_COLOR.sprintf(fmt, *args)


def serrorf(fmt: str, *args: Any) -> str:
    """Format text in the error colour."""
    return ERROR_COLOR.sprintf(fmt, *args)