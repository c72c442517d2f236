"""Elastic tabstop writer that aligns tab-terminated columns of text.

Text handed to :class:`Writer` is split into cells terminated by horizontal
(``\\t``) or vertical (``\\v``) tabs and line breaks (``\\n`` or ``\\f``).
Tab-terminated cells in contiguous lines form a column, and the writer pads
every cell of a column to the same width before passing the text on.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Protocol

__all__ = ["ESCAPE", "Flag", "Writer"]

ESCAPE = "\xff"
"""Bracket a segment with this character to pass it through uninterpreted."""

_ANSI_PATTERN = re.compile(
    "[\u001b\u009b][\\[\\]()#;?]*"
    "(?:(?:(?:[a-zA-Z\\d]*(?:;[a-zA-Z\\d]*)*)?\u0007)"
    "|(?:(?:\\d{1,4}(?:;\\d{0,4})*)?[\\dA-PRZcf-ntqry=><~]))"
)


class _TextSink(Protocol):
    def write(self, text: str) -> object: ...


class Flag(enum.IntFlag):
    """Formatting options for :class:`Writer`."""

    NONE = 0
    FILTER_HTML = 1 << 0
    STRIP_ESCAPE = 1 << 1
    ALIGN_RIGHT = 1 << 2
    DISCARD_EMPTY_COLUMNS = 1 << 3
    TAB_INDENT = 1 << 4
    DEBUG = 1 << 5
    REMEMBER_WIDTHS = 1 << 6
    IGNORE_ANSI_CODES = 1 << 7


@dataclass
class _Cell:
    size: int = 0
    width: int = 0
    htab: bool = False


class Writer:
    """A text filter that pads tab-delimited columns so that they line up.

    Output is buffered until a line break allows it to be formatted; call
    :meth:`flush` (or use the writer as a context manager) when done.
    """

    def __init__(
        self,
        output: _TextSink,
        minwidth: int,
        tabwidth: int,
        padding: int,
        padchar: str,
        flags: Flag | int = Flag.NONE,
    ) -> None:
        if minwidth < 0 or tabwidth < 0 or padding < 0:
            raise ValueError("negative minwidth, tabwidth, or padding")
        if len(padchar) != 1:
            raise ValueError("padchar must be a single character")
        self._output = output
        self._minwidth = minwidth
        self._tabwidth = tabwidth
        self._padding = padding
        self._padchar = padchar
        flags = Flag(flags)
        if padchar == "\t":
            # tab padding enforces left alignment
            flags &= ~Flag.ALIGN_RIGHT
        self._flags = flags
        self._maxwidths: list[int] = []
        self._reset()

    def __enter__(self) -> Writer:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.flush()

    # state handling

    def _reset(self) -> None:
        self._buf: list[str] = []
        self._pos = 0
        self._cell = _Cell()
        self._end_char = ""
        self._lines: list[list[_Cell]] = [[]]
        self._widths: list[int] = []

    def _has(self, flag: Flag) -> bool:
        return bool(self._flags & flag)

    # output helpers

    def _emit(self, text: str) -> None:
        if text:
            self._output.write(text)

    def _text(self, start: int, size: int) -> str:
        return "".join(self._buf[start:start + size])

    def _write_padding(self, textw: int, cellw: int, use_tabs: bool) -> None:
        if self._padchar == "\t" or use_tabs:
            if self._tabwidth == 0:
                return  # tabs have no width, no padding possible
            cellw = -(-cellw // self._tabwidth) * self._tabwidth
            amount = cellw - textw
            if amount < 0:
                raise RuntimeError("internal error")
            self._emit("\t" * -(-amount // self._tabwidth))
            return
        self._emit(self._padchar * (cellw - textw))

    def _write_lines(self, pos: int, line0: int, line1: int) -> int:
        for i in range(line0, line1):
            use_tabs = self._has(Flag.TAB_INDENT)
            for j, cell in enumerate(self._lines[i]):
                if j > 0 and self._has(Flag.DEBUG):
                    self._emit("|")
                has_width = j < len(self._widths)
                if cell.size == 0:
                    if has_width:
                        self._write_padding(cell.width, self._widths[j], use_tabs)
                    continue
                use_tabs = False
                if not self._has(Flag.ALIGN_RIGHT):
                    self._emit(self._text(pos, cell.size))
                    pos += cell.size
                    if has_width:
                        self._write_padding(cell.width, self._widths[j], False)
                else:
                    if has_width:
                        self._write_padding(cell.width, self._widths[j], False)
                    self._emit(self._text(pos, cell.size))
                    pos += cell.size

            if i + 1 == len(self._lines):
                # last buffered line has no newline: write what is outstanding
                self._emit(self._text(pos, self._cell.size))
                pos += self._cell.size
            else:
                self._emit("\n")
        return pos

    def _format(self, pos: int, line0: int, line1: int) -> int:
        column = len(self._widths)
        this = line0
        while this < line1:
            if column >= len(self._lines[this]) - 1:
                this += 1
                continue

            pos = self._write_lines(pos, line0, this)
            line0 = this

            width = self._minwidth
            discardable = True
            while this < line1:
                line = self._lines[this]
                if column >= len(line) - 1:
                    break
                cell = line[column]
                width = max(width, cell.width + self._padding)
                if cell.width > 0 or cell.htab:
                    discardable = False
                this += 1

            if discardable and self._has(Flag.DISCARD_EMPTY_COLUMNS):
                width = 0

            if self._has(Flag.REMEMBER_WIDTHS):
                depth = len(self._widths)
                if len(self._maxwidths) < depth:
                    self._maxwidths.extend(self._widths[len(self._maxwidths):])
                if len(self._maxwidths) == depth:
                    self._maxwidths.append(width)
                elif self._maxwidths[depth] > width:
                    width = self._maxwidths[depth]
                else:
                    self._maxwidths[depth] = width

            self._widths.append(width)
            pos = self._format(pos, line0, this)
            self._widths.pop()
            line0 = this

        return self._write_lines(pos, line0, line1)

    # cell construction

    def _append(self, text: str) -> None:
        self._buf.extend(text)
        self._cell.size += len(text)

    def _update_width(self) -> None:
        content = "".join(self._buf[self._pos:])
        if self._has(Flag.IGNORE_ANSI_CODES):
            content = _ANSI_PATTERN.sub("", content)
        self._cell.width += len(content)
        self._pos = len(self._buf)

    def _start_escape(self, ch: str) -> None:
        self._end_char = {ESCAPE: ESCAPE, "<": ">", "&": ";"}[ch]

    def _end_escape(self) -> None:
        if self._end_char == ESCAPE:
            self._update_width()
            if not self._has(Flag.STRIP_ESCAPE):
                self._cell.width -= 2  # the Escape characters do not count
        elif self._end_char == ";":
            self._cell.width += 1  # an entity counts as one character
        self._pos = len(self._buf)
        self._end_char = ""

    def _terminate_cell(self, htab: bool) -> int:
        self._cell.htab = htab
        line = self._lines[-1]
        line.append(self._cell)
        self._cell = _Cell()
        return len(line)

    # public interface

    def remembered_widths(self) -> list[int]:
        """Return a copy of the remembered per-column maximum widths."""
        return list(self._maxwidths)

    def set_remembered_widths(self, widths: list[int]) -> Writer:
        """Replace the remembered per-column maximum widths."""
        self._maxwidths = list(widths)
        return self

    def flush(self) -> None:
        """Format and write out everything buffered so far.

        An incomplete escape sequence at the end is treated as complete.
        The writer is reset even if writing to the output fails.
        """
        try:
            if self._cell.size > 0:
                if self._end_char:
                    self._end_escape()
                self._terminate_cell(False)
            self._format(0, 0, len(self._lines))
        finally:
            self._reset()

    def write(self, data: str) -> int:
        """Feed text to the writer and return the number of characters taken."""
        start = 0
        for i, ch in enumerate(data):
            if not self._end_char:
                if ch in "\t\v\n\f":
                    self._append(data[start:i])
                    self._update_width()
                    start = i + 1
                    ncells = self._terminate_cell(ch == "\t")
                    if ch in "\n\f":
                        self._lines.append([])
                        if ch == "\f" or ncells == 1:
                            # a single-cell line cannot affect later columns
                            self.flush()
                            if ch == "\f" and self._has(Flag.DEBUG):
                                self._emit("---\n")
                elif ch == ESCAPE:
                    self._append(data[start:i])
                    self._update_width()
                    start = i + 1 if self._has(Flag.STRIP_ESCAPE) else i
                    self._start_escape(ESCAPE)
                elif ch in "<&" and self._has(Flag.FILTER_HTML):
                    self._append(data[start:i])
                    self._update_width()
                    start = i
                    self._start_escape(ch)
            elif ch == self._end_char:
                end = i + 1
                if ch == ESCAPE and self._has(Flag.STRIP_ESCAPE):
                    end = i
                self._append(data[start:end])
                start = i + 1
                self._end_escape()

        self._append(data[start:])
        return len(data)