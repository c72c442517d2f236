import io
import re

import pytest

from riffcli.tabwriter import ESCAPE, Flag, Writer

_ANSI = re.compile(r"\x1b\[[0-9;]*m")


def render(text, minwidth=0, tabwidth=8, padding=1, padchar=".", flags=Flag.NONE):
    out = io.StringIO()
    writer = Writer(out, minwidth, tabwidth, padding, padchar, flags)
    writer.write(text)
    writer.flush()
    return out.getvalue()


def test_aligns_columns():
    assert render("a\tb\tc\naaa\tbbbb\tc\n") == "a...b....c\naaa.bbbb.c\n"


def test_write_returns_length():
    writer = Writer(io.StringIO(), 0, 8, 1, " ")
    assert writer.write("abc\tdef\n") == 8


def test_single_cell_line_is_flushed_immediately():
    out = io.StringIO()
    writer = Writer(out, 0, 8, 1, " ")
    writer.write("hello\n")
    assert out.getvalue() == "hello\n"


def test_buffered_until_flush():
    out = io.StringIO()
    writer = Writer(out, 0, 8, 1, " ")
    writer.write("a\tb\n")
    assert out.getvalue() == ""
    writer.flush()
    assert out.getvalue().startswith("a")


def test_padding_removed_gives_back_cells():
    text = "name\tage\nlonger-name\t1\n"
    result = render(text, padchar=" ")
    assert [line.split() for line in result.splitlines()] == [
        ["name", "age"],
        ["longer-name", "1"],
    ]


def test_minwidth():
    result = render("a\tb\n", minwidth=6)
    assert result.index("b") == 6


def test_align_right_lines_equal_length():
    result = render("a\tbbb\t\nccc\td\t\n", padchar=" ", flags=Flag.ALIGN_RIGHT)
    lines = result.splitlines()
    assert len(lines[0]) == len(lines[1])
    assert lines[0].rstrip().endswith("bbb")
    assert lines[1].rstrip().endswith("d")


def test_ignore_ansi_codes_aligns_visible_text():
    colored = "\x1b[31mred\x1b[0m"
    text = f"{colored}\tx\nblue\tx\n"
    with_flag = [_ANSI.sub("", line) for line in
                 render(text, padchar=" ", flags=Flag.IGNORE_ANSI_CODES).splitlines()]
    without_flag = [_ANSI.sub("", line) for line in
                    render(text, padchar=" ").splitlines()]
    assert with_flag[0].index("x") == with_flag[1].index("x")
    assert without_flag[0].index("x") != without_flag[1].index("x")


def test_escaped_tab_is_not_a_cell_break():
    result = render(f"{ESCAPE}a\tb{ESCAPE}\tc\n", flags=Flag.STRIP_ESCAPE)
    assert ESCAPE not in result
    assert "a\tb" in result
    assert result.endswith("c\n")


def test_escape_kept_without_strip_flag():
    result = render(f"{ESCAPE}a\tb{ESCAPE}\tc\n")
    assert f"{ESCAPE}a\tb{ESCAPE}" in result


def test_filter_html_tags_have_no_width():
    result = render("<b>x</b>\ty\nxx\ty\n", flags=Flag.FILTER_HTML)
    stripped = [re.sub(r"<[^>]*>", "", line) for line in result.splitlines()]
    assert stripped[0].index("y") == stripped[1].index("y")


def test_debug_marks_column_breaks():
    assert render("a\tb\n", flags=Flag.DEBUG) == "a.|b\n"


def test_formfeed_flushes_columns():
    assert render("a\tb\fccc\td\n") == render("a\tb\n") + render("ccc\td\n")


def test_tab_padding():
    assert render("a\tb\n", tabwidth=4, padchar="\t") == "a\tb\n"


def test_discard_empty_columns():
    text = "a\v\vb\nc\v\vd\n"
    discarded = render(text, flags=Flag.DISCARD_EMPTY_COLUMNS)
    kept = render(text)
    assert len(discarded) < len(kept)


def test_remember_widths_across_flushes():
    out = io.StringIO()
    writer = Writer(out, 0, 8, 1, ".", Flag.REMEMBER_WIDTHS)
    writer.write("aaaa\tb\n")
    writer.flush()
    first = out.getvalue()
    widths = writer.remembered_widths()
    writer.write("a\tb\n")
    writer.flush()
    second = out.getvalue()[len(first):]
    assert first.index("b") == second.index("b")
    assert writer.remembered_widths() == widths


def test_remembered_widths_is_a_copy():
    writer = Writer(io.StringIO(), 0, 8, 1, ".", Flag.REMEMBER_WIDTHS)
    writer.set_remembered_widths([3, 4])
    copy = writer.remembered_widths()
    copy.append(99)
    assert writer.remembered_widths() == [3, 4]


def test_set_remembered_widths_applies():
    out = io.StringIO()
    writer = Writer(out, 0, 8, 1, ".", Flag.REMEMBER_WIDTHS)
    writer.set_remembered_widths([10])
    writer.write("a\tb\n")
    writer.flush()
    assert out.getvalue().index("b") == 10


def test_context_manager_flushes():
    out = io.StringIO()
    with Writer(out, 0, 8, 1, ".") as writer:
        writer.write("a\tb\n")
    assert out.getvalue() == render("a\tb\n")


@pytest.mark.parametrize("minwidth,tabwidth,padding", [(-1, 0, 0), (0, -1, 0), (0, 0, -1)])
def test_negative_settings_rejected(minwidth, tabwidth, padding):
    with pytest.raises(ValueError):
        Writer(io.StringIO(), minwidth, tabwidth, padding, " ")


def test_padchar_must_be_single_character():
    with pytest.raises(ValueError):
        Writer(io.StringIO(), 0, 8, 1, "ab")


class _FailOnce:
    def __init__(self):
        self.failed = False
        self.parts = []

    def write(self, text):
        if not self.failed:
            self.failed = True
            raise OSError("disk full")
        self.parts.append(text)


def test_output_error_propagates_and_resets():
    sink = _FailOnce()
    writer = Writer(sink, 0, 8, 1, ".")
    writer.write("a\tb\n")
    with pytest.raises(OSError):
        writer.flush()
    writer.write("x\n")
    assert "".join(sink.parts) == "x\n"