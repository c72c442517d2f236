import io

import pytest

from riffcli.command import (
    Arg,
    Command,
    CommandError,
    ExecContext,
    IgnoreArg,
    args,
    bare_double_dash_args,
    format_args,
    name_arg,
    names_arg,
    read_stdin,
    sequence,
    visit,
)
from riffcli.config import new_default_config


def _expect_single(expected):
    def set_(cmd, argv, offset):
        if argv[offset] != expected:
            raise ValueError(f"unexpected arg {argv[offset]!r}")
    return set_


def _expect_rest(expected):
    def set_(cmd, argv, offset):
        if list(argv[offset:]) != expected:
            raise ValueError(f"unexpected args {argv[offset:]!r}")
    return set_


def _fail(cmd, argv, offset):
    raise ValueError("should not be called")


def _ignore(cmd, argv, offset):
    raise IgnoreArg()


def _new_command():
    cmd = Command(use="args-test", run=lambda c, a: None)
    cmd.out = io.StringIO()
    cmd.silence_usage = True
    return cmd


def _execute(cmd, argv):
    try:
        cmd.execute(argv)
    except Exception as exc:
        return str(exc)
    return None


ARGS_CASES = [
    ("no args", [], [], None, ""),
    ("single arity", [Arg("arg1", 1, set=_expect_single("my-arg"))], ["my-arg"], None, " <arg1>"),
    ("missing args", [Arg(arity=1, set=_fail)], [], "missing required argument(s)", ""),
    (
        "extra args",
        [Arg("arg1", 1, set=_expect_single("my-arg-1"))],
        ["my-arg-1", "my-arg-2"],
        'unknown command "my-arg-2" for "args-test"',
        " <arg1>",
    ),
    (
        "multiple single arity",
        [Arg("arg1", 1, set=_expect_single("my-arg")), Arg("arg2", 1, set=_expect_single("other-arg"))],
        ["my-arg", "other-arg"],
        None,
        " <arg1> <arg2>",
    ),
    (
        "capture arity",
        [Arg("arg1", -1, set=_expect_rest(["my-arg-1", "my-arg-2"]))],
        ["my-arg-1", "my-arg-2"],
        None,
        " <arg1>",
    ),
    ("capture arity, no args", [Arg("arg1", -1, set=_expect_rest([]))], [], None, " <arg1>"),
    (
        "capture arity, after single arity",
        [Arg("arg1", 1, set=_expect_single("my-arg-1")), Arg("arg2", -1, set=_expect_rest(["my-arg-2"]))],
        ["my-arg-1", "my-arg-2"],
        None,
        " <arg1> <arg2>",
    ),
    ("optional args", [Arg("arg1", 1, optional=True, set=_fail)], [], None, " [arg1]"),
    (
        "ignored args",
        [Arg("arg1", 1, set=_ignore), Arg("arg2", 1, set=_expect_single("my-arg"))],
        ["my-arg"],
        None,
        " <arg1> <arg2>",
    ),
]


@pytest.mark.parametrize("name,items,argv,err,fmt", ARGS_CASES, ids=[c[0] for c in ARGS_CASES])
def test_args(name, items, argv, err, fmt):
    cmd = _new_command()
    args(cmd, *items)
    assert _execute(cmd, argv) == err
    assert format_args(cmd) == fmt


@pytest.mark.parametrize(
    "argv,expected,err",
    [
        ([], "", "missing required argument(s)"),
        (["my-name"], "my-name", None),
        (["my-name", "extra-arg"], "my-name", 'unknown command "extra-arg" for "args-test"'),
    ],
)
def test_name_arg(argv, expected, err):
    holder = {"value": ""}
    cmd = _new_command()
    args(cmd, name_arg(lambda v: holder.__setitem__("value", v)))
    assert _execute(cmd, argv) == err
    assert holder["value"] == expected


@pytest.mark.parametrize(
    "argv,expected",
    [
        ([], []),
        (["my-name"], ["my-name"]),
        (["my-name", "my-other-name"], ["my-name", "my-other-name"]),
    ],
)
def test_names_arg(argv, expected):
    holder = {"value": None}
    cmd = _new_command()
    args(cmd, names_arg(lambda v: holder.__setitem__("value", v)))
    assert _execute(cmd, argv) is None
    assert holder["value"] == expected


@pytest.mark.parametrize(
    "argv,expected",
    [
        ([], None),
        (["my-arg", "my-other-arg"], None),
        (["my-arg", "my-other-arg", "--"], []),
        (["my-arg", "my-other-arg", "--", "my-name", "my-other-name"], ["my-name", "my-other-name"]),
    ],
)
def test_bare_double_dash_args(argv, expected):
    holder = {"value": None}
    cmd = _new_command()
    args(cmd, bare_double_dash_args(lambda v: holder.__setitem__("value", v)))
    assert _execute(cmd, argv) is None
    assert holder["value"] == expected


def _step(label, fail=False):
    def run(cmd, argv):
        cmd.out_or_stdout.write(f"{label}\n")
        if fail:
            raise ValueError("test error")
    return run


def _step_args(cmd, argv):
    cmd.out_or_stdout.write("step [" + " ".join(argv) + "]\n")


@pytest.mark.parametrize(
    "argv,items,output,err",
    [
        ([], [], "", None),
        (["a", "b", "c"], [_step_args], "step [a b c]", None),
        ([], [_step("step 1"), _step("step 2"), _step("step 3")], "step 1\nstep 2\nstep 3", None),
        (
            [],
            [_step("step 1"), _step("step 2", fail=True), _step("step 3")],
            "step 1\nstep 2",
            "test error",
        ),
    ],
)
def test_sequence(argv, items, output, err):
    cmd = Command()
    cmd.out = io.StringIO()
    try:
        sequence(*items)(cmd, argv)
        actual_err = None
    except ValueError as exc:
        actual_err = str(exc)
    assert actual_err == err
    assert cmd.out.getvalue().strip() == output


def test_visit_visits_parent_then_child():
    root = Command(use="root")
    root.add_command(Command(use="child"))
    visited = []
    visit(root, lambda c: visited.append(c.name))
    assert visited == ["root", "child"]


def test_visit_single_command():
    visited = []
    visit(Command(use="root"), lambda c: visited.append(c.name))
    assert visited == ["root"]


def test_visit_error():
    def visitor(cmd):
        raise ValueError(cmd.name)

    with pytest.raises(ValueError, match="^root$"):
        visit(Command(use="root"), visitor)


def test_visit_child_error():
    root = Command(use="root")
    root.add_command(Command(use="child"))

    def visitor(cmd):
        if cmd.name == "child":
            raise ValueError(cmd.name)

    with pytest.raises(ValueError, match="^child$"):
        visit(root, visitor)


def test_read_stdin():
    config = new_default_config()
    config.stdin = io.StringIO("hello")
    received = []
    run = read_stdin(config, received.append, "> ")
    run(Command(), [])
    assert received == [b"hello"]


def test_exec_context_with_command():
    cmd = Command()
    parent = ExecContext()
    child = parent.with_command(cmd)
    assert parent.command is None
    assert child.command is cmd


def test_string_flag_shorthand_and_long():
    cmd = _new_command()
    flag = cmd.add_string_flag("namespace", "n", "", "usage")
    cmd.execute(["-n", "my-ns"])
    assert flag.value == "my-ns"
    assert flag.changed is True
    cmd.execute(["--namespace=other"])
    assert cmd.flag("namespace").value == "other"


def test_bool_flag_explicit_false():
    cmd = _new_command()
    cmd.add_bool_flag("all", False, "usage")
    cmd.execute(["--all"])
    assert cmd.flag("all").value is True
    cmd.execute(["--all=false"])
    assert cmd.flag("all").value is False


def test_unknown_flag():
    cmd = _new_command()
    with pytest.raises(CommandError, match="unknown flag: --nope"):
        cmd.execute(["--nope"])


def test_flag_needs_argument():
    cmd = _new_command()
    cmd.add_string_flag("image", "", "", "")
    with pytest.raises(CommandError, match="flag needs an argument"):
        cmd.execute(["--image"])


def test_subcommand_dispatch():
    seen = []
    root = Command(use="root")
    root.add_command(Command(use="child", run=lambda c, a: seen.append((c.command_path, a))))
    root.execute(["child", "x"])
    assert seen == [("root child", ["x"])]


def test_usage_written_on_error():
    cmd = Command(use="args-test", run=lambda c, a: None)
    cmd.out = io.StringIO()
    args(cmd, name_arg(lambda v: None))
    with pytest.raises(CommandError):
        cmd.execute([])
    assert "args-test <name>" in cmd.out.getvalue()