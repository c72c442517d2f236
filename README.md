# riffcli

Building blocks for command line tools that manage Kubernetes-style
resources.

## What is in it

- **`riffcli.command`**: a small `Command` type with string and boolean
  flags (`add_string_flag`, `add_bool_flag`, `flag`), nested sub-commands
  (`add_command`) and `execute(argv)`, which parses flags, binds positional
  arguments and runs the command's `pre_run` and `run` functions. Problems
  with the command line raise `CommandError`.
  Positional arguments are bound with `args(cmd, ...)` and `Arg`
  definitions: `name_arg`, `names_arg` and `bare_double_dash_args` are ready
  made, and a setter may raise `IgnoreArg` to skip an argument. Missing
  arguments raise `CommandError("missing required argument(s)")`; extra ones
  raise `unknown command "<arg>" for "<command>"`. `format_args` renders the
  usage form of the arguments, such as ` <name>` or ` [name]`. `sequence`
  chains several run steps and stops at the first one that raises; `visit`
  walks a command tree depth first; `read_stdin` builds a step that reads
  standard input (without echo, after a prompt, on a terminal) and passes the
  bytes to a callback.
- **`riffcli.flags`**: the common flag names (`NAMESPACE_FLAG_NAME`,
  `ALL_NAMESPACES_FLAG_NAME`, `DRY_RUN_FLAG_NAME`, ...), `strip_dash`, and
  `namespace_flag` / `all_namespaces_flag`, which add `--namespace`/`-n` and
  `--all-namespaces` to a command, bind them to `target.namespace` and
  `target.all_namespaces`, default an empty namespace from the configuration
  and refuse both flags together.
- **`riffcli.fielderrors`**: `FieldErrors`, a list of `FieldError` values that
  can be combined with `also`, re-rooted under a parent with `via_field`,
  `via_index` and `via_field_index`, and turned into a single
  `AggregateError` exception with `to_aggregate` (which returns `None` when
  there are no errors). `err_missing_field`, `err_invalid_value`,
  `err_invalid_array_value`, `err_disallowed_fields`, `err_missing_one_of`
  and `err_multiple_one_of` build the common cases.
- **`riffcli.options`**: the `Validatable`, `Executable` and `DryRunable`
  protocols, with `validate_options` (a pre-run step that raises the
  aggregate of any validation errors and otherwise silences usage output) and
  `exec_options` (a run step that calls `opts.exec` with an `ExecContext`
  holding the running command; for a dry run, the original stdout is kept in
  the context and `config.stdout` is pointed at stderr).
- **`riffcli.colors`**: `Color` with `sprint`, `sprintf` and `fprintf`, the
  shared `FAINT_COLOR`, `INFO_COLOR`, `SUCCESS_COLOR`, `WARN_COLOR` and
  `ERROR_COLOR`, and the helpers `sfaintf`, `sinfof`, `ssuccessf`, `swarnf`,
  `serrorf`. Colour is on when stdout is a terminal and neither `NO_COLOR` is
  set nor `TERM=dumb`; `set_color_enabled` and `color_enabled` switch and
  query it.
- **`riffcli.config`**: `Config`, holding the standard streams, the build
  environment and the settings, with printing methods (`printf`, `eprintf`,
  `infof`, `einfof`, `successf`, `esuccessf`, `errorf`, `eerrorf`).
  `init_viper_config` reads the settings from `viper_config_file` or from
  `~/.riff.yaml`, `.yml` or `.json`, turns colour off when `no-color` is set
  (an environment variable such as `RIFF_NO_COLOR` wins over the file) and
  reports the file it used on stderr. `init_kube_config` picks the kube config
  file from the field, then `KUBECONFIG`, then `~/.kube/config`;
  `default_namespace` returns the namespace of the current context in that
  file, or `default`. `new_default_config()` binds a `Config` to the
  process's streams.
- **`riffcli.env`**: `CompiledEnv` (name, version, git sha, dirty flag and
  enabled runtimes), `compiled_env` to build one from raw settings, the
  runtime names `CORE_RUNTIME`, `STREAMING_RUNTIME`, `KNATIVE_RUNTIME`, and the
  log-tailing defaults `TAIL_SINCE_DEFAULT` and `TAIL_SINCE_CREATE_DEFAULT`.
- **`riffcli.errors`**: `silence_error` wraps an error in a `SilentError` so
  that it still fails a command without being reported again; `is_silent`
  looks for one along the chain of causes.
- **`riffcli.tabwriter`**: an elastic-tabstop `Writer` that pads
  tab-terminated cells so that columns line up. `Flag` selects options such as
  `ALIGN_RIGHT`, `DISCARD_EMPTY_COLUMNS`, `FILTER_HTML`, `STRIP_ESCAPE`,
  `DEBUG`, `REMEMBER_WIDTHS` (keep column widths across flushes, see
  `remembered_widths` and `set_remembered_widths`) and `IGNORE_ANSI_CODES`
  (do not count colour codes in widths). Call `flush()`, or use the writer as
  a context manager, when done.

## Installation

```
pip install riffcli
```

To run the test suite, install the `test` extra and run `pytest`:

```
pip install "riffcli[test]"
pytest
```

## Examples

Binding a positional argument:

```python
from riffcli.command import Command, CommandError, args, name_arg

bound = {}
cmd = Command(use="get", run=lambda cmd, argv: None)
args(cmd, name_arg(lambda value: bound.update(name=value)))

cmd.execute(["my-function"])
bound["name"]                 # "my-function"

cmd.silence_usage = True
try:
    cmd.execute(["a", "b"])
except CommandError as err:
    print(err)                # unknown command "b" for "get"
```

Collecting validation errors:

```python
from riffcli.fielderrors import err_missing_field, err_multiple_one_of

errors = err_missing_field("--namespace").also(
    err_multiple_one_of("--all", "name(s)"),
)
raise errors.to_aggregate()
```

Plain and coloured text:

```python
from riffcli.colors import set_color_enabled, swarnf
from riffcli.flags import strip_dash

set_color_enabled(False)
swarnf("<unknown>")          # "<unknown>"
strip_dash("--namespace")    # "namespace"
```

Aligned columns:

```python
import io
from riffcli.tabwriter import Flag, Writer

out = io.StringIO()
with Writer(out, 6, 4, 3, " ", Flag.REMEMBER_WIDTHS | Flag.IGNORE_ANSI_CODES) as w:
    w.write("NAME\tAGE\n")
    w.write("my-function\t5m\n")
print(out.getvalue())
```

## What it does not do

riffcli is a set of building blocks, not a finished tool. It installs no
command of its own and does not talk to a Kubernetes cluster: there is no API
client, no resource types, no printer that turns resource objects into
tables, and no formatting of resource status conditions or YAML output of
resources. `riffcli.tabwriter` aligns whatever text it is given; building the
rows is left to the caller.