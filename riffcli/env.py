"""Build-time description of the command line tool and shared defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

__all__ = [
    "CompiledEnv",
    "compiled_env",
    "DEFAULT_ENV",
    "CORE_RUNTIME",
    "STREAMING_RUNTIME",
    "KNATIVE_RUNTIME",
    "ALL_RUNTIMES",
    "TAIL_SINCE_CREATE_DEFAULT",
    "TAIL_SINCE_DEFAULT",
]

CORE_RUNTIME = "core"
STREAMING_RUNTIME = "streaming"
KNATIVE_RUNTIME = "knative"
ALL_RUNTIMES = (CORE_RUNTIME, STREAMING_RUNTIME, KNATIVE_RUNTIME)

TAIL_SINCE_CREATE_DEFAULT = timedelta(minutes=1)
TAIL_SINCE_DEFAULT = timedelta(seconds=1)


@dataclass
class CompiledEnv:
    """Name, version and enabled runtimes of the tool."""

    name: str = "riff"
    version: str = "unknown"
    git_sha: str = "unknown sha"
    git_dirty: bool = False
    runtimes: dict[str, bool] = field(default_factory=lambda: {CORE_RUNTIME: True})


def compiled_env(
    name: str = "riff",
    version: str = "unknown",
    gitsha: str = "unknown sha",
    gitdirty: str = "",
    runtimes: str = CORE_RUNTIME,
) -> CompiledEnv:
    """Build an environment from raw build settings.

    ``gitdirty`` marks the build dirty when non-empty; ``runtimes`` is a comma
    separated list.
    """
    return CompiledEnv(
        name=name,
        version=version,
        git_sha=gitsha,
        git_dirty=gitdirty != "",
        runtimes={runtime: True for runtime in runtimes.split(",")},
    )


DEFAULT_ENV = compiled_env()