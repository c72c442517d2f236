"""Process-wide configuration: output streams, settings and kube config."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field
from typing import Any, TextIO

import yaml

from riffcli.colors import ERROR_COLOR, INFO_COLOR, SUCCESS_COLOR, set_color_enabled
from riffcli.env import DEFAULT_ENV, CompiledEnv

__all__ = ["Config", "new_default_config"]

_CONFIG_EXTENSIONS = (".yaml", ".yml", ".json")
_TRUE = {"1", "t", "true", "yes", "on"}


def _format(fmt: str, args: tuple[Any, ...]) -> str:
    return fmt % args if args else fmt


def _home() -> str:
    home = os.path.expanduser("~")
    if home == "~":
        raise RuntimeError("unable to determine the home directory")
    return home


def _load(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as fh:
        if path.endswith(".json"):
            data = json.load(fh)
        else:
            data = yaml.safe_load(fh)
    return data if isinstance(data, dict) else {}


@dataclass
class Config:
    """Shared state for commands: streams, settings and config file paths."""

    env: CompiledEnv = field(default_factory=lambda: DEFAULT_ENV)
    viper_config_file: str = ""
    kube_config_file: str = ""
    stdin: TextIO | Any = field(default_factory=lambda: sys.stdin)
    stdout: TextIO | Any = field(default_factory=lambda: sys.stdout)
    stderr: TextIO | Any = field(default_factory=lambda: sys.stderr)
    settings: dict[str, Any] = field(default_factory=dict)
    config_file_used: str = ""

    @property
    def name(self) -> str:
        return self.env.name

    def _write(self, stream: Any, fmt: str, args: tuple[Any, ...]) -> int:
        text = _format(fmt, args)
        stream.write(text)
        return len(text)

    def printf(self, fmt: str, *args: Any) -> int:
        return self._write(self.stdout, fmt, args)

    def eprintf(self, fmt: str, *args: Any) -> int:
        return self._write(self.stderr, fmt, args)

    def infof(self, fmt: str, *args: Any) -> int:
        return INFO_COLOR.fprintf(self.stdout, fmt, *args)

    def einfof(self, fmt: str, *args: Any) -> int:
        return INFO_COLOR.fprintf(self.stderr, fmt, *args)

    def successf(self, fmt: str, *args: Any) -> int:
        return SUCCESS_COLOR.fprintf(self.stdout, fmt, *args)

    def esuccessf(self, fmt: str, *args: Any) -> int:
        return SUCCESS_COLOR.fprintf(self.stderr, fmt, *args)

    def errorf(self, fmt: str, *args: Any) -> int:
        return ERROR_COLOR.fprintf(self.stdout, fmt, *args)

    def eerrorf(self, fmt: str, *args: Any) -> int:
        return ERROR_COLOR.fprintf(self.stderr, fmt, *args)

    def setting(self, key: str) -> Any:
        """Return a setting, preferring the matching environment variable."""
        env_key = f"{self.name}_{key}".upper().replace("-", "_")
        if env_key in os.environ:
            return os.environ[env_key]
        return self.settings.get(key)

    def setting_bool(self, key: str) -> bool:
        value = self.setting(key)
        if isinstance(value, str):
            return value.strip().lower() in _TRUE
        return bool(value)

    def default_namespace(self) -> str:
        """Return the namespace of the current kube context, or ``default``."""
        try:
            data = _load(self.kube_config_file) if self.kube_config_file else {}
        except (OSError, yaml.YAMLError, ValueError):
            data = {}
        current = data.get("current-context")
        for entry in data.get("contexts") or []:
            if isinstance(entry, dict) and entry.get("name") == current:
                namespace = (entry.get("context") or {}).get("namespace")
                if namespace:
                    return namespace
        return "default"

    def _find_config_file(self) -> str | None:
        if self.viper_config_file:
            return self.viper_config_file
        base = os.path.join(_home(), "." + self.name)
        for ext in _CONFIG_EXTENSIONS:
            if os.path.isfile(base + ext):
                return base + ext
        return None

    def init_viper_config(self) -> None:
        """Read the settings file, honour ``no-color`` and report the file used."""
        path = self._find_config_file()
        loaded = False
        if path is not None:
            try:
                self.settings = _load(path)
                loaded = True
            except (OSError, yaml.YAMLError, ValueError):
                loaded = False
        if self.setting_bool("no-color"):
            set_color_enabled(False)
        if loaded:
            self.config_file_used = path or ""
            self.einfof("Using config file: %s\n", path)

    def init_kube_config(self) -> None:
        """Choose the kube config file: flag, then KUBECONFIG, then the home dir."""
        if self.kube_config_file:
            return
        env_value = os.environ.get("KUBECONFIG")
        if env_value is not None:
            self.kube_config_file = env_value
        else:
            self.kube_config_file = os.path.join(_home(), ".kube", "config")


def new_default_config() -> Config:
    """Return a configuration bound to the process's standard streams."""
    return Config()