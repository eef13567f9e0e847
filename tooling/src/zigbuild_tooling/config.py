"""Optional YAML config for cargo-zigbuild defaults.

Config YAML format (.cargo-zigbuild.yaml in cwd, or $CARGO_ZIGBUILD_CONFIG):
- target: default target when --target / CARGO_BUILD_TARGET are absent
- cargo: cargo program to run (default: cargo)
- zig: path to the zig binary (default: $ZIG, then PATH)
- cache_dir: where zig cc/c++ wrapper scripts are written
- env: map of extra environment variables for the cargo child process
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from zigbuild_tooling.helpers import load_yaml_file

log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CARGO_ZIGBUILD_CONFIG"
DEFAULT_CONFIG_NAME = ".cargo-zigbuild.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "target": None,
    "cargo": "cargo",
    "zig": None,
    "cache_dir": None,
    "env": {},
}


class ConfigError(ValueError):
    """Config file exists but is not a valid cargo-zigbuild config."""


def resolve_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Return config dict with defaults filled; unknown keys dropped."""
    out = dict(DEFAULT_CONFIG)
    out["env"] = {}
    if not data:
        return out
    for key in ("target", "cargo", "zig", "cache_dir"):
        value = data.get(key)
        if value is not None:
            out[key] = str(value)
    env = data.get("env")
    if env is not None:
        if not isinstance(env, dict):
            msg = "config key 'env' must be a mapping"
            raise ConfigError(msg)
        # `FOO:` with no value leaves FOO unset
        out["env"] = {str(k): str(v) for k, v in env.items() if v is not None}
    return out


def find_config(cwd: Path | None = None) -> Path | None:
    """$CARGO_ZIGBUILD_CONFIG if set, else .cargo-zigbuild.yaml in cwd if it exists."""
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit)
    candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_NAME
    return candidate if candidate.is_file() else None


def load_config(path: Path | None = None, cwd: Path | None = None) -> dict[str, Any]:
    """Load and normalize config. No file -> defaults. Raises ConfigError on bad content."""
    if path is None:
        path = find_config(cwd)
    if path is None:
        return resolve_config(None)
    try:
        data = load_yaml_file(path)
    except OSError as e:
        msg = f"cannot read config {path}: {e}"
        raise ConfigError(msg) from e
    except yaml.YAMLError as e:
        msg = f"invalid YAML in {path}: {e}"
        raise ConfigError(msg) from e
    if data is not None and not isinstance(data, dict):
        msg = f"config {path} must be a mapping"
        raise ConfigError(msg)
    log.debug("Loaded config from %s", path)
    return resolve_config(data)
