"""Shared helpers for zigbuild_tooling (YAML loading, cache location)."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml


def load_yaml_file(p: Path) -> Any:
    """Load a YAML document from path; empty file -> None."""
    with p.open() as f:
        return yaml.safe_load(f)


def user_cache_dir(app: str = "cargo-zigbuild") -> Path:
    """$XDG_CACHE_HOME/<app>, else ~/.cache/<app> (%LOCALAPPDATA% on Windows)."""
    if os.name == "nt" and os.environ.get("LOCALAPPDATA"):
        return Path(os.environ["LOCALAPPDATA"]) / app
    xdg = os.environ.get("XDG_CACHE_HOME")
    base = Path(xdg) if xdg else Path.home() / ".cache"
    return base / app
