"""Stage OS-specific stub libraries into cargo's deps dir before the build (Apple targets only)."""

from __future__ import annotations

import logging
from pathlib import Path

from zigbuild_tooling.macos import LIBICONV_TBD, LIBICONV_TBD_NAME
from zigbuild_tooling.target import TargetFamily, TargetSpec

log = logging.getLogger(__name__)


def profile_dir(profile: str | None, release: bool) -> str:
    """Cargo's profile -> output directory name. Custom profiles use their own name."""
    if profile in ("dev", "test"):
        return "debug"
    if profile in ("release", "bench"):
        return "release"
    if profile:
        return profile
    return "release" if release else "debug"


def target_root(
    base_triple: str,
    cwd: Path,
    target_dir: Path | None = None,
    manifest_path: Path | None = None,
) -> Path:
    """--target-dir, else <manifest dir>/target, else <cwd>/target; joined with the triple."""
    if target_dir is not None:
        root = cwd / target_dir
    elif manifest_path is not None:
        root = (cwd / manifest_path).parent / "target"
    else:
        root = cwd / "target"
    return root / base_triple


def stage_os_deps(
    spec: TargetSpec,
    *,
    cwd: Path,
    release: bool = False,
    profile: str | None = None,
    target_dir: Path | None = None,
    manifest_path: Path | None = None,
) -> Path | None:
    """Write libiconv.tbd for Apple targets; returns its path, or None when nothing to stage.

    Overwrites on every call. OSError propagates.
    """
    if spec.family is not TargetFamily.APPLE:
        return None
    deps_dir = (
        target_root(spec.base_triple, cwd, target_dir, manifest_path)
        / profile_dir(profile, release)
        / "deps"
    )
    deps_dir.mkdir(parents=True, exist_ok=True)
    out = deps_dir / LIBICONV_TBD_NAME
    out.write_text(LIBICONV_TBD)
    log.debug("Staged %s", out)
    return out
