"""Prepare `zig cc` / `zig c++` wrapper scripts usable as cargo linker and TARGET_CC/TARGET_CXX.

The wrapper bakes in the zig target, so the ABI version suffix of the Rust target
(e.g. glibc 2.17 in aarch64-unknown-linux-gnu.2.17) selects the glibc baseline zig links against.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path

from zigbuild_tooling.helpers import user_cache_dir
from zigbuild_tooling.target import parse_target

log = logging.getLogger(__name__)

CACHE_DIR_ENV_VAR = "CARGO_ZIGBUILD_CACHE_DIR"

# Rust arch -> zig arch where the names differ.
ZIG_ARCH = {
    "armv7": "arm",
    "armv7a": "arm",
    "armv6": "arm",
    "armv5te": "arm",
    "arm": "arm",
    "i686": "x86",
    "i586": "x86",
    "i386": "x86",
    "riscv64gc": "riscv64",
    "arm64": "aarch64",
}


class LinkerPreparationError(RuntimeError):
    """zig linker wrappers could not be produced for the requested target."""


def zig_target(target: str) -> str:
    """Rust target (with optional .<abi version>) -> zig -target value.

    aarch64-unknown-linux-gnu.2.17 -> aarch64-linux-gnu.2.17
    x86_64-apple-darwin.10.9       -> x86_64-macos.10.9-none
    x86_64-pc-windows-gnu          -> x86_64-windows-gnu

    zig reads arch-os[.ver]-abi[.ver]: a glibc version rides on the abi part,
    a macOS or FreeBSD release on the os part.
    """
    spec = parse_target(target)
    version = f".{spec.abi_version}" if spec.abi_version else ""
    parts = spec.base_triple.split("-")
    if len(parts) < 3:
        msg = f"unsupported target '{target}': expected <arch>-<vendor>-<os>[-<abi>]"
        raise LinkerPreparationError(msg)
    arch = ZIG_ARCH.get(parts[0], parts[0])
    if "apple" in parts or "darwin" in parts:
        os_abi = f"macos{version}-none"
    elif "windows" in parts:
        if parts[-1] not in ("gnu", "gnullvm"):
            msg = f"unsupported target '{target}': zig links only the windows-gnu ABIs"
            raise LinkerPreparationError(msg)
        if version:
            msg = f"unsupported target '{target}': version suffix is not supported on windows"
            raise LinkerPreparationError(msg)
        os_abi = f"windows-{parts[-1]}"
    elif "linux" in parts:
        abi = parts[-1] if parts[-1] != "linux" else "gnu"
        os_abi = f"linux-{abi}{version}"
    elif "freebsd" in parts:
        os_abi = f"freebsd{version}-none"
    else:
        msg = f"unsupported target '{target}': zig cannot link for this OS"
        raise LinkerPreparationError(msg)
    return f"{arch}-{os_abi}"


def find_zig(zig: str | None = None) -> str:
    """Explicit path, then $ZIG, then `zig` on PATH. Raises LinkerPreparationError if none found."""
    candidate = zig or os.environ.get("ZIG")
    if candidate:
        return candidate
    found = shutil.which("zig")
    if found is None:
        msg = "zig not found in PATH; install zig (https://ziglang.org/download/) or set ZIG"
        raise LinkerPreparationError(msg)
    return found


def _wrapper_text(zig: str, subcommand: str, target: str) -> str:
    if os.name == "nt":
        return f'@echo off\r\n"{zig}" {subcommand} -target {target} %*\r\n'
    return f'#!/bin/sh\nexec "{zig}" {subcommand} -target {target} "$@"\n'


def _write_wrapper(path: Path, text: str) -> None:
    path.write_text(text)
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def prepare_zig_linker(
    target: str,
    *,
    zig: str | None = None,
    cache_dir: Path | None = None,
) -> tuple[Path, Path]:
    """Write zigcc-<target> / zigcxx-<target> wrappers; return (cc, cxx). Idempotent."""
    ztarget = zig_target(target)
    zig_path = find_zig(zig)
    if cache_dir is None:
        env_dir = os.environ.get(CACHE_DIR_ENV_VAR)
        cache_dir = Path(env_dir) if env_dir else user_cache_dir()
    ext = "bat" if os.name == "nt" else "sh"
    cc = cache_dir / f"zigcc-{target}.{ext}"
    cxx = cache_dir / f"zigcxx-{target}.{ext}"
    try:
        cache_dir.mkdir(parents=True, exist_ok=True)
        _write_wrapper(cc, _wrapper_text(zig_path, "cc", ztarget))
        _write_wrapper(cxx, _wrapper_text(zig_path, "c++", ztarget))
    except OSError as e:
        msg = f"failed to write zig linker wrappers in {cache_dir}: {e}"
        raise LinkerPreparationError(msg) from e
    log.debug("zig wrappers for %s (zig target %s): %s, %s", target, ztarget, cc, cxx)
    return cc, cxx
