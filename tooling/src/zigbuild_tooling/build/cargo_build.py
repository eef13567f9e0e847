"""Run `cargo build` for a BuildRequest, linking through zig when cross compiling."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Callable, Mapping
from functools import partial
from pathlib import Path

from zigbuild_tooling.build.os_deps import stage_os_deps
from zigbuild_tooling.build.request import BuildRequest, cargo_args
from zigbuild_tooling.build.zig_env import PrepareLinker, compose_linker_env
from zigbuild_tooling.rustc_meta import ToolchainInfo, current_toolchain_info
from zigbuild_tooling.zig import prepare_zig_linker

log = logging.getLogger(__name__)


class BuildError(RuntimeError):
    """cargo could not be started."""


def build_env(
    req: BuildRequest,
    *,
    toolchain_info: Callable[[], ToolchainInfo] = current_toolchain_info,
    prepare_linker: PrepareLinker = prepare_zig_linker,
    cwd: Path,
) -> dict[str, str]:
    """Linker env for req (empty without --target). Queries the toolchain at most once."""
    spec = req.target_spec
    if spec is None:
        return {}
    toolchain = toolchain_info()
    log.debug("Target %s (base %s), host %s", spec.full, spec.base_triple, toolchain.host)
    stage = partial(
        stage_os_deps,
        cwd=cwd,
        release=req.release,
        profile=req.profile,
        target_dir=req.target_dir,
        manifest_path=req.manifest_path,
    )
    return compose_linker_env(spec, toolchain, prepare_linker=prepare_linker, stage=stage)


def execute(
    req: BuildRequest,
    *,
    toolchain_info: Callable[[], ToolchainInfo] = current_toolchain_info,
    prepare_linker: PrepareLinker = prepare_zig_linker,
    cwd: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Run cargo build and return its exit code (1 if killed by a signal).

    Linker preparation and staging errors propagate before cargo is spawned.
    Raises BuildError if cargo cannot be started.
    """
    cwd = cwd or Path.cwd()
    linker_env = build_env(
        req, toolchain_info=toolchain_info, prepare_linker=prepare_linker, cwd=cwd
    )
    env = dict(os.environ if environ is None else environ)
    env.update(req.env)
    env.update(linker_env)

    cmd = [req.cargo, *cargo_args(req)]
    log.info("Running: %s", " ".join(cmd))
    try:
        r = subprocess.run(cmd, env=env, cwd=str(cwd))
    except OSError as e:
        msg = f"Failed to run cargo build: {e}"
        raise BuildError(msg) from e
    if r.returncode < 0:
        log.debug("cargo terminated by signal %d", -r.returncode)
        return 1
    return r.returncode
