"""Compose the environment that makes cargo link through zig for a cross target."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from zigbuild_tooling.rustc_meta import Channel, ToolchainInfo
from zigbuild_tooling.target import TargetFamily, TargetSpec, target_env_name

log = logging.getLogger(__name__)

PrepareLinker = Callable[[str], tuple[Path, Path]]
StageDeps = Callable[[TargetSpec], object]


def needs_zig_linker(spec: TargetSpec | None, toolchain: ToolchainInfo) -> bool:
    """True unless no target was given or the target (suffix included) is exactly the host.

    An empty suffix is dropped by parse_target, so `x86_64-unknown-linux-gnu.` on that host
    counts as the host itself and gets no zig linker.
    """
    return spec is not None and spec.full != toolchain.host


def linker_env_var(base_triple: str) -> str:
    return f"CARGO_TARGET_{target_env_name(base_triple)}_LINKER"


def compose_linker_env(
    spec: TargetSpec | None,
    toolchain: ToolchainInfo,
    *,
    prepare_linker: PrepareLinker,
    stage: StageDeps | None = None,
) -> dict[str, str]:
    """Env vars to inject into cargo; {} when building for the host with the native linker.

    prepare_linker receives the full target (ABI version included) and may raise;
    the error propagates unchanged.
    """
    if spec is None or not needs_zig_linker(spec, toolchain):
        log.debug("No cross target (host %s); using native linker", toolchain.host)
        return {}
    zig_cc, zig_cxx = prepare_linker(spec.full)
    env = {
        "TARGET_CC": str(zig_cc),
        "TARGET_CXX": str(zig_cxx),
        linker_env_var(spec.base_triple): str(zig_cc),
    }

    if stage is not None:
        stage(spec)

    if spec.family is TargetFamily.WINDOWS_GNU:
        env["WINAPI_NO_BUNDLED_LIBRARIES"] = "1"

    # Same arch/OS as host but an ABI version was requested: on nightly, keep
    # [target] linker config from applying to build scripts and proc macros.
    if spec.base_triple == toolchain.host and toolchain.channel is Channel.NIGHTLY:
        env["CARGO_UNSTABLE_TARGET_APPLIES_TO_HOST"] = "true"
        env["CARGO_TARGET_APPLIES_TO_HOST"] = "false"

    for key, value in env.items():
        log.debug("  %s=%s", key, value)
    return env
