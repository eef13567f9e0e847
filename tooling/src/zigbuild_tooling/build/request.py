"""BuildRequest: every `cargo build` option, and its mapping to cargo arguments."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from zigbuild_tooling.target import TargetSpec, parse_target


@dataclass(frozen=True)
class BuildRequest:
    quiet: bool = False
    packages: tuple[str, ...] = ()
    workspace: bool = False
    exclude: tuple[str, ...] = ()
    all: bool = False
    jobs: int | None = None
    lib: bool = False
    bin: tuple[str, ...] = ()
    bins: bool = False
    example: tuple[str, ...] = ()
    examples: bool = False
    test: tuple[str, ...] = ()
    tests: bool = False
    bench: tuple[str, ...] = ()
    benches: bool = False
    all_targets: bool = False
    release: bool = False
    profile: str | None = None
    features: tuple[str, ...] = ()
    all_features: bool = False
    no_default_features: bool = False
    target: str | None = None
    target_dir: Path | None = None
    out_dir: Path | None = None
    manifest_path: Path | None = None
    ignore_rust_version: bool = False
    message_format: tuple[str, ...] = ()
    build_plan: bool = False
    unit_graph: bool = False
    future_incompat_report: bool = False
    verbose: int = 0
    color: str | None = None
    frozen: bool = False
    locked: bool = False
    offline: bool = False
    config: tuple[str, ...] = ()
    unstable_flags: tuple[str, ...] = ()
    # not forwarded as flags
    env: dict[str, str] = field(default_factory=dict, hash=False, compare=False)
    cargo: str = "cargo"

    @property
    def target_spec(self) -> TargetSpec | None:
        return parse_target(self.target) if self.target else None


def _repeat(flag: str, values: tuple[str, ...]) -> list[str]:
    return [x for v in values for x in (flag, v)]


def cargo_args(req: BuildRequest) -> list[str]:
    """`cargo build` argument list for req, in a fixed order. --target gets the base triple only."""
    args = ["build"]
    if req.quiet:
        args.append("--quiet")
    args += _repeat("--package", req.packages)
    if req.workspace:
        args.append("--workspace")
    args += _repeat("--exclude", req.exclude)
    if req.all:
        args.append("--all")
    if req.jobs is not None:
        args += ["--jobs", str(req.jobs)]
    if req.lib:
        args.append("--lib")
    args += _repeat("--bin", req.bin)
    if req.bins:
        args.append("--bins")
    args += _repeat("--example", req.example)
    if req.examples:
        args.append("--examples")
    args += _repeat("--test", req.test)
    if req.tests:
        args.append("--tests")
    args += _repeat("--bench", req.bench)
    if req.benches:
        args.append("--benches")
    if req.all_targets:
        args.append("--all-targets")
    if req.release:
        args.append("--release")
    if req.profile:
        args += ["--profile", req.profile]
    args += _repeat("--features", req.features)
    if req.all_features:
        args.append("--all-features")
    if req.no_default_features:
        args.append("--no-default-features")
    spec = req.target_spec
    if spec is not None:
        args += ["--target", spec.base_triple]
    if req.target_dir is not None:
        args += ["--target-dir", str(req.target_dir)]
    if req.out_dir is not None:
        args += ["--out-dir", str(req.out_dir)]
    if req.manifest_path is not None:
        args += ["--manifest-path", str(req.manifest_path)]
    if req.ignore_rust_version:
        args.append("--ignore-rust-version")
    args += _repeat("--message-format", req.message_format)
    if req.build_plan:
        args.append("--build-plan")
    if req.unit_graph:
        args.append("--unit-graph")
    if req.future_incompat_report:
        args.append("--future-incompat-report")
    if req.verbose > 0:
        args.append("-" + "v" * req.verbose)
    if req.color:
        args += ["--color", req.color]
    if req.frozen:
        args.append("--frozen")
    if req.locked:
        args.append("--locked")
    if req.offline:
        args.append("--offline")
    args += _repeat("--config", req.config)
    args += _repeat("-Z", req.unstable_flags)
    return args
