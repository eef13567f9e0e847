"""`cargo-zigbuild build`: compile a package and its dependencies using zig as the linker."""

from __future__ import annotations

import argparse
import os
import sys
from functools import partial
from pathlib import Path
from typing import Any

from zigbuild_tooling.build import BuildError, BuildRequest, execute
from zigbuild_tooling.config import ConfigError, load_config
from zigbuild_tooling.rustc_meta import ToolchainQueryError
from zigbuild_tooling.zig import LinkerPreparationError, prepare_zig_linker


def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="cargo zigbuild",
        description="Compile a local package and all of its dependencies using zig as the linker",
        epilog="Run `cargo help build` for more detailed information.",
    )
    many = {"action": "extend", "nargs": "+", "default": []}
    ap.add_argument("-q", "--quiet", action="store_true", help="Do not print cargo log messages")
    ap.add_argument(
        "-p", "--package", dest="packages", metavar="SPEC", help="Package to build", **many
    )
    ap.add_argument("--workspace", action="store_true", help="Build all packages in the workspace")
    ap.add_argument("--exclude", metavar="SPEC", help="Exclude packages from the build", **many)
    ap.add_argument("--all", action="store_true", help="Alias for workspace (deprecated)")
    ap.add_argument("-j", "--jobs", type=int, metavar="N", help="Number of parallel jobs")
    ap.add_argument("--lib", action="store_true", help="Build only this package's library")
    ap.add_argument("--bin", metavar="NAME", help="Build only the specified binary", **many)
    ap.add_argument("--bins", action="store_true", help="Build all binaries")
    ap.add_argument("--example", metavar="NAME", help="Build only the specified example", **many)
    ap.add_argument("--examples", action="store_true", help="Build all examples")
    ap.add_argument("--test", metavar="NAME", help="Build only the specified test target", **many)
    ap.add_argument("--tests", action="store_true", help="Build all tests")
    ap.add_argument("--bench", metavar="NAME", help="Build only the specified bench target", **many)
    ap.add_argument("--benches", action="store_true", help="Build all benches")
    ap.add_argument("--all-targets", action="store_true", help="Build all targets")
    ap.add_argument("-r", "--release", action="store_true", help="Build in release mode")
    ap.add_argument("--profile", metavar="PROFILE-NAME", help="Build with the specified profile")
    ap.add_argument("--features", help="Space or comma separated list of features", **many)
    ap.add_argument("--all-features", action="store_true", help="Activate all available features")
    ap.add_argument(
        "--no-default-features", action="store_true", help="Do not activate the `default` feature"
    )
    ap.add_argument(
        "--target",
        metavar="TRIPLE",
        help="Build for the target triple, optionally with a glibc version (e.g. .2.17)",
    )
    ap.add_argument("--target-dir", type=Path, metavar="DIRECTORY", help="Directory for artifacts")
    ap.add_argument("--out-dir", type=Path, metavar="PATH", help="Copy final artifacts here")
    ap.add_argument("--manifest-path", type=Path, metavar="PATH", help="Path to Cargo.toml")
    ap.add_argument(
        "--ignore-rust-version", action="store_true", help="Ignore `rust-version` in packages"
    )
    ap.add_argument("--message-format", metavar="FMT", help="Error format", **many)
    ap.add_argument("--build-plan", action="store_true", help="Output the build plan in JSON")
    ap.add_argument("--unit-graph", action="store_true", help="Output build graph in JSON")
    ap.add_argument(
        "--future-incompat-report", action="store_true", help="Future incompatibility report"
    )
    ap.add_argument("-v", "--verbose", action="count", default=0, help="Use verbose output")
    ap.add_argument("--color", metavar="WHEN", help="Coloring: auto, always, never")
    ap.add_argument("--frozen", action="store_true", help="Require Cargo.lock and cache up to date")
    ap.add_argument("--locked", action="store_true", help="Require Cargo.lock is up to date")
    ap.add_argument("--offline", action="store_true", help="Run without accessing the network")
    ap.add_argument("--config", metavar="KEY=VALUE", help="Override a configuration value", **many)
    ap.add_argument(
        "-Z", dest="unstable_flags", metavar="FLAG", help="Unstable (nightly-only) flags", **many
    )
    return ap


def parse_build_args(argv: list[str], config: dict[str, Any] | None = None) -> BuildRequest:
    """argv -> BuildRequest. --target falls back to CARGO_BUILD_TARGET, then config 'target'."""
    config = config or {}
    ap = _parser()
    args = ap.parse_args(argv)
    if args.verbose > 2:
        ap.error("-v may be given at most twice")
    target = args.target or os.environ.get("CARGO_BUILD_TARGET") or config.get("target")
    return BuildRequest(
        quiet=args.quiet,
        packages=tuple(args.packages),
        workspace=args.workspace,
        exclude=tuple(args.exclude),
        all=args.all,
        jobs=args.jobs,
        lib=args.lib,
        bin=tuple(args.bin),
        bins=args.bins,
        example=tuple(args.example),
        examples=args.examples,
        test=tuple(args.test),
        tests=args.tests,
        bench=tuple(args.bench),
        benches=args.benches,
        all_targets=args.all_targets,
        release=args.release,
        profile=args.profile,
        features=tuple(args.features),
        all_features=args.all_features,
        no_default_features=args.no_default_features,
        target=target or None,
        target_dir=args.target_dir,
        out_dir=args.out_dir,
        manifest_path=args.manifest_path,
        ignore_rust_version=args.ignore_rust_version,
        message_format=tuple(args.message_format),
        build_plan=args.build_plan,
        unit_graph=args.unit_graph,
        future_incompat_report=args.future_incompat_report,
        verbose=args.verbose,
        color=args.color,
        frozen=args.frozen,
        locked=args.locked,
        offline=args.offline,
        config=tuple(args.config),
        unstable_flags=tuple(args.unstable_flags),
        env=dict(config.get("env") or {}),
        cargo=config.get("cargo") or "cargo",
    )


def run_build(argv: list[str], project_root: Path | None = None) -> int:
    """Load config, parse argv, run cargo build. Returns cargo's exit code, 1 on setup errors."""
    project_root = project_root or Path.cwd()
    try:
        config = load_config(cwd=project_root)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    req = parse_build_args(argv, config)
    cache_dir = Path(config["cache_dir"]) if config.get("cache_dir") else None
    prepare = partial(prepare_zig_linker, zig=config.get("zig"), cache_dir=cache_dir)
    try:
        return execute(req, prepare_linker=prepare, cwd=project_root)
    except (LinkerPreparationError, ToolchainQueryError, BuildError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


def run_build_argv(argv: list[str] | None = None) -> None:
    """Entry from main: argv defaults to sys.argv[2:] (skip 'cargo-zigbuild build')."""
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []
    sys.exit(run_build(argv))
