"""Main CLI entry point for cargo-zigbuild."""

import logging
import os
import sys

from zigbuild_tooling.cli import build as build_cli

LOG_ENV_VAR = "CARGO_ZIGBUILD_LOG"


def setup_logging() -> None:
    """Configure logging from CARGO_ZIGBUILD_LOG (debug, info, warning; default warning)."""
    name = os.environ.get(LOG_ENV_VAR, "warning").upper()
    level = getattr(logging, name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    if level <= logging.DEBUG:
        fmt = "%(levelname)s: %(name)s: %(message)s"
    else:
        fmt = "%(levelname)s: %(message)s"
    logging.basicConfig(level=level, format=fmt)


def _usage() -> None:
    print("Usage: cargo-zigbuild <command> [args...]", file=sys.stderr)
    print("Commands:", file=sys.stderr)
    print(
        "  build [options]     - cargo build using zig as the linker for cross targets",
        file=sys.stderr,
    )
    print(
        "  zigbuild [options]  - same as build (invoked by `cargo zigbuild`)",
        file=sys.stderr,
    )


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        _usage()
        sys.exit(1)

    setup_logging()
    command = argv[0]
    rest = argv[1:]
    # `cargo zigbuild build ...` arrives as ["zigbuild", "build", ...]
    if command == "zigbuild" and rest and rest[0] == "build":
        rest = rest[1:]

    if command in ("build", "zigbuild"):
        build_cli.run_build_argv(rest)
    elif command in ("-h", "--help"):
        _usage()
        sys.exit(0)
    else:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        _usage()
        sys.exit(1)


if __name__ == "__main__":
    main()
