"""Host toolchain metadata from `rustc -vV` (host triple and release channel)."""

from __future__ import annotations

import enum
import logging
import os
import re
import subprocess
from typing import NamedTuple

log = logging.getLogger(__name__)


class ToolchainQueryError(RuntimeError):
    """rustc could not be run or its version output was not understood."""


class Channel(enum.Enum):
    STABLE = "stable"
    BETA = "beta"
    NIGHTLY = "nightly"
    DEV = "dev"


class ToolchainInfo(NamedTuple):
    host: str
    channel: Channel


def channel_from_release(release: str) -> Channel:
    """1.77.0-nightly -> NIGHTLY, 1.76.0-beta.3 -> BETA, 1.75.0-dev -> DEV, else STABLE."""
    m = re.match(r"^\d+\.\d+\.\d+(?:-([A-Za-z]+))?", release.strip())
    if not m or not m.group(1):
        return Channel.STABLE
    tag = m.group(1).lower()
    if tag == "nightly":
        return Channel.NIGHTLY
    if tag == "beta":
        return Channel.BETA
    if tag == "dev":
        return Channel.DEV
    return Channel.STABLE


def parse_version_verbose(output: str) -> ToolchainInfo:
    """Parse `rustc -vV` output. Raises ToolchainQueryError if host or release is missing."""
    fields: dict[str, str] = {}
    for line in output.splitlines():
        key, sep, value = line.partition(":")
        if sep:
            fields[key.strip()] = value.strip()
    host = fields.get("host")
    release = fields.get("release")
    if not host or not release:
        msg = "unexpected `rustc -vV` output: missing host or release"
        raise ToolchainQueryError(msg)
    return ToolchainInfo(host, channel_from_release(release))


def current_toolchain_info(rustc: str | None = None) -> ToolchainInfo:
    """Run `rustc -vV` once (RUSTC env var honoured) and return host triple + channel."""
    program = rustc or os.environ.get("RUSTC") or "rustc"
    try:
        r = subprocess.run([program, "-vV"], capture_output=True, text=True)
    except OSError as e:
        msg = f"failed to run {program}: {e}"
        raise ToolchainQueryError(msg) from e
    if r.returncode != 0:
        msg = f"`{program} -vV` failed: {(r.stderr or r.stdout).strip()}"
        raise ToolchainQueryError(msg)
    info = parse_version_verbose(r.stdout)
    log.debug("rustc host=%s channel=%s", info.host, info.channel.value)
    return info
