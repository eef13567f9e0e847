"""Target specifier: split `<triple>[.<abi version>]` and classify the target family."""

from __future__ import annotations

import enum
from typing import NamedTuple


class TargetFamily(enum.Enum):
    """Target families that need family-specific linker setup."""

    APPLE = "apple"
    WINDOWS_GNU = "windows-gnu"
    OTHER = "other"


class TargetSpec(NamedTuple):
    """Base triple passed to cargo plus the optional ABI version (e.g. glibc 2.17) for zig."""

    base_triple: str
    abi_version: str | None = None

    @property
    def full(self) -> str:
        """Target string as requested, suffix included (what the zig wrapper needs)."""
        if self.abi_version:
            return f"{self.base_triple}.{self.abi_version}"
        return self.base_triple

    @property
    def family(self) -> TargetFamily:
        return target_family(self.base_triple)


def parse_target(target: str) -> TargetSpec:
    """Split on the first '.' (aarch64-unknown-linux-gnu.2.17 -> base + "2.17"). Never raises."""
    base, _, version = target.partition(".")
    return TargetSpec(base, version or None)


def target_family(base_triple: str) -> TargetFamily:
    if "apple" in base_triple:
        return TargetFamily.APPLE
    # windows-gnu and windows-gnullvm
    if "windows-gnu" in base_triple:
        return TargetFamily.WINDOWS_GNU
    return TargetFamily.OTHER


def target_env_name(base_triple: str) -> str:
    """Cargo env var spelling: aarch64-unknown-linux-gnu -> AARCH64_UNKNOWN_LINUX_GNU."""
    return base_triple.upper().replace("-", "_")
