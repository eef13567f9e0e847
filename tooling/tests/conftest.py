"""Pytest fixtures for cargo-zigbuild tooling tests."""

from pathlib import Path

import pytest

from zigbuild_tooling.rustc_meta import Channel, ToolchainInfo

LINUX_HOST = "x86_64-unknown-linux-gnu"


class FakeLinker:
    """Stands in for prepare_zig_linker; records the targets it was asked for."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.calls: list[str] = []

    def __call__(self, target: str) -> tuple[Path, Path]:
        self.calls.append(target)
        return self.root / f"zigcc-{target}.sh", self.root / f"zigcxx-{target}.sh"


@pytest.fixture
def stable_host() -> ToolchainInfo:
    return ToolchainInfo(LINUX_HOST, Channel.STABLE)


@pytest.fixture
def nightly_host() -> ToolchainInfo:
    return ToolchainInfo(LINUX_HOST, Channel.NIGHTLY)


@pytest.fixture
def fake_linker(tmp_path: Path) -> FakeLinker:
    return FakeLinker(tmp_path / "zig-cache")
