"""Tests for zigbuild_tooling.build.zig_env (linker environment composition)."""

from pathlib import Path

import pytest

from zigbuild_tooling.build.zig_env import compose_linker_env, linker_env_var, needs_zig_linker
from zigbuild_tooling.rustc_meta import Channel, ToolchainInfo
from zigbuild_tooling.target import TargetSpec, parse_target
from zigbuild_tooling.zig import LinkerPreparationError

APPLIES_TO_HOST = {
    "CARGO_UNSTABLE_TARGET_APPLIES_TO_HOST": "true",
    "CARGO_TARGET_APPLIES_TO_HOST": "false",
}


class TestNeedsZigLinker:
    def test_no_target(self, stable_host: ToolchainInfo) -> None:
        assert not needs_zig_linker(None, stable_host)

    def test_host_target(self, stable_host: ToolchainInfo) -> None:
        assert not needs_zig_linker(parse_target("x86_64-unknown-linux-gnu"), stable_host)

    def test_host_target_with_glibc_version(self, stable_host: ToolchainInfo) -> None:
        assert needs_zig_linker(parse_target("x86_64-unknown-linux-gnu.2.17"), stable_host)

    def test_trailing_dot_counts_as_host(self, stable_host: ToolchainInfo) -> None:
        assert not needs_zig_linker(parse_target("x86_64-unknown-linux-gnu."), stable_host)


class TestComposeLinkerEnv:
    def test_empty_for_host_target_on_stable(self, stable_host: ToolchainInfo, fake_linker) -> None:
        env = compose_linker_env(
            parse_target("x86_64-unknown-linux-gnu"), stable_host, prepare_linker=fake_linker
        )
        assert env == {}
        assert fake_linker.calls == []

    def test_empty_without_target(self, nightly_host: ToolchainInfo, fake_linker) -> None:
        assert compose_linker_env(None, nightly_host, prepare_linker=fake_linker) == {}
        assert fake_linker.calls == []

    def test_cross_target_sets_cc_cxx_and_linker(
        self, stable_host: ToolchainInfo, fake_linker
    ) -> None:
        env = compose_linker_env(
            parse_target("aarch64-unknown-linux-gnu"), stable_host, prepare_linker=fake_linker
        )
        cc, cxx = fake_linker("aarch64-unknown-linux-gnu")
        assert env["TARGET_CC"] == str(cc)
        assert env["TARGET_CXX"] == str(cxx)
        assert env["CARGO_TARGET_AARCH64_UNKNOWN_LINUX_GNU_LINKER"] == str(cc)
        assert "WINAPI_NO_BUNDLED_LIBRARIES" not in env
        assert not set(APPLIES_TO_HOST) & set(env)

    def test_linker_gets_full_target_and_var_uses_base(
        self, stable_host: ToolchainInfo, fake_linker
    ) -> None:
        env = compose_linker_env(
            parse_target("aarch64-unknown-linux-gnu.2.17"), stable_host, prepare_linker=fake_linker
        )
        assert fake_linker.calls == ["aarch64-unknown-linux-gnu.2.17"]
        assert linker_env_var("aarch64-unknown-linux-gnu") in env

    def test_windows_gnu_disables_bundled_libraries(
        self, stable_host: ToolchainInfo, fake_linker
    ) -> None:
        env = compose_linker_env(
            parse_target("x86_64-pc-windows-gnu"), stable_host, prepare_linker=fake_linker
        )
        assert env["WINAPI_NO_BUNDLED_LIBRARIES"] == "1"
        assert "CARGO_TARGET_X86_64_PC_WINDOWS_GNU_LINKER" in env

    def test_glibc_version_on_host_nightly_sets_applies_to_host(
        self, nightly_host: ToolchainInfo, fake_linker
    ) -> None:
        env = compose_linker_env(
            parse_target("x86_64-unknown-linux-gnu.2.17"), nightly_host, prepare_linker=fake_linker
        )
        assert env["CARGO_TARGET_X86_64_UNKNOWN_LINUX_GNU_LINKER"]
        for key, value in APPLIES_TO_HOST.items():
            assert env[key] == value

    def test_glibc_version_on_host_stable_still_uses_zig(
        self, stable_host: ToolchainInfo, fake_linker
    ) -> None:
        env = compose_linker_env(
            parse_target("x86_64-unknown-linux-gnu.2.17"), stable_host, prepare_linker=fake_linker
        )
        assert fake_linker.calls == ["x86_64-unknown-linux-gnu.2.17"]
        assert "TARGET_CC" in env
        assert not set(APPLIES_TO_HOST) & set(env)

    def test_cross_target_on_nightly_has_no_applies_to_host(
        self, nightly_host: ToolchainInfo, fake_linker
    ) -> None:
        env = compose_linker_env(
            parse_target("aarch64-apple-darwin"), nightly_host, prepare_linker=fake_linker
        )
        assert not set(APPLIES_TO_HOST) & set(env)

    def test_stage_called_with_spec(self, stable_host: ToolchainInfo, fake_linker) -> None:
        staged: list[TargetSpec] = []
        spec = parse_target("aarch64-apple-darwin")
        compose_linker_env(spec, stable_host, prepare_linker=fake_linker, stage=staged.append)
        assert staged == [spec]

    def test_stage_skipped_for_host_target(self, stable_host: ToolchainInfo, fake_linker) -> None:
        staged: list[TargetSpec] = []
        compose_linker_env(
            parse_target("x86_64-unknown-linux-gnu"),
            stable_host,
            prepare_linker=fake_linker,
            stage=staged.append,
        )
        assert staged == []

    def test_linker_failure_propagates(self, stable_host: ToolchainInfo) -> None:
        def failing(target: str) -> tuple[Path, Path]:
            msg = f"unsupported target '{target}'"
            raise LinkerPreparationError(msg)

        with pytest.raises(LinkerPreparationError, match="unsupported target"):
            compose_linker_env(
                parse_target("wasm32-unknown-unknown"),
                stable_host,
                prepare_linker=failing,
            )

    def test_apple_host_cross_to_linux(self, fake_linker) -> None:
        mac = ToolchainInfo("aarch64-apple-darwin", Channel.STABLE)
        env = compose_linker_env(
            parse_target("x86_64-unknown-linux-musl"), mac, prepare_linker=fake_linker
        )
        assert "CARGO_TARGET_X86_64_UNKNOWN_LINUX_MUSL_LINKER" in env
