"""cargo build with zig as the cross linker: request mapping, linker env, OS deps staging."""

from .cargo_build import BuildError, build_env, execute
from .os_deps import profile_dir, stage_os_deps, target_root
from .request import BuildRequest, cargo_args
from .zig_env import compose_linker_env, linker_env_var, needs_zig_linker

__all__ = [
    "BuildError",
    "BuildRequest",
    "build_env",
    "cargo_args",
    "compose_linker_env",
    "execute",
    "linker_env_var",
    "needs_zig_linker",
    "profile_dir",
    "stage_os_deps",
    "target_root",
]
