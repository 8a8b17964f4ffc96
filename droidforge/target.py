"""Android build targets and their per-target cargo configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from droidforge.ndk import Binutil, Compiler

if TYPE_CHECKING:
    from droidforge.config import Config
    from droidforge.ndk import NdkEnv

DEFAULT_KEY = "aarch64"


class CargoMode(Enum):
    CHECK = "check"
    BUILD = "build"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CargoTargetConfig:
    """The ``[target.<triple>]`` section written to the cargo config."""

    ar: str | None = None
    linker: str | None = None
    rustflags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Target:
    triple: str
    abi: str
    arch: str
    clang_triple_override: str | None = None
    binutils_triple_override: str | None = None

    def clang_triple(self) -> str:
        return self.clang_triple_override or self.triple

    def binutils_triple(self) -> str:
        return self.binutils_triple_override or self.triple

    def generate_cargo_config(self, config: Config, ndk_env: NdkEnv) -> CargoTargetConfig:
        """Cargo settings for this target, pointing at the NDK's tools.

        Raises ``MissingToolError`` if a required tool is absent.
        """
        ar = ndk_env.binutil_path(Binutil.AR, self.binutils_triple())
        # Using clang as the linker seems to be the only way to get the right
        # library search paths.
        linker = ndk_env.compiler_path(
            Compiler.CLANG, self.clang_triple(), config.min_sdk_version
        )
        return CargoTargetConfig(
            ar=str(ar),
            linker=str(linker),
            rustflags=[
                "-Clink-arg=-landroid",
                "-Clink-arg=-llog",
                "-Clink-arg=-lOpenSLES",
            ],
        )


_TARGETS = MappingProxyType(
    {
        "aarch64": Target(
            triple="aarch64-linux-android",
            abi="arm64-v8a",
            arch="arm64",
        ),
        "armv7": Target(
            triple="armv7-linux-androideabi",
            abi="armeabi-v7a",
            arch="arm",
            clang_triple_override="armv7a-linux-androideabi",
            binutils_triple_override="arm-linux-androideabi",
        ),
        "i686": Target(
            triple="i686-linux-android",
            abi="x86",
            arch="x86",
        ),
        "x86_64": Target(
            triple="x86_64-linux-android",
            abi="x86_64",
            arch="x86_64",
        ),
    }
)


def all_targets() -> MappingProxyType[str, Target]:
    """All supported targets, keyed by name in sorted order."""
    return _TARGETS


def name_list() -> list[str]:
    return list(_TARGETS)


def for_abi(abi: str) -> Target | None:
    """The target whose ABI is ``abi``, or ``None``."""
    return next((target for target in _TARGETS.values() if target.abi == abi), None)