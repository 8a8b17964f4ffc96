"""Locating the Android NDK and the tools inside it."""

from __future__ import annotations

import os
import re
import string
import struct
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from droidforge.source_props import Revision, SourceProps, SourcePropsError

_NEEDED_RE = re.compile(r"\(NEEDED\)\s+Shared library: \[(.+)\]", re.MULTILINE)
_LIBCXX_SHARED = "libc++_shared.so"


def host_tag() -> str:
    """Name of the prebuilt toolchain directory for this host."""
    if sys.platform == "darwin":
        return "darwin-x86_64"
    if sys.platform.startswith("linux"):
        return "linux-x86_64"
    if sys.platform in ("win32", "cygwin"):
        return "windows-x86_64" if struct.calcsize("P") == 8 else "windows"
    raise OSError(f"unsupported host platform {sys.platform!r}")


class Compiler(Enum):
    CLANG = "clang"
    CLANGXX = "clang++"


class Binutil(Enum):
    AR = "ar"
    LD = "ld"


class MissingToolError(FileNotFoundError):
    """A tool expected inside the NDK was not found."""

    def __init__(self, name: str, tried_path: Path):
        super().__init__(f'Missing tool `{name}`; tried at "{tried_path}".')
        self.name = name
        self.tried_path = tried_path

    @classmethod
    def check_file(cls, path: Path, name: str) -> Path:
        if not path.is_file():
            raise cls(name, path)
        return path

    @classmethod
    def check_dir(cls, path: Path, name: str) -> Path:
        if not path.is_dir():
            raise cls(name, path)
        return path


@dataclass(frozen=True, order=True)
class NdkVersion:
    major: int
    minor: int = 0

    def __str__(self) -> str:
        text = f"r{self.major}"
        if self.minor != 0:
            letters = string.ascii_lowercase
            if self.minor >= len(letters):
                raise ValueError(
                    "NDK minor version exceeded the number of letters in the alphabet"
                )
            text += letters[self.minor]
        return text

    @classmethod
    def from_revision(cls, revision: Revision) -> NdkVersion:
        return cls(revision.triple.major, revision.triple.minor)


MIN_NDK_VERSION = NdkVersion(19, 0)


class NdkError(Exception):
    """The NDK environment could not be initialized."""


def parse_required_libs(readelf_output: str) -> set[str]:
    """Shared libraries listed as NEEDED in ``readelf -d`` output."""
    return {match.group(1) for match in _NEEDED_RE.finditer(readelf_output)}


@dataclass(frozen=True)
class NdkEnv:
    ndk_home: Path

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> NdkEnv:
        """Locate the NDK via ``NDK_HOME`` and check its version."""
        environ = os.environ if environ is None else environ
        raw = environ.get("NDK_HOME")
        if raw is None:
            raise NdkError(
                "Have you installed the NDK? The `NDK_HOME` environment variable "
                "isn't set, and is required: environment variable not found"
            )
        home = Path(raw)
        if not home.is_dir():
            raise NdkError(
                "Have you installed the NDK? The `NDK_HOME` environment variable is "
                "set, but doesn't point to an existing directory."
            )
        env = cls(home)
        try:
            version = NdkVersion.from_revision(env.version())
        except SourcePropsError as err:
            raise NdkError(f"Failed to lookup version of installed NDK: {err}") from err
        if version < MIN_NDK_VERSION:
            raise NdkError(
                f"At least NDK {MIN_NDK_VERSION} is required "
                f"(you currently have NDK {version})"
            )
        return env

    def version(self) -> Revision:
        return SourceProps.from_path(self.ndk_home / "source.properties").pkg.revision

    def prebuilt_dir(self) -> Path:
        return MissingToolError.check_dir(
            self.ndk_home / "toolchains" / "llvm" / "prebuilt" / host_tag(),
            "prebuilt toolchain",
        )

    def tool_dir(self) -> Path:
        return MissingToolError.check_dir(self.prebuilt_dir() / "bin", "tools")

    def compiler_path(self, compiler: Compiler, triple: str, min_api: int) -> Path:
        return MissingToolError.check_file(
            self.tool_dir() / f"{triple}{min_api}-{compiler.value}", compiler.value
        )

    def binutil_path(self, binutil: Binutil, triple: str) -> Path:
        return MissingToolError.check_file(
            self.tool_dir() / f"{triple}-{binutil.value}", binutil.value
        )

    def libcxx_shared_path(self, abi: str) -> Path:
        return MissingToolError.check_file(
            self.ndk_home / "sources" / "cxx-stl" / "llvm-libc++" / "libs" / abi / _LIBCXX_SHARED,
            _LIBCXX_SHARED,
        )

    def readelf_path(self, triple: str) -> Path:
        return MissingToolError.check_file(self.tool_dir() / f"{triple}-readelf", "readelf")