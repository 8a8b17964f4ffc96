import sys

import pytest

from droidforge.ndk import (
    MIN_NDK_VERSION,
    Binutil,
    Compiler,
    MissingToolError,
    NdkEnv,
    NdkError,
    NdkVersion,
    host_tag,
    parse_required_libs,
)
from droidforge.source_props import Revision


def _make_ndk(tmp_path, revision="21.3.6528147"):
    home = tmp_path / "ndk"
    home.mkdir()
    (home / "source.properties").write_text(f"Pkg.Revision = {revision}\n")
    return home


def test_host_tag_linux(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    assert host_tag() == "linux-x86_64"


def test_host_tag_darwin(monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    assert host_tag() == "darwin-x86_64"


def test_ndk_version_display():
    assert str(NdkVersion(19, 0)) == "r19"
    assert str(NdkVersion(21, 1)) == "r21b"


def test_ndk_version_letter_overflow():
    with pytest.raises(ValueError):
        str(NdkVersion(21, 26))


def test_ndk_version_ordering():
    assert NdkVersion(18, 5) < MIN_NDK_VERSION < NdkVersion(19, 1)


def test_ndk_version_from_revision():
    rev = Revision.parse("20.1.5948944")
    assert NdkVersion.from_revision(rev) == NdkVersion(20, 1)


def test_from_environ_ok(tmp_path):
    home = _make_ndk(tmp_path)
    env = NdkEnv.from_environ({"NDK_HOME": str(home)})
    assert env.ndk_home == home
    assert env.version().triple.major == 21


def test_from_environ_missing_var():
    with pytest.raises(NdkError, match="isn't set"):
        NdkEnv.from_environ({})


def test_from_environ_not_a_dir(tmp_path):
    with pytest.raises(NdkError, match="existing directory"):
        NdkEnv.from_environ({"NDK_HOME": str(tmp_path / "absent")})


def test_from_environ_version_too_low(tmp_path):
    home = _make_ndk(tmp_path, "18.1.5063045")
    with pytest.raises(NdkError, match="At least NDK r19"):
        NdkEnv.from_environ({"NDK_HOME": str(home)})


def test_from_environ_version_lookup_failed(tmp_path):
    home = tmp_path / "ndk"
    home.mkdir()
    with pytest.raises(NdkError, match="lookup version"):
        NdkEnv.from_environ({"NDK_HOME": str(home)})


def test_tool_paths(tmp_path):
    home = _make_ndk(tmp_path)
    bin_dir = home / "toolchains" / "llvm" / "prebuilt" / host_tag() / "bin"
    bin_dir.mkdir(parents=True)
    clang = bin_dir / "aarch64-linux-android24-clang"
    clang.touch()
    ar = bin_dir / "aarch64-linux-android-ar"
    ar.touch()
    env = NdkEnv(home)
    assert env.tool_dir() == bin_dir
    assert env.compiler_path(Compiler.CLANG, "aarch64-linux-android", 24) == clang
    assert env.binutil_path(Binutil.AR, "aarch64-linux-android") == ar
    with pytest.raises(MissingToolError) as info:
        env.compiler_path(Compiler.CLANGXX, "aarch64-linux-android", 24)
    assert info.value.name == "clang++"
    with pytest.raises(MissingToolError) as info:
        env.readelf_path("aarch64-linux-android")
    assert info.value.name == "readelf"


def test_missing_prebuilt_dir(tmp_path):
    env = NdkEnv(_make_ndk(tmp_path))
    with pytest.raises(MissingToolError) as info:
        env.tool_dir()
    assert info.value.name == "prebuilt toolchain"


def test_libcxx_shared_path(tmp_path):
    home = _make_ndk(tmp_path)
    lib_dir = home / "sources" / "cxx-stl" / "llvm-libc++" / "libs" / "arm64-v8a"
    lib_dir.mkdir(parents=True)
    (lib_dir / "libc++_shared.so").touch()
    env = NdkEnv(home)
    assert env.libcxx_shared_path("arm64-v8a") == lib_dir / "libc++_shared.so"
    with pytest.raises(MissingToolError):
        env.libcxx_shared_path("x86")


def test_parse_required_libs():
    output = (
        "Dynamic section at offset 0x1 contains 3 entries:\n"
        " 0x0000000000000001 (NEEDED)             Shared library: [libc++_shared.so]\n"
        " 0x0000000000000001 (NEEDED)             Shared library: [liblog.so]\n"
        " 0x000000000000000e (SONAME)             Library soname: [libapp.so]\n"
    )
    assert parse_required_libs(output) == {"libc++_shared.so", "liblog.so"}
    assert parse_required_libs("") == set()