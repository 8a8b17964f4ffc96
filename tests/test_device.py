from pathlib import Path

import pytest

from droidforge.config import Config
from droidforge.device import (
    Device,
    NoiseLevel,
    Profile,
    aab_path,
    apk_path,
    apks_path,
    output_suffix,
    upper_camel_case,
)
from droidforge.target import all_targets


@pytest.fixture
def config(tmp_path):
    return Config.from_raw(tmp_path, "my-app", None)


def _device(serial="SERIAL0001", name="Phone", model="Phone", key="aarch64"):
    return Device(serial, name, model, all_targets()[key])


def test_output_suffix():
    assert output_suffix(Profile.DEBUG) == "debug"
    assert output_suffix(Profile.RELEASE) == "release-unsigned"


def test_apk_path_debug(config):
    expected = (
        config.project_dir()
        / "app/build/outputs/apk/arm64/debug/app-arm64-debug.apk"
    )
    assert apk_path(config, Profile.DEBUG, "arm64") == expected


def test_apks_path_release(config):
    expected = (
        config.project_dir()
        / "app/build/outputs/apk/arm/release/app-arm-release-unsigned.apks"
    )
    assert apks_path(config, Profile.RELEASE, "arm") == expected


def test_aab_path(config):
    expected = (
        config.project_dir()
        / "app/build/outputs/bundle/x86debug/app-x86-debug.aab"
    )
    assert aab_path(config, Profile.DEBUG, "x86") == expected


def test_paths_live_under_project_dir(config):
    for func in (apk_path, apks_path, aab_path):
        path = func(config, Profile.RELEASE, "arm64")
        assert config.project_dir() in path.parents


def test_upper_camel_case_simple():
    assert upper_camel_case("debug") == "Debug"
    assert upper_camel_case("arm64") == "Arm64"


def test_upper_camel_case_joins_separated_words():
    assert upper_camel_case("foo_bar-baz") == "FooBarBaz"


def test_upper_camel_case_idempotent():
    for text in ("release", "arm", "x86_64", "someMixedText"):
        once = upper_camel_case(text)
        assert upper_camel_case(once) == once


def test_str_same_name_and_model():
    assert str(_device(name="Pixel", model="Pixel")) == "Pixel"


def test_str_different_model():
    assert str(_device(name="Pixel", model="Model_X")) == "Pixel (Model_X)"


def test_assemble_task():
    device = _device(key="aarch64")
    assert device.assemble_task(Profile.DEBUG) == "assembleArm64Debug"


def test_bundle_task():
    device = _device(key="armv7")
    assert device.bundle_task(Profile.RELEASE) == ":app:bundleArmRelease"


@pytest.mark.parametrize(
    "level,flag",
    [
        (NoiseLevel.POLITE, "--warn"),
        (NoiseLevel.LOUD_AND_PROUD, "--info"),
        (NoiseLevel.FRANKLY_QUITE_PEDANTIC, "--debug"),
    ],
)
def test_gradle_log_flag(level, flag):
    assert Device.gradle_log_flag(level) == flag


def test_activity_name():
    device = _device()
    assert (
        device.activity_name("com.example", "my_app")
        == "com.example.my_app/android.app.NativeActivity"
    )


def test_devices_sort_by_serial():
    devices = [_device(serial="SERIAL0003"), _device(serial="SERIAL0001"), _device(serial="SERIAL0002")]
    assert [d.serial_no for d in sorted(devices)] == ["SERIAL0001", "SERIAL0002", "SERIAL0003"]


def test_devices_equality_and_set():
    a = _device()
    b = _device()
    c = _device(key="x86_64")
    assert a == b
    assert a != c
    assert len({a, b, c}) == 2
    assert (a < c) != (c < a)
    assert Path(str(a)).name == "Phone"