"""A connected Android device and the build artifacts deployed to it."""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from droidforge.config import Config
from droidforge.target import Target

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z0-9]+|[A-Z0-9]+")
_NON_ALNUM_RE = re.compile(r"[^A-Za-z0-9]+")


class Profile(Enum):
    DEBUG = "debug"
    RELEASE = "release"

    def __str__(self) -> str:
        return self.value


class NoiseLevel(Enum):
    POLITE = "polite"
    LOUD_AND_PROUD = "loud-and-proud"
    FRANKLY_QUITE_PEDANTIC = "frankly-quite-pedantic"


_GRADLE_LOG_FLAGS = {
    NoiseLevel.POLITE: "--warn",
    NoiseLevel.LOUD_AND_PROUD: "--info",
    NoiseLevel.FRANKLY_QUITE_PEDANTIC: "--debug",
}


def upper_camel_case(text: str) -> str:
    """Convert ``text`` to UpperCamelCase, splitting on separators and case changes."""
    words = (
        word
        for segment in _NON_ALNUM_RE.split(text)
        for word in _WORD_RE.findall(segment)
    )
    return "".join(word[:1].upper() + word[1:].lower() for word in words)


def output_suffix(profile: Profile) -> str:
    """Suffix gradle gives to artifacts built with ``profile``."""
    # Release builds are produced unsigned.
    return "release-unsigned" if profile is Profile.RELEASE else profile.value


def _output_resource_path(
    output_dir: str, extension: str, config: Config, profile: Profile, flavor: str
) -> Path:
    suffix = output_suffix(profile)
    return (
        config.project_dir()
        / "app"
        / "build"
        / "outputs"
        / output_dir
        / f"app-{flavor}-{suffix}.{extension}"
    )


def apk_path(config: Config, profile: Profile, flavor: str) -> Path:
    return _output_resource_path(
        f"apk/{flavor}/{profile.value}", "apk", config, profile, flavor
    )


def apks_path(config: Config, profile: Profile, flavor: str) -> Path:
    return _output_resource_path(
        f"apk/{flavor}/{profile.value}", "apks", config, profile, flavor
    )


def aab_path(config: Config, profile: Profile, flavor: str) -> Path:
    return _output_resource_path(
        f"bundle/{flavor}{profile.value}", "aab", config, profile, flavor
    )


@functools.total_ordering
@dataclass(frozen=True, eq=True)
class Device:
    serial_no: str
    name: str
    model: str
    target: Target

    def _key(self) -> tuple:
        t = self.target
        return (
            self.serial_no,
            self.name,
            self.model,
            t.triple,
            t.clang_triple_override or "",
            t.binutils_triple_override or "",
            t.abi,
            t.arch,
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Device):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        if self.model != self.name:
            return f"{self.name} ({self.model})"
        return self.name

    def _flavor_and_build_type(self, profile: Profile) -> str:
        return upper_camel_case(self.target.arch) + upper_camel_case(profile.value)

    def assemble_task(self, profile: Profile) -> str:
        """Gradle task that assembles the APK for this device's target."""
        return f"assemble{self._flavor_and_build_type(profile)}"

    def bundle_task(self, profile: Profile) -> str:
        """Gradle task that builds the app bundle for this device's target."""
        return f":app:bundle{self._flavor_and_build_type(profile)}"

    @staticmethod
    def gradle_log_flag(noise_level: NoiseLevel) -> str:
        return _GRADLE_LOG_FLAGS[noise_level]

    def activity_name(self, reverse_domain: str, name_snake: str) -> str:
        """Component name passed to ``am start -n``."""
        return f"{reverse_domain}.{name_snake}/android.app.NativeActivity"