"""The Android SDK and NDK environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from droidforge.ndk import NdkEnv
from droidforge.source_props import Revision, SourceProps

log = logging.getLogger(__name__)


class AndroidEnvError(Exception):
    """The Android SDK could not be located."""


def _existing_dir(raw: str | None) -> Path | None:
    if raw is None:
        return None
    path = Path(raw)
    return path if path.is_dir() else None


@dataclass(frozen=True)
class AndroidEnv:
    sdk_root: Path
    ndk: NdkEnv
    path: str = ""

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> AndroidEnv:
        """Locate the SDK and NDK from environment variables.

        Falls back to the deprecated ``ANDROID_HOME`` when ``ANDROID_SDK_ROOT``
        is unusable. NDK problems are raised as ``NdkError``.
        """
        environ = os.environ if environ is None else environ
        raw_root = environ.get("ANDROID_SDK_ROOT")
        sdk_root = _existing_dir(raw_root)
        if sdk_root is None:
            fallback = _existing_dir(environ.get("ANDROID_HOME"))
            if fallback is None:
                if raw_root is None:
                    raise AndroidEnvError(
                        "Have you installed the Android SDK? The `ANDROID_SDK_ROOT` "
                        "environment variable isn't set, and is required: "
                        "environment variable not found"
                    )
                raise AndroidEnvError(
                    "Have you installed the Android SDK? The `ANDROID_SDK_ROOT` "
                    "environment variable is set, but doesn't point to an existing "
                    "directory."
                )
            log.warning(
                "`ANDROID_SDK_ROOT` isn't set; falling back to `ANDROID_HOME`, "
                "which is deprecated"
            )
            sdk_root = fallback
        ndk = NdkEnv.from_environ(environ)
        return cls(sdk_root=sdk_root, ndk=ndk, path=environ.get("PATH", ""))

    def sdk_version(self) -> Revision:
        return SourceProps.from_path(
            self.sdk_root / "tools" / "source.properties"
        ).pkg.revision

    def explicit_env(self) -> dict[str, str]:
        """Variables to pass explicitly to Android tooling."""
        return {
            "ANDROID_SDK_ROOT": str(self.sdk_root),
            "NDK_HOME": str(self.ndk.ndk_home),
        }