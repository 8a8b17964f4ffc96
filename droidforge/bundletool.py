"""Obtaining and invoking ``bundletool``, which builds APKs from app bundles."""

from __future__ import annotations

import contextlib
import shutil
import urllib.request
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import IO

RELEASE_BASE = "https://github.com/google/bundletool/releases/download"


class BundletoolInstallError(Exception):
    """``bundletool`` could not be installed."""


@dataclass(frozen=True)
class BundletoolJarInfo:
    version: str = "1.8.0"
    release_base: str = RELEASE_BASE

    def file_name(self) -> str:
        return f"bundletool-all-{self.version}.jar"

    def installation_path(self, tools_dir: str | Path) -> Path:
        return Path(tools_dir) / self.file_name()

    def download_url(self) -> str:
        return f"{self.release_base}/{self.version}/{self.file_name()}"

    def command_args(self, tools_dir: str | Path) -> list[str]:
        """Command line that runs the installed jar."""
        return ["java", "-jar", str(self.installation_path(tools_dir))]

    def install(
        self,
        tools_dir: str | Path,
        reinstall: bool = False,
        opener: Callable[[str], IO[bytes]] | None = None,
    ) -> Path:
        """Download the jar into ``tools_dir`` unless it is already there.

        ``opener`` maps a URL to a readable binary stream; it defaults to
        ``urllib.request.urlopen``. Returns the jar's path.
        """
        tools_dir = Path(tools_dir)
        jar_path = self.installation_path(tools_dir)
        if jar_path.exists() and not reinstall:
            return jar_path
        opener = urllib.request.urlopen if opener is None else opener
        try:
            response = opener(self.download_url())
        except (OSError, ValueError) as err:
            raise BundletoolInstallError(f"Failed to download `bundletool`: {err}") from err
        with contextlib.closing(response):
            try:
                tools_dir.mkdir(parents=True, exist_ok=True)
            except OSError as err:
                raise BundletoolInstallError(
                    f'Failed to create bundletool.jar at "{tools_dir}": {err}'
                ) from err
            try:
                out = jar_path.open("wb")
            except OSError as err:
                raise BundletoolInstallError(
                    f'Failed to create bundletool.jar at "{jar_path}": {err}'
                ) from err
            with out:
                try:
                    shutil.copyfileobj(response, out)
                except OSError as err:
                    raise BundletoolInstallError(
                        f'Failed to copy content into bundletool.jar at "{jar_path}": {err}'
                    ) from err
        return jar_path


BUNDLE_TOOL_JAR_INFO = BundletoolJarInfo()