"""Management of the ``jniLibs`` directories of a generated Android project."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from droidforge.config import Config
from droidforge.target import Target, all_targets

log = logging.getLogger(__name__)


class SymlinkLibError(Exception):
    """A library could not be symlinked into a ``jniLibs`` directory."""


def jnilibs_path(config: Config, target: Target) -> Path:
    return config.project_dir() / "app" / "src" / "main" / "jniLibs" / target.abi


@dataclass(frozen=True)
class JniLibs:
    path: Path

    @classmethod
    def create(cls, config: Config, target: Target) -> JniLibs:
        """Ensure the ``jniLibs`` directory for ``target`` exists."""
        path = jnilibs_path(config, target)
        path.mkdir(parents=True, exist_ok=True)
        return cls(path)

    @staticmethod
    def remove_broken_links(config: Config) -> None:
        """Delete symlinks in every ``jniLibs`` directory whose target is gone."""
        for target in all_targets().values():
            abi_dir = jnilibs_path(config, target)
            if not abi_dir.is_dir():
                continue
            for entry in abi_dir.iterdir():
                if not entry.is_symlink():
                    continue
                pointee = entry.readlink() if hasattr(entry, "readlink") else Path(
                    entry.resolve(strict=False)
                )
                log.info("symlink at %s points to %s", entry, pointee)
                if not entry.exists():
                    log.info(
                        "deleting broken symlink %s (points to %s, which doesn't exist)",
                        entry,
                        pointee,
                    )
                    entry.unlink()

    def symlink_lib(self, src: str | Path) -> None:
        """Link ``src`` into this directory under its own file name, replacing any old entry."""
        src = Path(src)
        log.info("symlinking lib %s in jniLibs dir %s", src, self.path)
        if not src.is_file():
            raise SymlinkLibError(
                f'Failed to symlink lib: The symlink source is "{src}", '
                "but nothing exists there"
            )
        dest = self.path / src.name
        try:
            if dest.is_symlink() or dest.is_file():
                dest.unlink()
            dest.symlink_to(src)
        except OSError as err:
            raise SymlinkLibError(f"Failed to symlink lib: {err}") from err