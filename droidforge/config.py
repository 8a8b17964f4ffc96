"""Android project configuration and package metadata."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

NAME = "android"
DEFAULT_MIN_SDK_VERSION = 24
DEFAULT_VULKAN_VALIDATION = True
DEFAULT_PROJECT_DIR = "gen/android"


@dataclass(frozen=True)
class AssetPackInfo:
    name: str
    delivery_type: str


def _optional_list(data: Mapping[str, Any], key: str) -> list[str] | None:
    value = data.get(key)
    return None if value is None else list(value)


@dataclass
class Metadata:
    supported: bool = True
    features: list[str] | None = None
    app_sources: list[str] = field(default_factory=list)
    app_plugins: list[str] | None = None
    project_dependencies: list[str] | None = None
    app_dependencies: list[str] | None = None
    app_dependencies_platform: list[str] | None = None
    asset_packs: list[AssetPackInfo] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Metadata:
        """Build metadata from a kebab-case mapping."""
        packs = data.get("asset-packs")
        return cls(
            supported=bool(data.get("supported", True)),
            features=_optional_list(data, "features"),
            app_sources=list(data.get("app-sources") or []),
            app_plugins=_optional_list(data, "app-plugins"),
            project_dependencies=_optional_list(data, "project-dependencies"),
            app_dependencies=_optional_list(data, "app-dependencies"),
            app_dependencies_platform=_optional_list(data, "app-dependencies-platform"),
            asset_packs=None
            if packs is None
            else [AssetPackInfo(p["name"], p["delivery_type"]) for p in packs],
        )

    def no_default_features(self) -> bool:
        return self.features is not None


class ProjectDirInvalid(ValueError):
    """The configured project directory cannot be used."""

    def __init__(self, project_dir: str, detail: str):
        super().__init__(f"`{NAME}.project-dir` invalid: {detail}")
        self.project_dir = project_dir
        self.detail = detail


def under_root(path: str | Path, root: str | Path) -> bool:
    """Whether ``path``, taken relative to ``root``, stays inside ``root``."""
    root_norm = Path(os.path.normpath(os.path.abspath(root)))
    candidate = Path(os.path.normpath(root_norm / path))
    return candidate == root_norm or root_norm in candidate.parents


@dataclass(frozen=True)
class Config:
    app_root: Path
    app_name: str
    min_sdk_version: int = DEFAULT_MIN_SDK_VERSION
    vulkan_validation: bool = DEFAULT_VULKAN_VALIDATION
    project_dir_rel: Path = Path(DEFAULT_PROJECT_DIR)

    @classmethod
    def from_raw(
        cls,
        app_root: str | Path,
        app_name: str,
        raw: Mapping[str, Any] | None,
    ) -> Config:
        """Resolve a kebab-case raw config, filling in defaults."""
        raw = raw or {}
        app_root = Path(app_root)

        min_sdk_version = raw.get("min-sdk-version")
        if min_sdk_version is None:
            log.info(
                "`%s.min-sdk-version` not set; defaulting to %s",
                NAME,
                DEFAULT_MIN_SDK_VERSION,
            )
            min_sdk_version = DEFAULT_MIN_SDK_VERSION

        vulkan_validation = raw.get("vulkan-validation")
        if vulkan_validation is None:
            log.info(
                "`%s.vulkan-validation` not set; defaulting to %s",
                NAME,
                DEFAULT_VULKAN_VALIDATION,
            )
            vulkan_validation = DEFAULT_VULKAN_VALIDATION

        project_dir = raw.get("project-dir")
        if project_dir is None:
            log.info(
                "`%s.project-dir` not set; defaulting to %r", NAME, DEFAULT_PROJECT_DIR
            )
            project_dir = DEFAULT_PROJECT_DIR
        else:
            if project_dir == DEFAULT_PROJECT_DIR:
                log.warning(
                    "`%s.project-dir` is set to the default value; "
                    "you can remove it from your config",
                    NAME,
                )
            if not under_root(project_dir, app_root):
                raise ProjectDirInvalid(
                    project_dir,
                    f'"{project_dir}" is outside of the app root "{app_root}"',
                )
            if " " in project_dir:
                raise ProjectDirInvalid(
                    project_dir,
                    f'"{project_dir}" contains spaces, '
                    "which the NDK is remarkably intolerant of",
                )

        return cls(
            app_root=app_root,
            app_name=app_name,
            min_sdk_version=int(min_sdk_version),
            vulkan_validation=bool(vulkan_validation),
            project_dir_rel=Path(project_dir),
        )

    @property
    def name_snake(self) -> str:
        return self.app_name.replace("-", "_")

    def so_name(self) -> str:
        return f"lib{self.name_snake}.so"

    def project_dir(self) -> Path:
        return self.app_root / self.project_dir_rel / self.app_name

    def project_dir_exists(self) -> bool:
        return self.project_dir().is_dir()