"""Typed dataclasses describing the documentation site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from moddocs._constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_API_EXTENSIONS,
    DEFAULT_DOC_EXTENSIONS,
    DEFAULT_DOCS_BASE_URL,
    DEFAULT_DOCS_DIR,
    DEFAULT_LIB_DIR,
    DEFAULT_SERVICES_DIR,
)


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True, frozen=True)
class ModuleManifest:
    """An installed module and the physical root holding its folders."""

    name: str
    path: Path


@dc.dataclass(slots=True)
class ApiLayout:
    """Folder names and file extensions used for API reference units."""

    lib_dir: str = DEFAULT_LIB_DIR
    services_dir: str = DEFAULT_SERVICES_DIR
    extensions: list[str] = dc.field(
        default_factory=lambda: list(DEFAULT_API_EXTENSIONS)
    )


@dc.dataclass(slots=True)
class UrlLayout:
    """URL prefixes under which documentation topics and API units are served."""

    docs_base: str = DEFAULT_DOCS_BASE_URL
    api_base: str = DEFAULT_API_BASE_URL


@dc.dataclass(slots=True)
class SiteConfig:
    """Platform root, module registry, and layout choices for one site."""

    root: Path
    modules: dict[str, ModuleManifest] = dc.field(default_factory=dict)
    docs_dir: str = DEFAULT_DOCS_DIR
    extensions: list[str] = dc.field(
        default_factory=lambda: list(DEFAULT_DOC_EXTENSIONS)
    )
    api: ApiLayout = dc.field(default_factory=ApiLayout)
    urls: UrlLayout = dc.field(default_factory=UrlLayout)

    @property
    def docs_root(self) -> Path:
        """Return the platform's own documentation folder."""
        return self.root / self.docs_dir

    def module_docs_root(self, module: str) -> Path | None:
        """Return the documentation folder of ``module``, or None if unknown."""
        manifest = self.modules.get(module)
        if manifest is None:
            return None
        return manifest.path / self.docs_dir


__all__ = [
    "ApiLayout",
    "ModuleManifest",
    "SiteConfig",
    "SiteConfigError",
    "UrlLayout",
]
