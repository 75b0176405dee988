"""Load the documentation site YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from moddocs._constants import DEFAULT_DOC_EXTENSIONS, DEFAULT_DOCS_DIR

from .helpers import (
    _build_api_layout,
    _build_module_manifests,
    _build_url_layout,
    _discover_modules,
    _normalize_extensions,
    _optional_str,
    _resolve_path,
)
from .models import SiteConfig, SiteConfigError


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the platform and its modules.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/docs.yaml``). Relative paths inside the file resolve against
        the directory that holds it.

    Returns
    -------
    SiteConfig
        Parsed configuration with the platform root, the ordered module
        registry, documentation extensions, API layout, and URL prefixes.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the top-level structure is not a mapping or a section is invalid
        (for example, a module entry without a ``path``).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from moddocs.config import load_site_config
    >>> config = load_site_config(Path("config/docs.yaml"))  # doctest: +SKIP
    >>> list(config.modules)  # doctest: +SKIP
    ['module1', 'module2']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SiteConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base = path.resolve().parent

    root = _resolve_path(raw.get("root", "."), base)
    docs_dir = _optional_str(raw.get("docs_dir")) or DEFAULT_DOCS_DIR
    extensions = _normalize_extensions(
        raw.get("extensions"), DEFAULT_DOC_EXTENSIONS, field="extensions"
    )

    modules = {}
    modules_dir = _optional_str(raw.get("modules_dir"))
    if modules_dir:
        modules.update(_discover_modules(_resolve_path(modules_dir, root)))
    modules.update(_build_module_manifests(raw.get("modules"), base))

    return SiteConfig(
        root=root,
        modules=modules,
        docs_dir=docs_dir,
        extensions=extensions,
        api=_build_api_layout(_section(raw, "api")),
        urls=_build_url_layout(_section(raw, "urls")),
    )


def _section(raw: typ.Mapping[str, typ.Any], key: str) -> dict[str, typ.Any] | None:
    """Return the mapping stored under ``key`` or raise when it is malformed."""
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        msg = f"'{key}' must be a mapping."
        raise SiteConfigError(msg)
    return value


__all__ = ["load_site_config"]
