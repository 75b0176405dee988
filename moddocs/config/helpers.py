"""Utility helpers shared by the moddocs configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import ApiLayout, ModuleManifest, SiteConfigError, UrlLayout


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve_path(value: object, base: Path) -> Path:
    """Resolve ``value`` against ``base`` unless it is already absolute."""
    path = Path(str(value)).expanduser()
    if not path.is_absolute():
        path = base / path
    return path.resolve()


def _normalize_extensions(
    value: str | list[object] | None, default: typ.Sequence[str], *, field: str
) -> list[str]:
    """Return dot-prefixed, de-duplicated extensions preserving their order."""
    if value is None:
        return list(default)
    raw = value.split() if isinstance(value, str) else list(value)
    normalized: list[str] = []
    for item in raw:
        text = str(item).strip()
        if not text:
            continue
        if not text.startswith("."):
            text = f".{text}"
        if text not in normalized:
            normalized.append(text)
    if not normalized:
        msg = f"'{field}' must list at least one file extension."
        raise SiteConfigError(msg)
    return normalized


def _discover_modules(modules_dir: Path) -> dict[str, ModuleManifest]:
    """Return a manifest for each sub-directory of ``modules_dir``, by name."""
    if not modules_dir.is_dir():
        return {}
    return {
        child.name: ModuleManifest(name=child.name, path=child)
        for child in sorted(modules_dir.iterdir(), key=lambda item: item.name)
        if child.is_dir() and not child.name.startswith(".")
    }


def _build_module_manifests(
    payload: typ.Mapping[str, typ.Any] | None, base: Path
) -> dict[str, ModuleManifest]:
    """Build explicit module manifests from the ``modules`` mapping."""
    if not payload:
        return {}
    if not isinstance(payload, dict):
        msg = "'modules' must be a mapping of module names to settings."
        raise SiteConfigError(msg)
    manifests: dict[str, ModuleManifest] = {}
    for name, entry in payload.items():
        match entry:
            case dict():
                raw_path = _optional_str(entry.get("path"))
            case str():
                raw_path = _optional_str(entry)
            case _:
                msg = f"Module '{name}' must be a mapping or a path string."
                raise SiteConfigError(msg)
        if not raw_path:
            msg = f"Module '{name}' is missing 'path'."
            raise SiteConfigError(msg)
        manifests[str(name)] = ModuleManifest(
            name=str(name), path=_resolve_path(raw_path, base)
        )
    return manifests


def _build_api_layout(payload: typ.Mapping[str, typ.Any] | None) -> ApiLayout:
    """Build an ApiLayout from the optional ``api`` mapping."""
    base = ApiLayout()
    if not payload:
        return base
    return ApiLayout(
        lib_dir=_optional_str(payload.get("lib_dir")) or base.lib_dir,
        services_dir=_optional_str(payload.get("services_dir")) or base.services_dir,
        extensions=_normalize_extensions(
            payload.get("extensions"), base.extensions, field="api.extensions"
        ),
    )


def _build_url_layout(payload: typ.Mapping[str, typ.Any] | None) -> UrlLayout:
    """Build a UrlLayout from the optional ``urls`` mapping."""
    base = UrlLayout()
    if not payload:
        return base
    docs_base = _optional_str(payload.get("docs_base")) or base.docs_base
    api_base = _optional_str(payload.get("api_base")) or base.api_base
    return UrlLayout(docs_base=docs_base.rstrip("/"), api_base=api_base.rstrip("/"))


__all__ = [
    "_build_api_layout",
    "_build_module_manifests",
    "_build_url_layout",
    "_discover_modules",
    "_normalize_extensions",
    "_optional_str",
    "_resolve_path",
]
