r"""Parse content-unit identifiers and map them to URLs and candidate files.

Every documentation topic and API unit is addressed by an identifier of the
form ``<namespace>:<path>``. The namespace is ``docs`` for narrative topics
and ``apidocs`` for API reference units; the path is empty for the platform
root, a module name for a module index, or ``<module>/<topic>``.

The helpers in this module are routing functions: identifiers from other
namespaces and malformed strings are expected and yield ``None`` instead of
raising.

Examples
--------
>>> parse_item_id("docs:module1/topic").segments
('module1', 'topic')
>>> parse_item_id("no-namespace") is None
True
>>> from moddocs.config import UrlLayout
>>> url_for_id("apidocs:module1/service1", UrlLayout())
'/docs/api/module1/service1'
>>> id_for_url("/docs/module1/topic", UrlLayout())
'docs:module1/topic'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from ._constants import (
    API_NAMESPACE,
    DOCS_NAMESPACE,
    ID_SEPARATOR,
    INDEX_BASENAME,
    PATH_SEPARATOR,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import SiteConfig, UrlLayout

_ID_PATTERN = re.compile(r"^(?P<namespace>[A-Za-z][\w-]*):(?P<path>[^:]*)$")


@dc.dataclass(slots=True, frozen=True)
class ItemId:
    """A parsed ``<namespace>:<path>`` identifier."""

    namespace: str
    path: str

    @property
    def segments(self) -> tuple[str, ...]:
        """Return the non-empty path segments."""
        return tuple(part for part in self.path.split(PATH_SEPARATOR) if part)

    def __str__(self) -> str:
        return format_item_id(self.namespace, self.path)


def format_item_id(namespace: str, path: str) -> str:
    """Join ``namespace`` and ``path`` into an identifier string."""
    return f"{namespace}{ID_SEPARATOR}{path}"


def parse_item_id(text: str | None) -> ItemId | None:
    """Return the parsed identifier, or ``None`` when ``text`` is malformed."""
    if not text:
        return None
    match = _ID_PATTERN.match(text)
    if match is None:
        return None
    path = match.group("path")
    if path.startswith(PATH_SEPARATOR) or path.endswith(PATH_SEPARATOR):
        return None
    if PATH_SEPARATOR * 2 in path:
        return None
    return ItemId(namespace=match.group("namespace"), path=path)


def url_for_id(item_id: str, urls: UrlLayout) -> str | None:
    """Return the display URL for a documentation or API identifier.

    Parameters
    ----------
    item_id : str
        Identifier such as ``docs:module1/topic`` or ``apidocs:module1/unit``.
    urls : UrlLayout
        URL prefixes for documentation topics and API units.

    Returns
    -------
    str | None
        ``<docs_base>/<path>`` for ``docs`` identifiers (``<docs_base>`` alone
        for the root), ``<api_base>/<path>`` for ``apidocs`` identifiers with
        a path, otherwise ``None``.
    """
    parsed = parse_item_id(item_id)
    if parsed is None:
        return None
    if parsed.namespace == DOCS_NAMESPACE:
        base = urls.docs_base
    elif parsed.namespace == API_NAMESPACE and parsed.path:
        base = urls.api_base
    else:
        return None
    if not parsed.path:
        return base or PATH_SEPARATOR
    return f"{base}{PATH_SEPARATOR}{parsed.path}"


def id_for_url(url: str, urls: UrlLayout) -> str | None:
    """Return the identifier served at ``url``, or ``None`` outside the docs routes.

    The API prefix is checked first because it usually nests under the
    documentation prefix.
    """
    clean = url.split("?", 1)[0].split("#", 1)[0].rstrip(PATH_SEPARATOR)
    if clean == urls.api_base:
        return None
    api_prefix = f"{urls.api_base}{PATH_SEPARATOR}"
    if clean.startswith(api_prefix):
        return _checked_id(API_NAMESPACE, clean[len(api_prefix) :])
    if clean == urls.docs_base:
        return format_item_id(DOCS_NAMESPACE, "")
    docs_prefix = f"{urls.docs_base}{PATH_SEPARATOR}"
    if clean.startswith(docs_prefix):
        return _checked_id(DOCS_NAMESPACE, clean[len(docs_prefix) :])
    return None


def _checked_id(namespace: str, path: str) -> str | None:
    candidate = format_item_id(namespace, path)
    return candidate if parse_item_id(candidate) else None


class UrlResolver:
    """Resolve identifiers to display URLs for one :class:`UrlLayout`."""

    def __init__(self, urls: UrlLayout) -> None:
        self.urls = urls

    def resolve_url(self, item_id: str) -> str | None:
        return url_for_id(item_id, self.urls)

    def __call__(self, item_id: str) -> str | None:
        return self.resolve_url(item_id)


class DocumentationPathMapper:
    """Map ``docs`` identifiers to the candidate files that may hold them."""

    namespace = DOCS_NAMESPACE

    def __init__(self, site: SiteConfig) -> None:
        self.site = site

    def map_id_to_path(self, namespace: str, path: str) -> list[Path] | None:
        """Return candidate files, one per extension, or ``None`` when unmapped.

        Parameters
        ----------
        namespace : str
            Identifier namespace; anything other than ``docs`` is unmapped.
        path : str
            Identifier path: ``""`` for the platform root, ``<module>`` for a
            module index, ``<topic>`` for a platform topic, or
            ``<module>/<topic>``.

        Returns
        -------
        list[Path] | None
            Candidate files in extension order, or ``None`` for other
            namespaces, unknown modules, and deeper paths.
        """
        if namespace != self.namespace:
            return None
        parsed = parse_item_id(format_item_id(namespace, path))
        if parsed is None:
            return None
        segments = parsed.segments
        match segments:
            case ():
                folder, basename = self.site.docs_root, INDEX_BASENAME
            case (name,) if name in self.site.modules:
                folder = self.site.module_docs_root(name)
                basename = INDEX_BASENAME
            case (topic,):
                folder, basename = self.site.docs_root, topic
            case (module, topic) if module in self.site.modules:
                folder, basename = self.site.module_docs_root(module), topic
            case _:
                return None
        if folder is None:
            return None
        return [folder / f"{basename}{ext}" for ext in self.site.extensions]


class ApiDocumentationPathMapper:
    """Map ``apidocs`` identifiers to service and library source files."""

    namespace = API_NAMESPACE

    def __init__(self, site: SiteConfig) -> None:
        self.site = site

    def map_id_to_path(self, namespace: str, path: str) -> list[Path] | None:
        """Return ``services`` candidates followed by ``lib`` candidates."""
        if namespace != self.namespace:
            return None
        parsed = parse_item_id(format_item_id(namespace, path))
        if parsed is None or len(parsed.segments) != 2:
            return None
        module, unit = parsed.segments
        manifest = self.site.modules.get(module)
        if manifest is None:
            return None
        layout = self.site.api
        return [
            manifest.path / folder / f"{unit}{ext}"
            for folder in (layout.services_dir, layout.lib_dir)
            for ext in layout.extensions
        ]


__all__ = [
    "ApiDocumentationPathMapper",
    "DocumentationPathMapper",
    "ItemId",
    "UrlResolver",
    "format_item_id",
    "id_for_url",
    "parse_item_id",
    "url_for_id",
]
