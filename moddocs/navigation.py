"""Derive per-page navigation views from the ordered documentation index.

Every documentation page shows the same four views, all computed from one
ordered index of :class:`NavigationEntry` records and the identifier of the
page being rendered:

* the top-level table of contents: platform topics and module indexes;
* the local table of contents: the other entries of the current module;
* breadcrumbs: the module index (when there is one) followed by the page;
* previous/current/next neighbours in the merged top-level and local order.

The index itself is built by an :class:`~moddocs.index.IndexPipeline`;
this module supplies the projection (:func:`project_entry`) and ordering key
(:func:`navigation_order_key`) it needs, and :class:`DocumentationToc` wires
the pieces together.

Example
-------
>>> entries = [
...     NavigationEntry("docs:", None, None, "", "9000", "Root", "/docs"),
...     NavigationEntry(
...         "docs:module1", "module1", None, "index", "0", "Module 1", "/docs/module1",
...         is_module_index=True,
...     ),
...     NavigationEntry(
...         "docs:module1/topic", "module1", None, "topic", "9000", "Topic",
...         "/docs/module1/topic",
...     ),
... ]
>>> views = build_navigation_views(entries, "docs:module1/topic")
>>> [entry.item_id for entry in views.breadcrumbs]
['docs:module1', 'docs:module1/topic']
>>> views.previous.item_id
'docs:module1'
>>> views.next is None
True
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as typ

from ._constants import (
    API_NAMESPACE,
    DEFAULT_NUMBER,
    INDEX_BASENAME,
    MODULE_INDEX_NUMBER,
    PATH_SEPARATOR,
)
from .identifiers import UrlResolver, parse_item_id
from .index import ContentIndex

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .content import ContentItem
    from .filesystem import FileSystem
    from .index import IndexPipeline

logger = logging.getLogger(__name__)

NAVIGATION_ID_FILTER = re.compile(r"^(docs|apidocs):")


@dc.dataclass(slots=True, frozen=True)
class NavigationEntry:
    """Display-ready projection of one content unit.

    Attributes
    ----------
    item_id : str
        Identifier of the content unit.
    module : str | None
        Module the unit belongs to, or ``None`` for platform-level topics.
    section : str | None
        Optional grouping read from the item's metadata.
    name : str
        ``""`` for the platform root, ``"index"`` for a module index, and the
        topic or unit name otherwise.
    number : str
        Explicit ordering number, or the default for the entry's kind.
    title : str | None
        Display title.
    url : str | None
        Resolved display URL.
    is_module_index : bool
        ``True`` when the entry is a module's own index page.
    """

    item_id: str
    module: str | None
    section: str | None
    name: str
    number: str
    title: str | None
    url: str | None
    is_module_index: bool = False

    @property
    def namespace(self) -> str:
        """Return the identifier namespace (text before the colon)."""
        return self.item_id.split(":", 1)[0]


@dc.dataclass(slots=True, frozen=True)
class NavigationViews:
    """Navigation derived for one page; ``current`` is None when it is not indexed."""

    top_level_toc: tuple[NavigationEntry, ...]
    local_toc: tuple[NavigationEntry, ...]
    breadcrumbs: tuple[NavigationEntry, ...]
    previous: NavigationEntry | None
    current: NavigationEntry | None
    next: NavigationEntry | None


def project_entry(
    item: ContentItem,
    *,
    modules: typ.Collection[str],
    resolve_url: typ.Callable[[str], str | None],
) -> NavigationEntry:
    """Project fetched item metadata into a :class:`NavigationEntry`.

    Parameters
    ----------
    item : ContentItem
        Metadata of the content unit.
    modules : Collection[str]
        Names of the installed modules. A single-segment ``docs`` path names
        a module index only when it matches one of them.
    resolve_url : Callable[[str], str | None]
        Resolver used to fill :attr:`NavigationEntry.url`.

    Returns
    -------
    NavigationEntry
        The projected entry. ``number`` defaults to ``"0"`` for module
        indexes and ``"9000"`` for every other entry.
    """
    parsed = parse_item_id(item.id)
    segments = parsed.segments if parsed else ()
    is_api = parsed is not None and parsed.namespace == API_NAMESPACE
    module: str | None = None
    is_module_index = False
    name = PATH_SEPARATOR.join(segments)
    if len(segments) > 1 or (is_api and segments):
        module = segments[0]
        name = PATH_SEPARATOR.join(segments[1:])
    elif segments and segments[0] in modules:
        module = segments[0]
        is_module_index = True
        name = INDEX_BASENAME
    default_number = MODULE_INDEX_NUMBER if is_module_index else DEFAULT_NUMBER
    return NavigationEntry(
        item_id=item.id,
        module=module,
        section=item.section,
        name=name,
        number=item.number or default_number,
        title=item.title or item.id,
        url=resolve_url(item.id),
        is_module_index=is_module_index,
    )


def navigation_order_key(entry: NavigationEntry) -> tuple[object, ...]:
    """Return the ordering key of a navigation entry.

    The key is ``(module, page_rank, section, api_rank, number, title)``.

    Platform-level entries have no module and therefore rank before every
    module. Within a module the index comes first whatever its section, then
    narrative topics, then API units.
    """
    page_rank = None if entry.is_module_index else 1
    api_rank = 1 if entry.namespace == API_NAMESPACE else None
    return (
        entry.module,
        page_rank,
        entry.section,
        api_rank,
        entry.number,
        entry.title,
    )


def build_navigation_views(
    entries: typ.Iterable[NavigationEntry], current_id: str
) -> NavigationViews:
    """Compute the navigation views of ``current_id`` from an ordered index.

    Parameters
    ----------
    entries : Iterable[NavigationEntry]
        Index entries, already in navigation order. They are not modified.
    current_id : str
        Identifier of the page being rendered.

    Returns
    -------
    NavigationViews
        Top-level and local tables of contents, breadcrumbs, and neighbours.

    Notes
    -----
    An identifier missing from the index is logged and leaves ``previous``,
    ``current`` and ``next`` empty; the tables of contents are still built,
    using the module named by the identifier when it can be told apart.
    """
    ordered = tuple(entries)
    current = next((entry for entry in ordered if entry.item_id == current_id), None)
    if current is None:
        logger.warning("Page %s is not part of the documentation index", current_id)
        module = _module_of(current_id, ordered)
    else:
        module = current.module

    top_level: list[NavigationEntry] = []
    local: list[NavigationEntry] = []
    merged: list[NavigationEntry] = []
    module_index: NavigationEntry | None = None
    for entry in ordered:
        if entry.is_module_index or entry.module is None:
            top_level.append(entry)
            merged.append(entry)
            owns_page = entry.is_module_index and entry.module == module
            if owns_page and module_index is None:
                module_index = entry
        elif module is not None and entry.module == module:
            local.append(entry)
            merged.append(entry)

    previous = following = None
    if current is not None:
        position = next(
            index for index, entry in enumerate(merged) if entry.item_id == current_id
        )
        if position > 0:
            previous = merged[position - 1]
        if position + 1 < len(merged):
            following = merged[position + 1]

    return NavigationViews(
        top_level_toc=tuple(top_level),
        local_toc=tuple(local),
        breadcrumbs=_breadcrumbs(current, module_index),
        previous=previous,
        current=current,
        next=following,
    )


def _breadcrumbs(
    current: NavigationEntry | None, module_index: NavigationEntry | None
) -> tuple[NavigationEntry, ...]:
    if current is None:
        return (module_index,) if module_index is not None else ()
    if module_index is None or module_index.item_id == current.item_id:
        return (current,)
    return (module_index, current)


def _module_of(item_id: str, entries: typ.Sequence[NavigationEntry]) -> str | None:
    """Guess the module named by an identifier that is not in the index."""
    parsed = parse_item_id(item_id)
    if parsed is None or not parsed.segments:
        return None
    first = parsed.segments[0]
    if len(parsed.segments) > 1 or parsed.namespace == API_NAMESPACE:
        return first
    if any(entry.module == first for entry in entries):
        return first
    return None


class DocumentationToc:
    """Build navigation views for documentation and API pages.

    The indexing pipeline, module registry, and URL resolver are injected so
    the same builder serves a live site and in-memory fixtures.
    """

    def __init__(
        self,
        index: IndexPipeline,
        *,
        modules: typ.Collection[str],
        resolve_url: typ.Callable[[str], str | None],
    ) -> None:
        self.index = index
        self.modules = frozenset(modules)
        self.resolve_url = resolve_url

    @classmethod
    def for_site(
        cls, site: SiteConfig, *, filesystem: FileSystem | None = None
    ) -> DocumentationToc:
        """Return a builder reading the documentation tree described by ``site``."""
        return cls(
            ContentIndex.for_site(site, filesystem=filesystem),
            modules=list(site.modules),
            resolve_url=UrlResolver(site.urls),
        )

    def entries(self) -> list[NavigationEntry]:
        """Return every navigation entry in index order."""
        ordered = self.index.get_index(
            id_filter=NAVIGATION_ID_FILTER,
            project=self._project,
            order_key=navigation_order_key,
        )
        results: list[list[NavigationEntry]] = []
        ordered.reduce(_collect, [], results.append)
        return results[0]

    def build(self, current_id: str) -> NavigationViews:
        """Return the navigation views for the page ``current_id``."""
        return build_navigation_views(self.entries(), current_id)

    def _project(self, item: ContentItem) -> NavigationEntry:
        return project_entry(item, modules=self.modules, resolve_url=self.resolve_url)


def _collect(
    seed: list[NavigationEntry], entry: NavigationEntry
) -> list[NavigationEntry]:
    seed.append(entry)
    return seed


__all__ = [
    "NAVIGATION_ID_FILTER",
    "DocumentationToc",
    "NavigationEntry",
    "NavigationViews",
    "build_navigation_views",
    "navigation_order_key",
    "project_entry",
]
