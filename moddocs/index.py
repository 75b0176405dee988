"""Fold enumerated content units into an ordered, reducible index.

:class:`ContentIndex` is the in-process indexing pipeline the navigation
builder talks to. Given an identifier filter, a projection, and an
ordering-key extractor, :meth:`ContentIndex.get_index` drains every
enumerator, fetches each matching unit, projects it into an entry, and sorts
the entries with :func:`moddocs.ordering.compare_order_keys`. The result is an
:class:`OrderedIndex` whose :meth:`~OrderedIndex.reduce` folds the entries in
order and reports completion exactly once.

Typical usage:

>>> from pathlib import Path
>>> from moddocs.config import SiteConfig
>>> site = SiteConfig(root=Path("/nowhere"))
>>> index = ContentIndex.for_site(site)
>>> ordered = index.get_index(
...     id_filter=r"^docs:", project=lambda item: item, order_key=lambda e: (e.id,)
... )
>>> ordered.reduce(lambda seed, entry: seed + 1, 0, print)
0
"""

from __future__ import annotations

import logging
import typing as typ

from .content import ContentItem, ContentReader
from .enumerator import (
    ApiDocumentationEnumerator,
    DocumentationEnumerator,
    IdFilter,
    TreeEnumerator,
    compile_id_filter,
)
from .ordering import OrderKey, sort_by_order_key

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .filesystem import FileSystem

logger = logging.getLogger(__name__)

EntryT = typ.TypeVar("EntryT")
SeedT = typ.TypeVar("SeedT")


class IndexPipeline(typ.Protocol):
    """Contract of the indexing collaborator used by the navigation builder."""

    def get_index(
        self,
        *,
        id_filter: IdFilter,
        project: typ.Callable[[ContentItem], EntryT],
        order_key: typ.Callable[[EntryT], OrderKey],
    ) -> OrderedIndex[EntryT]:
        """Return the projected entries of every matching item, in order."""
        ...


class OrderedIndex(typ.Generic[EntryT]):
    """Immutable, already-sorted sequence of index entries."""

    def __init__(self, entries: typ.Iterable[EntryT]) -> None:
        self._entries = tuple(entries)

    def reduce(
        self,
        combine: typ.Callable[[SeedT, EntryT], SeedT],
        seed: SeedT,
        on_done: typ.Callable[[SeedT], object],
    ) -> None:
        """Fold ``combine`` over the entries in order, then call ``on_done`` once."""
        for entry in self._entries:
            seed = combine(seed, entry)
        on_done(seed)

    def __iter__(self) -> typ.Iterator[EntryT]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class ContentIndex:
    """Build ordered indexes from enumerators and a content reader."""

    def __init__(
        self,
        enumerators: typ.Sequence[TreeEnumerator],
        fetch: typ.Callable[[str], ContentItem],
    ) -> None:
        self.enumerators = tuple(enumerators)
        self.fetch = fetch

    @classmethod
    def for_site(
        cls, site: SiteConfig, *, filesystem: FileSystem | None = None
    ) -> ContentIndex:
        """Return an index over the documentation and API units of ``site``."""
        enumerators = (
            DocumentationEnumerator(site, filesystem=filesystem),
            ApiDocumentationEnumerator(site, filesystem=filesystem),
        )
        return cls(enumerators, ContentReader(site).fetch)

    def get_index(
        self,
        *,
        id_filter: IdFilter,
        project: typ.Callable[[ContentItem], EntryT],
        order_key: typ.Callable[[EntryT], OrderKey],
    ) -> OrderedIndex[EntryT]:
        """Return the projected, sorted entries of every item matching ``id_filter``.

        Parameters
        ----------
        id_filter : re.Pattern or str or None
            Pattern searched in each identifier; ``None`` keeps every item.
        project : Callable[[ContentItem], EntryT]
            Turns fetched item metadata into an index entry.
        order_key : Callable[[EntryT], Sequence]
            Extracts the ordering key compared by
            :func:`~moddocs.ordering.compare_order_keys`.

        Returns
        -------
        OrderedIndex
            Entries sorted by their ordering keys; equal keys keep walk order.

        Raises
        ------
        OSError
            Propagated from an enumerator whose walk failed.

        Notes
        -----
        Identifiers are unique within one index: when two files produce the
        same identifier (for example a unit present in both ``lib`` and
        ``services``), the first one walked is kept.
        """
        pattern = compile_id_filter(id_filter)
        seen: set[str] = set()
        entries: list[EntryT] = []
        for enumerator in self.enumerators:
            for stub in enumerator.items(pattern):
                if stub.id in seen:
                    logger.debug("Dropping duplicate identifier %s", stub.id)
                    continue
                seen.add(stub.id)
                entries.append(project(self.fetch(stub.id)))
        return OrderedIndex(sort_by_order_key(entries, order_key))


__all__ = ["ContentIndex", "IndexPipeline", "OrderedIndex"]
