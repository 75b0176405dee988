"""Unit tests for the in-process indexing pipeline.

:class:`ContentIndex` drains its enumerators, fetches each unit, projects
and sorts the entries. These tests use the in-memory module tree and a fake
fetch so only the pipeline's own behaviour is observed.
"""

from __future__ import annotations

import typing as typ

import pytest
from conftest import FILE, ROOT, MemoryFileSystem

from moddocs.content import ContentItem
from moddocs.enumerator import ApiDocumentationEnumerator, DocumentationEnumerator
from moddocs.index import ContentIndex, OrderedIndex

if typ.TYPE_CHECKING:
    from moddocs.config import SiteConfig


def _index(site: SiteConfig, memory_fs: MemoryFileSystem) -> ContentIndex:
    enumerators = [
        DocumentationEnumerator(site, filesystem=memory_fs),
        ApiDocumentationEnumerator(site, filesystem=memory_fs),
    ]
    return ContentIndex(enumerators, lambda item_id: ContentItem(id=item_id))


def test_index_sorts_projected_entries(
    site: SiteConfig, memory_fs: MemoryFileSystem
) -> None:
    """Entries are filtered, projected, and ordered by their keys."""
    ordered = _index(site, memory_fs).get_index(
        id_filter=r"/service|/library",
        project=lambda item: item.id,
        order_key=lambda entry: (entry.rsplit("/", 1)[-1], entry),
    )
    assert list(ordered) == [
        "apidocs:module1/library1",
        "apidocs:module1/library2",
        "apidocs:module1/service1",
        "apidocs:module2/service1",
        "apidocs:module1/service2",
        "apidocs:module2/service2",
    ]


def test_reduce_folds_in_order_and_finishes_once(
    site: SiteConfig, memory_fs: MemoryFileSystem
) -> None:
    """``reduce`` visits every entry in order and calls ``on_done`` exactly once."""
    ordered = _index(site, memory_fs).get_index(
        id_filter=r"^docs:", project=lambda item: item.id, order_key=lambda e: (e,)
    )
    finished: list[list[str]] = []
    ordered.reduce(lambda seed, entry: [*seed, entry], [], finished.append)
    assert finished == [
        [
            "docs:",
            "docs:module1",
            "docs:module1/some-topic",
            "docs:module2/some-topic",
            "docs:some-top-level-topic",
        ]
    ]
    assert len(ordered) == 5


def test_empty_index_still_finishes() -> None:
    """An empty index reports the untouched seed."""
    finished: list[int] = []
    OrderedIndex([]).reduce(lambda seed, entry: seed + 1, 0, finished.append)
    assert finished == [0]


def test_duplicate_identifiers_keep_first(site: SiteConfig) -> None:
    """A unit walked twice is indexed once."""
    tree = {
        "modules": {
            "module1": {"lib": {"dup.py": FILE}, "services": {"dup.py": FILE}}
        }
    }
    fs = MemoryFileSystem(tree)
    fetched: list[str] = []

    def fetch(item_id: str) -> ContentItem:
        fetched.append(item_id)
        return ContentItem(id=item_id)

    index = ContentIndex([ApiDocumentationEnumerator(site, filesystem=fs)], fetch)
    ordered = index.get_index(
        id_filter=None, project=lambda item: item.id, order_key=lambda e: (e,)
    )
    assert list(ordered) == ["apidocs:module1/dup"]
    assert fetched == ["apidocs:module1/dup"]


def test_enumeration_errors_propagate(
    site: SiteConfig, memory_fs: MemoryFileSystem
) -> None:
    """A failing walk aborts the index instead of yielding a partial one."""
    memory_fs.failing[ROOT / "modules" / "module2" / "services"] = OSError("gone")
    with pytest.raises(OSError, match="gone"):
        _index(site, memory_fs).get_index(
            id_filter=None, project=lambda item: item, order_key=lambda e: (e.id,)
        )
