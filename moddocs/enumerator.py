"""Discover documentation topics and API units across the module tree.

Two enumerators share one tree-walking algorithm:

* :class:`DocumentationEnumerator` walks the platform's ``docs`` folder and
  then each module's ``docs`` folder, turning every file with a recognized
  extension into a ``docs:`` identifier. ``index.<ext>`` stands for the
  folder's owner: ``docs:`` for the platform, ``docs:<module>`` for a module.
* :class:`ApiDocumentationEnumerator` walks each module's ``lib`` and
  ``services`` folders, turning every file with a recognized extension
  (``.py`` by default) into ``apidocs:<module>/<name>``.

Walks are flat: sub-folders are skipped, so identifiers never grow beyond
``<module>/<topic>``. A folder that does not exist contributes nothing.

Enumerators can be consumed as lazy generators through :meth:`items` or
through the continuation protocol returned by :meth:`get_item_enumerator`,
where every call advances the walk by one item:

>>> from pathlib import Path
>>> from moddocs.config import SiteConfig
>>> enumerator = DocumentationEnumerator(SiteConfig(root=Path("/nowhere")))
>>> iterate = enumerator.get_item_enumerator()
>>> iterate(lambda error, item: print(error, item))
None None
"""

from __future__ import annotations

import collections
import dataclasses as dc
import logging
import re
import typing as typ

from ._constants import API_NAMESPACE, DOCS_NAMESPACE, INDEX_BASENAME, PATH_SEPARATOR
from .filesystem import FileSystem, LocalFileSystem
from .identifiers import format_item_id

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import SiteConfig

logger = logging.getLogger(__name__)

IdFilter = typ.Union[re.Pattern[str], str, None]


@dc.dataclass(slots=True, frozen=True)
class ItemStub:
    """Minimal record of a discovered content unit, later fetched in full."""

    id: str


Continuation = typ.Callable[[typ.Optional[BaseException], typ.Optional[ItemStub]], None]
Iterate = typ.Callable[[Continuation], None]


@dc.dataclass(slots=True, frozen=True)
class WalkRoot:
    """A folder to scan and the module its files belong to (None for the platform)."""

    path: Path
    module: str | None


def compile_id_filter(id_filter: IdFilter) -> re.Pattern[str] | None:
    """Return ``id_filter`` as a compiled pattern, or None when unset."""
    if id_filter is None or isinstance(id_filter, re.Pattern):
        return id_filter
    return re.compile(id_filter)


class ItemCursor:
    """Continuation-passing cursor over a lazy item sequence.

    Each call pulls exactly one item and hands ``(None, item)`` to the
    callback; exhaustion answers ``(None, None)``. An :class:`OSError` raised
    by the walk is handed over as ``(error, None)`` and ends the walk.
    Callbacks may request the next item from inside themselves; such nested
    requests are queued and served once the current callback returns, so long
    walks do not grow the call stack. When a callback raises, the requests
    it queued are dropped and the exception propagates to the caller.
    """

    def __init__(self, items: typ.Iterator[ItemStub]) -> None:
        self._items = items
        self._pending: collections.deque[Continuation] = collections.deque()
        self._running = False

    def __call__(self, callback: Continuation) -> None:
        self._pending.append(callback)
        if self._running:
            return
        self._running = True
        try:
            while self._pending:
                self._step(self._pending.popleft())
        except BaseException:
            # Requests queued by a failing callback die with it.
            self._pending.clear()
            raise
        finally:
            self._running = False

    def _step(self, callback: Continuation) -> None:
        try:
            item = next(self._items, None)
        except OSError as exc:
            callback(exc, None)
            return
        callback(None, item)


class TreeEnumerator:
    """Walk a sequence of flat folders and synthesize identifiers for their files."""

    namespace: typ.ClassVar[str]

    def __init__(
        self, site: SiteConfig, *, filesystem: FileSystem | None = None
    ) -> None:
        self.site = site
        self.filesystem = filesystem or LocalFileSystem()
        # Longest first so ".yaml.md" wins over ".md".
        self._extensions = sorted(self.extensions(), key=len, reverse=True)

    def extensions(self) -> typ.Sequence[str]:
        """Return the file extensions this walk recognizes."""
        raise NotImplementedError

    def roots(self) -> typ.Iterator[WalkRoot]:
        """Yield the folders to scan, in enumeration order."""
        raise NotImplementedError

    def relative_path(self, root: WalkRoot, name: str) -> str | None:
        """Return the identifier path for file ``name`` or None to skip it."""
        raise NotImplementedError

    def items(self, id_filter: IdFilter = None) -> typ.Iterator[ItemStub]:
        """Lazily yield one stub per matching file.

        Parameters
        ----------
        id_filter : re.Pattern or str, optional
            Pattern searched in each full identifier; items that do not match
            are skipped.

        Yields
        ------
        ItemStub
            One stub per matching file, in walk order.

        Raises
        ------
        OSError
            Propagated unchanged from the filesystem; the walk ends there.
        """
        pattern = compile_id_filter(id_filter)
        fs = self.filesystem
        for root in self.roots():
            if not fs.exists(root.path) or not fs.is_directory(root.path):
                logger.debug("Skipping missing folder %s", root.path)
                continue
            for name in fs.list_entries(root.path):
                if name.startswith(".") or fs.is_directory(root.path / name):
                    continue
                path = self.relative_path(root, name)
                if path is None:
                    continue
                item_id = format_item_id(self.namespace, path)
                if pattern is not None and not pattern.search(item_id):
                    continue
                yield ItemStub(id=item_id)

    def _strip_extension(self, name: str) -> str | None:
        for ext in self._extensions:
            if name.endswith(ext):
                return name[: -len(ext)]
        return None

    def get_item_enumerator(self, id_filter: IdFilter = None) -> Iterate:
        """Return an ``iterate(callback)`` function driving a fresh walk."""
        return ItemCursor(self.items(id_filter))

    def __iter__(self) -> typ.Iterator[ItemStub]:
        return self.items()


class DocumentationEnumerator(TreeEnumerator):
    """Enumerate narrative topics from the platform and module ``docs`` folders."""

    namespace = DOCS_NAMESPACE

    def extensions(self) -> typ.Sequence[str]:
        return self.site.extensions

    def roots(self) -> typ.Iterator[WalkRoot]:
        yield WalkRoot(path=self.site.docs_root, module=None)
        for name, manifest in self.site.modules.items():
            yield WalkRoot(path=manifest.path / self.site.docs_dir, module=name)

    def relative_path(self, root: WalkRoot, name: str) -> str | None:
        basename = self._strip_extension(name)
        if not basename:
            return None
        if basename == INDEX_BASENAME:
            return root.module or ""
        if root.module:
            return f"{root.module}{PATH_SEPARATOR}{basename}"
        return basename


class ApiDocumentationEnumerator(TreeEnumerator):
    """Enumerate API units from each module's ``lib`` and ``services`` folders.

    Both folders feed one identifier space per module; a name present in both
    is emitted twice.
    """

    namespace = API_NAMESPACE

    def extensions(self) -> typ.Sequence[str]:
        return self.site.api.extensions

    def roots(self) -> typ.Iterator[WalkRoot]:
        layout = self.site.api
        for name, manifest in self.site.modules.items():
            yield WalkRoot(path=manifest.path / layout.lib_dir, module=name)
            yield WalkRoot(path=manifest.path / layout.services_dir, module=name)

    def relative_path(self, root: WalkRoot, name: str) -> str | None:
        stem = self._strip_extension(name)
        if not stem or root.module is None:
            return None
        return f"{root.module}{PATH_SEPARATOR}{stem}"


__all__ = [
    "ApiDocumentationEnumerator",
    "Continuation",
    "DocumentationEnumerator",
    "IdFilter",
    "ItemCursor",
    "ItemStub",
    "Iterate",
    "TreeEnumerator",
    "WalkRoot",
    "compile_id_filter",
]
