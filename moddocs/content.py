r"""Read the metadata the navigation index needs from content files.

The navigation builder only needs a handful of fields per content unit: a
title, an optional ordering number, and an optional section. This module
locates the file behind an identifier through the path mappers and reads
those fields:

* ``.json`` files hold one JSON object (decoded with :mod:`msgspec`).
* ``.yaml`` files hold one YAML mapping.
* ``.yaml.md`` files start with a YAML mapping, followed by a line holding
  only ``---`` and the Markdown body.
* API units use the first line of a Python module docstring when there is
  one, and their identifier path otherwise.

Example
-------
>>> from pathlib import Path
>>> from moddocs.config import SiteConfig
>>> reader = ContentReader(SiteConfig(root=Path("/nowhere")))
>>> reader.fetch("docs:missing").title is None
True
"""

from __future__ import annotations

import ast
import dataclasses as dc
import logging
import typing as typ

import msgspec
import msgspec.json as msgspec_json
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._constants import API_NAMESPACE
from .identifiers import (
    ApiDocumentationPathMapper,
    DocumentationPathMapper,
    parse_item_id,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import SiteConfig

logger = logging.getLogger(__name__)

FRONT_MATTER_SEPARATOR = "---"


@dc.dataclass(slots=True, frozen=True)
class ContentItem:
    """Metadata of one content unit, as consumed by the navigation projection."""

    id: str
    title: str | None = None
    number: str | None = None
    section: str | None = None
    path: Path | None = None


class ContentReader:
    """Fetch :class:`ContentItem` metadata for documentation and API identifiers."""

    def __init__(self, site: SiteConfig) -> None:
        self.site = site
        self.mappers = (DocumentationPathMapper(site), ApiDocumentationPathMapper(site))
        self._yaml = YAML(typ="safe")
        self._yaml.version = (1, 2)

    def fetch(self, item_id: str) -> ContentItem:
        """Return the metadata stored in the first existing file for ``item_id``.

        Identifiers that map to no file produce an item without a title or
        number. Files whose metadata cannot be parsed are logged and treated
        the same way; :class:`OSError` while reading propagates.
        """
        parsed = parse_item_id(item_id)
        if parsed is None:
            return ContentItem(id=item_id)
        for mapper in self.mappers:
            candidates = mapper.map_id_to_path(parsed.namespace, parsed.path)
            if not candidates:
                continue
            is_api = mapper.namespace == API_NAMESPACE
            for candidate in candidates:
                if candidate.is_file():
                    return self._read(item_id, candidate, is_api=is_api)
        logger.debug("No content file found for %s", item_id)
        if parsed.namespace == API_NAMESPACE:
            return ContentItem(id=item_id, title=parsed.path)
        return ContentItem(id=item_id)

    def _read(self, item_id: str, path: Path, *, is_api: bool) -> ContentItem:
        text = path.read_text(encoding="utf-8")
        if is_api:
            return ContentItem(
                id=item_id,
                title=_docstring_title(text) or item_id.split(":", 1)[1],
                path=path,
            )
        try:
            meta = self._parse_metadata(path.name, text)
        except (msgspec.DecodeError, YAMLError) as exc:
            logger.warning("Ignoring unreadable metadata in %s: %s", path, exc)
            meta = {}
        return ContentItem(
            id=item_id,
            title=_optional_text(meta.get("title")),
            number=_optional_text(meta.get("number")),
            section=_optional_text(meta.get("section")),
            path=path,
        )

    def _parse_metadata(self, filename: str, text: str) -> dict[str, typ.Any]:
        if filename.endswith(".json"):
            data = msgspec_json.decode(text)
        elif filename.endswith(".md"):
            header, _, _ = _split_front_matter(text)
            data = self._yaml.load(header)
        else:
            data = self._yaml.load(text)
        return dict(data) if isinstance(data, dict) else {}


def _split_front_matter(text: str) -> tuple[str, str, str]:
    """Split ``text`` into YAML header, separator and Markdown body."""
    lines = text.splitlines(keepends=True)
    if lines and lines[0].strip() == FRONT_MATTER_SEPARATOR:
        lines = lines[1:]
    for index, line in enumerate(lines):
        if line.strip() == FRONT_MATTER_SEPARATOR:
            header = "".join(lines[:index])
            return header, FRONT_MATTER_SEPARATOR, "".join(lines[index + 1 :])
    return "".join(lines), "", ""


def _docstring_title(source: str) -> str | None:
    """Return the first docstring line of a Python module, if any."""
    try:
        docstring = ast.get_docstring(ast.parse(source))
    except (SyntaxError, ValueError):
        return None
    if not docstring:
        return None
    first = docstring.strip().splitlines()[0].strip()
    return first or None


def _optional_text(value: object | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


__all__ = ["ContentItem", "ContentReader"]
