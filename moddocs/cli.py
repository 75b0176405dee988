"""Cyclopts CLI entrypoint for inspecting the module documentation index.

The ``moddocs`` console script defined here lists the content units the
enumerators discover, prints the ordered navigation index, shows the
navigation views computed for a page, and reports the candidate files behind
an identifier. It is meant for checking a platform's documentation tree
locally or in CI before the pages are served.

Examples
--------
List every documentation topic of module1:

>>> from moddocs.cli import app
>>> app(["list", "--filter", "^docs:module1"])  # doctest: +SKIP

Show the navigation views for an API page:

>>> app(["nav", "apidocs:module1/service1", "--pretty"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from cyclopts import App, Parameter

from .config import load_site_config
from .enumerator import ApiDocumentationEnumerator, DocumentationEnumerator
from .identifiers import (
    ApiDocumentationPathMapper,
    DocumentationPathMapper,
    parse_item_id,
)
from .navigation import DocumentationToc

DEFAULT_CONFIG = Path("config/docs.yaml")

app = App(name="moddocs", config=cyclopts.config.Env("MODDOCS_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to site config", env_var="MODDOCS_CONFIG")
]
VerboseOption = typ.Annotated[
    bool, Parameter(help="Log skipped folders and other diagnostics")
]


def _configure_logging(verbose: bool) -> None:
    """Send diagnostics to stderr, at DEBUG level when ``verbose`` is set."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command(name="list", help="List the identifiers discovered in the module tree.")
def list_items(
    *,
    api: typ.Annotated[
        bool, Parameter(help="Enumerate API units instead of documentation topics")
    ] = False,
    filter: typ.Annotated[  # noqa: A002 - mirrors the CLI flag
        str | None, Parameter(help="Regular expression searched in each identifier")
    ] = None,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Print every enumerated identifier, one per line, in walk order.

    Parameters
    ----------
    api : bool, optional
        Walk the ``lib`` and ``services`` folders instead of ``docs``.
    filter : str or None, optional
        Regular expression; identifiers it does not match are skipped.
    config : Path, optional
        Path to the ``docs.yaml`` configuration file (overridable via
        ``MODDOCS_CONFIG``).
    verbose : bool, optional
        Emit DEBUG diagnostics on stderr.

    Raises
    ------
    OSError
        If the filesystem fails while a folder is being walked.
    """
    _configure_logging(verbose)
    site = load_site_config(config)
    enumerator_type = ApiDocumentationEnumerator if api else DocumentationEnumerator
    for item in enumerator_type(site).items(filter):
        print(item.id)


@app.command(name="index", help="Print the ordered navigation index.")
def show_index(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Print one tab-separated line (identifier, title, URL) per index entry."""
    _configure_logging(verbose)
    site = load_site_config(config)
    for entry in DocumentationToc.for_site(site).entries():
        print(f"{entry.item_id}\t{entry.title}\t{entry.url or ''}")


@app.command(help="Print the navigation views of a page as JSON.")
def nav(
    current_id: typ.Annotated[str, Parameter(help="Identifier of the current page")],
    /,
    *,
    pretty: typ.Annotated[bool, Parameter(help="Indent the JSON output")] = False,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Print top-level and local TOCs, breadcrumbs, and neighbours of a page.

    Parameters
    ----------
    current_id : str
        Identifier of the page, such as ``apidocs:module1/service1``.
    pretty : bool, optional
        Indent the JSON document for reading.
    config : Path, optional
        Path to the ``docs.yaml`` configuration file.
    verbose : bool, optional
        Emit DEBUG diagnostics on stderr.

    Notes
    -----
    An identifier that is not indexed still prints the tables of contents;
    ``previous``, ``current`` and ``next`` are ``null`` and a warning is
    logged.
    """
    _configure_logging(verbose)
    site = load_site_config(config)
    views = DocumentationToc.for_site(site).build(current_id)
    payload = msgspec_json.encode(views)
    if pretty:
        payload = msgspec_json.format(payload, indent=2)
    print(payload.decode("utf-8"))


@app.command(help="Print the candidate files that may hold an identifier.")
def paths(
    item_id: typ.Annotated[str, Parameter(help="Identifier to map")],
    /,
    *,
    config: ConfigOption = DEFAULT_CONFIG,
) -> None:
    """Print candidate file paths for ``item_id``, in lookup order.

    Raises
    ------
    ValueError
        If ``item_id`` is not a ``<namespace>:<path>`` identifier any mapper
        understands.
    """
    site = load_site_config(config)
    parsed = parse_item_id(item_id)
    candidates = None
    if parsed is not None:
        for mapper in (DocumentationPathMapper(site), ApiDocumentationPathMapper(site)):
            candidates = mapper.map_id_to_path(parsed.namespace, parsed.path)
            if candidates:
                break
    if not candidates:
        msg = f"No files map to identifier '{item_id}'."
        raise ValueError(msg)
    for candidate in candidates:
        marker = "*" if candidate.is_file() else " "
        print(f"{marker} {candidate}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``moddocs`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
