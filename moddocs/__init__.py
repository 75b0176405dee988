"""Index and navigate documentation spread across a platform's modules.

This package discovers documentation topics and API reference units in a
platform root and its installed modules, assigns each a ``<namespace>:<path>``
identifier, folds them into one ordered index, and derives per-page
navigation views (tables of contents, breadcrumbs, previous/next).

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from moddocs import main
>>> main()  # doctest: +SKIP
>>> from moddocs import app
>>> app(["nav", "docs:"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
