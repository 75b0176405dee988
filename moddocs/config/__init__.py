"""Load and validate site configuration YAML for moddocs.

This subpackage parses the project's ``docs.yaml`` file, discovers installed
modules, merges explicit module manifests, resolves every path against the
configuration file, and produces typed dataclasses (:class:`SiteConfig`,
:class:`ModuleManifest`, etc.) that the enumerators, mappers, and navigation
builder consume. The primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from moddocs.config import load_site_config
>>> site = load_site_config(Path("config/docs.yaml"))  # doctest: +SKIP
>>> site.module_docs_root("module1")  # doctest: +SKIP
PosixPath('/srv/platform/modules/module1/docs')
"""

from .loader import load_site_config
from .models import ApiLayout, ModuleManifest, SiteConfig, SiteConfigError, UrlLayout

__all__ = [
    "ApiLayout",
    "ModuleManifest",
    "SiteConfig",
    "SiteConfigError",
    "UrlLayout",
    "load_site_config",
]
