"""Shared fixtures for the moddocs test suite.

The enumerator tests walk an in-memory module tree rather than the real
filesystem so each scenario controls exactly which folders exist and which
ones fail. :class:`MemoryFileSystem` implements the
:class:`~moddocs.filesystem.FileSystem` port over a nested mapping where
folders are dictionaries and files are ``FILE`` markers.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from moddocs.config import ModuleManifest, SiteConfig

FILE = "file"
ROOT = Path("/platform")

Tree = dict[str, typ.Any]


class MemoryFileSystem:
    """In-memory implementation of the filesystem inspection port."""

    def __init__(self, tree: Tree, *, root: Path = ROOT) -> None:
        self.tree = tree
        self.root = root
        self.failing: dict[Path, OSError] = {}
        self.listed: list[Path] = []

    def _lookup(self, path: Path) -> typ.Any:
        try:
            parts = path.relative_to(self.root).parts
        except ValueError:
            return None
        node: typ.Any = self.tree
        for part in parts:
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def exists(self, path: Path) -> bool:
        return self._lookup(path) is not None

    def list_entries(self, path: Path) -> list[str]:
        self.listed.append(path)
        if path in self.failing:
            raise self.failing[path]
        node = self._lookup(path)
        if not isinstance(node, dict):
            raise NotADirectoryError(str(path))
        return list(node)

    def is_directory(self, path: Path) -> bool:
        return isinstance(self._lookup(path), dict)


def module_tree() -> Tree:
    """Return the module tree shared by the enumerator tests."""
    return {
        "docs": {"index.json": FILE, "some-top-level-topic.yaml.md": FILE},
        "modules": {
            "module1": {
                "docs": {"index.json": FILE, "some-topic.yaml.md": FILE},
                "lib": {"library1.py": FILE, "library2.py": FILE},
                "services": {"service1.py": FILE, "service2.py": FILE},
            },
            "module2": {
                "docs": {"some-topic.yaml.md": FILE},
                "services": {"service1.py": FILE, "service2.py": FILE},
            },
        },
    }


def build_site(*module_names: str, root: Path = ROOT) -> SiteConfig:
    """Return a SiteConfig registering ``module_names`` under ``root/modules``."""
    modules = {
        name: ModuleManifest(name=name, path=root / "modules" / name)
        for name in module_names
    }
    return SiteConfig(root=root, modules=modules, extensions=[".json", ".yaml.md"])


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    """Return an in-memory filesystem holding :func:`module_tree`."""
    return MemoryFileSystem(module_tree())


@pytest.fixture
def site() -> SiteConfig:
    """Return a site configuration registering ``module1`` and ``module2``."""
    return build_site("module1", "module2")


def write_platform(base: Path, files: typ.Mapping[str, str]) -> Path:
    """Write ``files`` (relative path to content) under ``base`` and a config.

    Returns the path of a ``docs.yaml`` that roots the site in ``base`` and
    discovers modules from ``base/modules``.
    """
    for relative, content in files.items():
        target = base / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    (base / "modules").mkdir(exist_ok=True)
    config_path = base / "docs.yaml"
    config_path.write_text(
        "root: .\nmodules_dir: modules\nextensions: ['.json', '.yaml.md']\n",
        encoding="utf-8",
    )
    return config_path


SAMPLE_PLATFORM = {
    "docs/index.json": '{"title": "Root"}',
    "docs/top1.yaml.md": "title: Top 1\n---\nFirst platform topic.\n",
    "modules/module1/docs/index.json": '{"title": "Module 1 index"}',
    "modules/module1/docs/topic1.yaml.md": "title: Module 1 topic 1\n---\nBody.\n",
    "modules/module1/docs/topic2.yaml.md": "title: Module 1 topic 2\n---\nBody.\n",
    "modules/module1/services/service1.py": '"""Module 1 service 1."""\n',
    "modules/module2/docs/index.json": '{"title": "Module 2 index"}',
}


@pytest.fixture
def platform_config(tmp_path: Path) -> Path:
    """Return the config path of :data:`SAMPLE_PLATFORM` written to disk."""
    return write_platform(tmp_path, SAMPLE_PLATFORM)
