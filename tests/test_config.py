"""Unit tests for loading ``docs.yaml`` site configuration.

The loader resolves paths relative to the configuration file, discovers
modules from ``modules_dir``, merges explicit manifests, and normalizes
extension lists. Invalid structures raise :class:`SiteConfigError`.
"""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from moddocs.config import SiteConfigError, load_site_config


def _write(path: Path, text: str) -> Path:
    path.write_text(dedent(text).strip() + "\n", encoding="utf-8")
    return path


def test_defaults_apply_to_minimal_config(tmp_path: Path) -> None:
    """An empty mapping yields the default layout rooted next to the file."""
    config = load_site_config(_write(tmp_path / "docs.yaml", "{}"))
    assert config.root == tmp_path.resolve()
    assert config.docs_root == tmp_path.resolve() / "docs"
    assert config.extensions == [".json", ".yaml", ".yaml.md"]
    assert config.modules == {}
    assert config.api.lib_dir == "lib"
    assert config.api.services_dir == "services"
    assert config.urls.api_base == "/docs/api"


def test_discovers_and_overrides_modules(tmp_path: Path) -> None:
    """Discovered modules are ordered by name; explicit entries replace them."""
    platform = tmp_path / "platform"
    for name in ("zeta", "alpha", ".cache"):
        (platform / "modules" / name).mkdir(parents=True)
    (platform / "vendor" / "zeta").mkdir(parents=True)
    (platform / "modules" / "README.md").write_text("x", encoding="utf-8")
    config_path = _write(
        tmp_path / "docs.yaml",
        """
        root: platform
        modules_dir: modules
        modules:
          zeta:
            path: platform/vendor/zeta
          extra: platform/extra
        """,
    )
    config = load_site_config(config_path)
    assert list(config.modules) == ["alpha", "zeta", "extra"]
    assert config.modules["zeta"].path == (platform / "vendor" / "zeta").resolve()
    assert config.modules["extra"].path == (platform / "extra").resolve()
    expected_docs = (platform / "modules" / "alpha").resolve() / "docs"
    assert config.module_docs_root("alpha") == expected_docs
    assert config.module_docs_root("missing") is None


def test_normalizes_extensions_and_urls(tmp_path: Path) -> None:
    """Extensions gain a leading dot and lose duplicates; URL prefixes lose slashes."""
    config = load_site_config(
        _write(
            tmp_path / "docs.yaml",
            """
            extensions: [md, ".md", yaml.md]
            api:
              extensions: py js
            urls:
              docs_base: /help/
            """,
        )
    )
    assert config.extensions == [".md", ".yaml.md"]
    assert config.api.extensions == [".py", ".js"]
    assert config.urls.docs_base == "/help"
    assert config.urls.api_base == "/docs/api"


def test_missing_file_raises(tmp_path: Path) -> None:
    """A missing configuration file is reported with its path."""
    with pytest.raises(FileNotFoundError, match="not found"):
        load_site_config(tmp_path / "absent.yaml")


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("- a\n- b", "must be a mapping"),
        ("modules: [a, b]", "mapping of module names"),
        ("modules:\n  broken: {}", "missing 'path'"),
        ("modules:\n  broken: 3", "mapping or a path string"),
        ("extensions: []", "at least one file extension"),
        ("api: lib", "'api' must be a mapping"),
    ],
)
def test_invalid_structures_raise(tmp_path: Path, text: str, message: str) -> None:
    """Structural problems raise SiteConfigError with a helpful message."""
    with pytest.raises(SiteConfigError, match=message):
        load_site_config(_write(tmp_path / "docs.yaml", text))
