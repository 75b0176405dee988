"""Tests for the ``moddocs`` CLI commands.

The command functions are called directly with a configuration written to a
temporary platform tree, and their stdout is captured with ``capsys``.
"""

from __future__ import annotations

import typing as typ

import msgspec.json as msgspec_json
import pytest

from moddocs import cli

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_list_documentation_topics(
    platform_config: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``list`` prints documentation identifiers in walk order."""
    cli.list_items(config=platform_config)
    assert capsys.readouterr().out.splitlines() == [
        "docs:",
        "docs:top1",
        "docs:module1",
        "docs:module1/topic1",
        "docs:module1/topic2",
        "docs:module2",
    ]


def test_list_api_units_with_filter(
    platform_config: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``list --api --filter`` restricts the API walk."""
    cli.list_items(api=True, filter="module1", config=platform_config)
    assert capsys.readouterr().out.splitlines() == ["apidocs:module1/service1"]


def test_index_prints_ordered_entries(
    platform_config: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``index`` prints identifier, title, and URL per entry."""
    cli.show_index(config=platform_config)
    lines = capsys.readouterr().out.splitlines()
    assert [line.split("\t")[0] for line in lines] == [
        "docs:",
        "docs:top1",
        "docs:module1",
        "docs:module1/topic1",
        "docs:module1/topic2",
        "apidocs:module1/service1",
        "docs:module2",
    ]
    assert lines[-2] == (
        "apidocs:module1/service1\tModule 1 service 1.\t/docs/api/module1/service1"
    )


def test_nav_prints_views_as_json(
    platform_config: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``nav`` encodes the navigation views as JSON."""
    cli.nav("apidocs:module1/service1", config=platform_config)
    payload = msgspec_json.decode(capsys.readouterr().out)
    assert payload["previous"]["item_id"] == "docs:module1/topic2"
    assert payload["current"]["title"] == "Module 1 service 1."
    assert payload["next"]["item_id"] == "docs:module2"
    assert [crumb["item_id"] for crumb in payload["breadcrumbs"]] == [
        "docs:module1",
        "apidocs:module1/service1",
    ]


def test_nav_for_unknown_page_prints_nulls(
    platform_config: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """An unknown page still prints TOCs with null neighbours."""
    cli.nav("docs:module9/ghost", pretty=True, config=platform_config)
    payload = msgspec_json.decode(capsys.readouterr().out)
    assert payload["current"] is None
    assert payload["previous"] is None
    assert payload["next"] is None
    assert len(payload["top_level_toc"]) == 4


def test_paths_marks_existing_candidates(
    platform_config: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``paths`` lists candidates and marks the ones that exist."""
    cli.paths("docs:module1", config=platform_config)
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("* ")
    assert lines[0].endswith("modules/module1/docs/index.json")
    assert lines[1].startswith("  ")


def test_paths_rejects_unmapped_identifier(platform_config: Path) -> None:
    """Identifiers no mapper understands raise ValueError."""
    with pytest.raises(ValueError, match="No files map"):
        cli.paths("blog:post", config=platform_config)
