"""Pytest configuration and fixtures for reify-summary tests."""

import json
from pathlib import Path
from typing import Callable
from unittest.mock import MagicMock

import pytest

from reify_summary.config import RenderConfig
from reify_summary.models import Diff, DiffEntry, Edge, Inventory, PackageNode

STARTED = 1_000.0
FUNDING = {"type": "foo", "url": "http://example.com"}


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch):
    """Point config at a temp dir and clear env overrides for every test."""
    base_dir = tmp_path / "home"
    monkeypatch.setattr("reify_summary.config.BASE_DIR", base_dir)
    monkeypatch.setattr("reify_summary.config.CONFIG_FILE", base_dir / "config.toml")
    for name in ("REIFY_SUMMARY_JSON", "REIFY_SUMMARY_FUND", "REIFY_SUMMARY_LOGLEVEL"):
        monkeypatch.delenv(name, raising=False)
    return base_dir


@pytest.fixture
def fixed_config() -> RenderConfig:
    """Render config with a pinned start time."""
    return RenderConfig(started=STARTED)


@pytest.fixture
def sink() -> MagicMock:
    return MagicMock()


@pytest.fixture
def make_node() -> Callable[..., PackageNode]:
    """Factory for manifest-backed nodes, optionally with funding."""

    def _make(name: str, version: str = "1.0.0", funded: bool = False) -> PackageNode:
        package = {"name": name, "version": version}
        if funded:
            package["funding"] = dict(FUNDING)
        return PackageNode(name=name, version=version, package=package)

    return _make


@pytest.fixture
def funded_tree(make_node) -> PackageNode:
    """Root 'foo' with three direct, funded dependencies."""
    edges = {
        name: Edge(name=name, to=make_node(name, funded=True))
        for name in ("bar", "lorem", "ipsum")
    }
    root = make_node("foo")
    root.edges_out = edges
    return root


@pytest.fixture
def empty_diff() -> Diff:
    return Diff(children=[])


@pytest.fixture
def mixed_diff() -> Diff:
    """One junk entry, two additions, one removal and one change."""
    return Diff(children=[
        DiffEntry(action="some random unexpected junk"),
        DiffEntry(action="ADD", ideal=PackageNode(name="baz", version="2.0.0")),
        DiffEntry(action="ADD", ideal=PackageNode(name="qux")),
        DiffEntry(action="REMOVE", actual=PackageNode(name="old")),
        DiffEntry(action="CHANGE", actual=PackageNode(name="lib", version="1.0.0"),
                  ideal=PackageNode(name="lib", version="1.1.0")),
    ])


@pytest.fixture
def inventory_tree() -> PackageNode:
    """Root whose inventory holds 'baz' but not 'qux'."""
    root = PackageNode(name="foo")
    root.inventory = Inventory([root, PackageNode(name="baz", version="2.0.0")])
    return root


@pytest.fixture
def bundle_document() -> dict:
    """JSON bundle with a funded dependency, a diamond, and an audit."""
    funded = {"name": "bar", "version": "1.0.0", "funding": FUNDING}
    return {
        "command": "install",
        "actualTree": {
            "name": "foo",
            "version": "1.0.0",
            "package": {"name": "foo", "version": "1.0.0"},
            "edgesOut": {"bar": "bar", "shared": "shared", "also-shared": {"to": "shared"}},
            "inventory": [
                {"name": "bar", "version": "1.0.0", "package": funded},
                {"name": "shared", "version": "3.0.0", "package": {"name": "shared"}},
            ],
        },
        "diff": {"children": [
            {"action": "ADD", "ideal": {"name": "bar", "version": "1.0.0"}},
            {"action": "REMOVE", "actual": {"name": "gone"}},
        ]},
        "auditReport": {
            "vulnerabilities": {},
            "metadata": {"vulnerabilities": {"total": 0}},
        },
    }


@pytest.fixture
def bundle_file(tmp_path: Path, bundle_document: dict) -> Path:
    path = tmp_path / "bundle.json"
    path.write_text(json.dumps(bundle_document), encoding="utf-8")
    return path
