"""Load a reify result bundle from a JSON document.

The document mirrors the shape a package manager hands its summary printer::

    {
      "command": "install",
      "actualTree": {
        "name": "root", "version": "1.0.0", "package": {...},
        "edgesOut": {"bar": "bar"},
        "inventory": [{"name": "bar", "version": "1.0.0", "package": {...}}]
      },
      "diff": {"children": [{"action": "ADD", "ideal": {"name": "bar"}}]},
      "auditReport": {"vulnerabilities": {...}, "metadata": {...}}
    }

Keys that are absent stay ``None`` on the model so that the renderer can
tell "not provided" from "empty".
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .models import AuditReport, Diff, DiffEntry, Edge, Inventory, PackageNode, ResultBundle

logger = logging.getLogger(__name__)


class BundleError(ValueError):
    """Raised when a bundle document cannot be read or is not an object."""


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _node_from_dict(data: Dict[str, Any]) -> PackageNode:
    package = data.get("package")
    package = package if isinstance(package, dict) else None
    manifest = package or {}
    return PackageNode(
        name=_text(data.get("name")) or _text(manifest.get("name")) or "",
        version=_text(data.get("version")) or _text(manifest.get("version")),
        package=package,
        location=_text(data.get("location")) or "",
    )


def _entry_node(data: Any) -> Optional[PackageNode]:
    return _node_from_dict(data) if isinstance(data, dict) else None


def _edge_target_name(name: str, spec: Any) -> str:
    if isinstance(spec, str):
        return spec
    if isinstance(spec, dict):
        target = spec.get("to")
        if isinstance(target, str):
            return target
        if isinstance(target, dict) and _text(target.get("name")):
            return target["name"]
    return name


def _load_tree(data: Any) -> Optional[PackageNode]:
    if not isinstance(data, dict):
        return None
    root = _node_from_dict(data)

    raw_inventory = data.get("inventory")
    if isinstance(raw_inventory, list):
        inventory = Inventory()
        for item in raw_inventory:
            if isinstance(item, dict):
                inventory.add(_node_from_dict(item))
        if root.name and not inventory.has(root.name):
            inventory.add(root)
        root.inventory = inventory

    raw_edges = data.get("edgesOut")
    if isinstance(raw_edges, dict):
        edges: Dict[str, Edge] = {}
        for name, spec in raw_edges.items():
            target_name = _edge_target_name(name, spec)
            target = root.inventory.get(target_name) if root.inventory is not None else None
            if target is None and isinstance(spec, dict) and isinstance(spec.get("to"), dict):
                target = _node_from_dict(spec["to"])
            if target is None:
                logger.warning("Edge '%s' points at '%s', which is not in the tree", name, target_name)
            edges[name] = Edge(name=name, to=target)
        root.edges_out = edges
    return root


def _load_diff(data: Any) -> Optional[Diff]:
    if not isinstance(data, dict):
        return None
    raw_children = data.get("children")
    if not isinstance(raw_children, list):
        raw_children = []
    children = []
    for item in raw_children:
        if not isinstance(item, dict):
            continue
        children.append(DiffEntry(
            action=item.get("action"),
            ideal=_entry_node(item.get("ideal")),
            actual=_entry_node(item.get("actual")),
        ))
    return Diff(children=children)


def _load_audit(data: Any) -> Optional[AuditReport]:
    if not isinstance(data, dict):
        return None
    vulnerabilities = data.get("vulnerabilities")
    metadata = data.get("metadata")
    return AuditReport(
        vulnerabilities=vulnerabilities if isinstance(vulnerabilities, dict) else {},
        metadata=metadata if isinstance(metadata, dict) else {},
    )


def bundle_from_dict(data: Dict[str, Any]) -> ResultBundle:
    """Build a ``ResultBundle`` from a decoded JSON object."""
    if not isinstance(data, dict):
        raise BundleError("Bundle document must be a JSON object")
    return ResultBundle(
        actual_tree=_load_tree(data.get("actualTree")),
        diff=_load_diff(data.get("diff")),
        audit_report=_load_audit(data.get("auditReport")),
        command=_text(data.get("command")) or "install",
    )


def load_bundle(path: Path) -> ResultBundle:
    """Read and decode a bundle file.

    Raises:
        BundleError: if the file cannot be read, is not JSON, or is not an
            object.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise BundleError(f"Cannot read bundle {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise BundleError(f"Bundle {path} is not valid JSON: {exc}") from exc
    bundle = bundle_from_dict(data)
    logger.debug("Loaded %s bundle from %s", bundle.command, path)
    return bundle
