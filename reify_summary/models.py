"""Core data models for reify results: package trees, diffs and audit reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

SEVERITY_ORDER = ("info", "low", "moderate", "high", "critical")


@dataclass
class Funding:
    """One funding channel declared by a package manifest."""
    url: str
    type: str = ""


def _normalize_funding(raw: Any) -> List[Funding]:
    if not raw:
        return []
    if isinstance(raw, str):
        return [Funding(url=raw)]
    if isinstance(raw, dict):
        url = raw.get("url") or ""
        return [Funding(url=url, type=raw.get("type") or "")] if url else []
    if isinstance(raw, (list, tuple)):
        result: List[Funding] = []
        for item in raw:
            result.extend(_normalize_funding(item))
        return result
    return []


@dataclass(eq=False)
class PackageNode:
    """A resolved package instance in a tree.

    ``package`` is the node's own manifest. It is ``None`` when the tree
    builder did not load one, which is distinct from an empty manifest.
    ``edges_out`` and ``inventory`` follow the same convention.
    """
    name: str = ""
    version: Optional[str] = None
    package: Optional[Dict[str, Any]] = None
    edges_out: Optional[Dict[str, "Edge"]] = None
    inventory: Optional["Inventory"] = None
    location: str = ""

    @property
    def funding(self) -> List[Funding]:
        """Funding channels from the manifest, normalized to a list."""
        if not self.package:
            return []
        return _normalize_funding(self.package.get("funding"))

    @property
    def spec(self) -> str:
        """``name@version`` or just ``name`` when the version is unknown."""
        return f"{self.name}@{self.version}" if self.version else self.name

    def __repr__(self) -> str:
        return f"PackageNode({self.spec!r})"


@dataclass(eq=False)
class Edge:
    """Dependency edge from a parent to a child node.

    Edges only relate a parent to a child; the tree's inventory owns nodes,
    so several edges may point at the same ``PackageNode``.
    """
    name: str
    to: Optional[PackageNode] = None


class Inventory:
    """All nodes reachable in a tree, keyed by package name."""

    def __init__(self, nodes: Optional[List[PackageNode]] = None):
        self._nodes: Dict[str, PackageNode] = {}
        for node in nodes or []:
            self.add(node)

    def add(self, node: PackageNode) -> None:
        self._nodes[node.name] = node

    def has(self, name: str) -> bool:
        return name in self._nodes

    def get(self, name: str) -> Optional[PackageNode]:
        return self._nodes.get(name)

    @property
    def size(self) -> int:
        return len(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __iter__(self) -> Iterator[PackageNode]:
        return iter(self._nodes.values())


class DiffAction(str, Enum):
    ADD = "ADD"
    REMOVE = "REMOVE"
    CHANGE = "CHANGE"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, value: Any) -> "DiffAction":
        """Map an action string to a variant; anything unknown is OTHER."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value in ("ADD", "REMOVE", "CHANGE"):
            return cls(value)
        return cls.OTHER


@dataclass
class DiffEntry:
    action: DiffAction = DiffAction.OTHER
    ideal: Optional[PackageNode] = None
    actual: Optional[PackageNode] = None

    def __post_init__(self):
        self.action = DiffAction.parse(self.action)


@dataclass
class Diff:
    children: List[DiffEntry] = field(default_factory=list)


@dataclass
class AuditReport:
    """Vulnerability scan result attached to the resulting tree."""
    vulnerabilities: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def _meta_counts(self) -> Dict[str, Any]:
        counts = self.metadata.get("vulnerabilities") if isinstance(self.metadata, dict) else None
        return counts if isinstance(counts, dict) else {}

    @property
    def total(self) -> int:
        total = self._meta_counts().get("total")
        if isinstance(total, int) and total >= 0:
            return total
        return len(self.vulnerabilities)

    @property
    def severity_counts(self) -> Dict[str, int]:
        """Non-zero counts per severity, ordered from ``info`` to ``critical``."""
        meta = self._meta_counts()
        if any(sev in meta for sev in SEVERITY_ORDER):
            raw = {sev: meta.get(sev) or 0 for sev in SEVERITY_ORDER}
        else:
            raw = {sev: 0 for sev in SEVERITY_ORDER}
            for vuln in self.vulnerabilities.values():
                severity = vuln.get("severity") if isinstance(vuln, dict) else None
                if severity in raw:
                    raw[severity] += 1
        return {sev: count for sev, count in raw.items() if isinstance(count, int) and count > 0}

    def to_json(self) -> Dict[str, Any]:
        return {"vulnerabilities": self.vulnerabilities, "metadata": self.metadata}


@dataclass
class ResultBundle:
    """Everything a finished reify hands to the summary printer."""
    actual_tree: Optional[PackageNode] = None
    diff: Optional[Diff] = None
    audit_report: Optional[AuditReport] = None
    command: str = "install"
