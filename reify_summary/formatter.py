"""Compose the post-reify summary block from its fragments."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from .audit_report import render_audit
from .config import RenderConfig
from .diff_summary import DiffSummary, notable_additions, summarize_diff
from .funding import count_funding, funding_message
from .models import ResultBundle

_SECOND = 1000
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR


def format_elapsed(ms: float) -> str:
    """Short approximate duration: ``250ms``, ``3s``, ``2m``, ``1h``, ``1d``."""
    ms = max(0, int(ms))
    for unit, suffix in ((_DAY, "d"), (_HOUR, "h"), (_MINUTE, "m"), (_SECOND, "s")):
        if ms >= unit:
            return f"{int(ms / unit + 0.5)}{suffix}"
    return f"{ms}ms"


def _packages(count: int) -> str:
    return f"{count} package" if count == 1 else f"{count} packages"


def _join_clauses(clauses: List[str]) -> str:
    if len(clauses) == 1:
        return clauses[0]
    return ", ".join(clauses[:-1]) + ", and " + clauses[-1]


def packages_changed_message(summary: DiffSummary, audited: int, elapsed_ms: float) -> str:
    """One sentence describing what changed, e.g.
    ``added 2 packages, and removed 1 package in 3s``.
    """
    clauses: List[str] = []
    if summary.added:
        clauses.append(f"added {_packages(summary.added)}")
    if summary.removed:
        clauses.append(f"removed {_packages(summary.removed)}")
    if summary.changed:
        clauses.append(f"changed {_packages(summary.changed)}")

    if clauses:
        if audited:
            clauses.append(f"audited {_packages(audited)}")
        sentence = _join_clauses(clauses)
    else:
        sentence = "up to date"
        if audited:
            sentence += f", audited {_packages(audited)}"
    return f"{sentence} in {format_elapsed(elapsed_ms)}"


def audited_count(bundle: ResultBundle) -> int:
    """Number of packages the audit covered; 0 when no audit ran."""
    if bundle.audit_report is None or bundle.actual_tree is None:
        return 0
    inventory = bundle.actual_tree.inventory
    return inventory.size if inventory is not None else 0


def format_summary(bundle: ResultBundle, config: RenderConfig, elapsed_ms: float) -> str:
    """Build the full text block, or its JSON equivalent when ``config.json``."""
    summary = summarize_diff(bundle.diff)
    funding = count_funding(bundle.actual_tree, config.fund)
    audited = audited_count(bundle)

    if config.json:
        document: Dict[str, Any] = {
            "added": summary.added,
            "removed": summary.removed,
            "changed": summary.changed,
            "audited": audited,
            "funding": funding.count if funding is not None else 0,
        }
        report = bundle.audit_report
        if report is not None:
            document["audit"] = report.to_json() if bundle.command == "audit" else report.metadata
        return json.dumps(document, indent=2)

    sections: List[str] = []
    changed = [packages_changed_message(summary, audited, elapsed_ms)]
    changed.extend(f"+ {spec}" for spec in notable_additions(bundle.diff, bundle.actual_tree))
    sections.append("\n".join(changed))

    audit_text: Optional[str] = render_audit(bundle.audit_report, bundle.command, config.tool_name)
    if audit_text:
        sections.append(audit_text)

    nudge = funding_message(funding)
    if nudge:
        sections.append(nudge)
    return "\n\n".join(sections)
