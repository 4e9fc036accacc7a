"""Render vulnerability reports as summary text."""

from __future__ import annotations

from typing import List, Optional

from .models import AuditReport


def vulnerability_count(total: int) -> str:
    noun = "vulnerability" if total == 1 else "vulnerabilities"
    return f"{total} {noun}"


def severity_breakdown(report: AuditReport) -> str:
    """``"2 low, 1 high"`` for the report's non-zero severities."""
    counts = report.severity_counts
    return ", ".join(f"{count} {severity}" for severity, count in counts.items())


def _count_line(report: AuditReport) -> str:
    total = report.total
    if total == 0:
        return "found 0 vulnerabilities"
    breakdown = severity_breakdown(report)
    line = vulnerability_count(total)
    return f"{line} ({breakdown})" if breakdown else line


def _detail_lines(report: AuditReport, tool_name: str) -> List[str]:
    lines: List[str] = []
    for name in sorted(report.vulnerabilities):
        vuln = report.vulnerabilities[name]
        if not isinstance(vuln, dict):
            vuln = {}
        vuln_range = vuln.get("range") or ""
        lines.append(f"{name}  {vuln_range}".rstrip())
        lines.append(f"Severity: {vuln.get('severity') or 'unknown'}")
        if vuln.get("fixAvailable"):
            lines.append(f"fix available via `{tool_name} audit fix`")
        lines.append("")
    return lines


def render_audit(
    report: Optional[AuditReport],
    command: str = "install",
    tool_name: str = "npm",
) -> Optional[str]:
    """Summarize an audit report, or return ``None`` when there is none.

    Install-style commands get a one-line count with a remediation hint.
    The ``audit`` command itself gets a per-package listing first.
    """
    if report is None:
        return None

    lines: List[str] = []
    if command == "audit":
        lines.append(f"# {tool_name} audit report")
        lines.append("")
        lines.extend(_detail_lines(report, tool_name))

    lines.append(_count_line(report))
    if report.total > 0:
        lines.extend(["", "To address all issues, run:", f"  {tool_name} audit fix"])
        if command != "audit":
            lines.extend(["", f"Run `{tool_name} audit` for details."])
    return "\n".join(lines)
