"""Count direct dependencies that ask for funding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .models import PackageNode


@dataclass(frozen=True)
class FundingSummary:
    count: int

    @property
    def plural(self) -> bool:
        return self.count != 1

    @property
    def message(self) -> str:
        if self.plural:
            return f"{self.count} packages are looking for funding"
        return f"{self.count} package is looking for funding"


def count_funding(tree: Optional[PackageNode], fund: bool = True) -> Optional[FundingSummary]:
    """Count the root's direct edges whose target declares funding.

    Returns ``None`` when funding output is disabled or the root lacks its
    own manifest or its edge map. Only direct edges are inspected and each
    qualifying edge counts once.
    """
    if not fund or tree is None:
        return None
    if tree.package is None or tree.edges_out is None:
        return None

    count = 0
    for edge in tree.edges_out.values():
        if edge.to is not None and edge.to.funding:
            count += 1
    return FundingSummary(count=count)


def funding_message(summary: Optional[FundingSummary]) -> Optional[str]:
    """The nudge line, or ``None`` when nothing qualifies."""
    if summary is None or summary.count == 0:
        return None
    return summary.message
