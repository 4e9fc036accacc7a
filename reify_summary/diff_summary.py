"""Tally reify diffs into added/removed/changed counts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .models import Diff, DiffAction, PackageNode


@dataclass(frozen=True)
class DiffSummary:
    added: int = 0
    removed: int = 0
    changed: int = 0

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.changed)


def summarize_diff(diff: Optional[Diff]) -> DiffSummary:
    """Count diff entries by action.

    Entries with any other action are ignored. A missing diff, or one
    without children, counts as empty.
    """
    added = removed = changed = 0
    children = getattr(diff, "children", None) or []
    for entry in children:
        action = getattr(entry, "action", DiffAction.OTHER)
        if action is DiffAction.ADD:
            added += 1
        elif action is DiffAction.REMOVE:
            removed += 1
        elif action is DiffAction.CHANGE:
            changed += 1
    return DiffSummary(added=added, removed=removed, changed=changed)


def notable_additions(diff: Optional[Diff], tree: Optional[PackageNode]) -> List[str]:
    """``name@version`` for each added package that is present in the new tree.

    Additions that cannot be found in the tree's inventory are left out of
    this listing; they still count towards ``DiffSummary.added``.
    """
    inventory = tree.inventory if tree is not None else None
    if inventory is None:
        return []

    listing: List[str] = []
    for entry in getattr(diff, "children", None) or []:
        ideal = getattr(entry, "ideal", None)
        if getattr(entry, "action", DiffAction.OTHER) is not DiffAction.ADD or ideal is None:
            continue
        name = getattr(ideal, "name", None)
        if not isinstance(name, str) or not name or not inventory.has(name):
            continue
        installed = inventory.get(name)
        version = (installed.version if installed is not None else None) or getattr(ideal, "version", None)
        listing.append(f"{name}@{version}" if version else name)
    return listing
