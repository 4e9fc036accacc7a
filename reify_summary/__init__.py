"""Summaries printed after a package tree reify completes."""

__version__ = "1.0.0"

from .config import LogLevel, RenderConfig  # noqa: E402
from .models import (  # noqa: E402
    AuditReport,
    Diff,
    DiffAction,
    DiffEntry,
    Edge,
    Funding,
    Inventory,
    PackageNode,
    ResultBundle,
)
from .output import ConsoleSink, reify_output  # noqa: E402

__all__ = [
    "AuditReport",
    "ConsoleSink",
    "Diff",
    "DiffAction",
    "DiffEntry",
    "Edge",
    "Funding",
    "Inventory",
    "LogLevel",
    "PackageNode",
    "RenderConfig",
    "ResultBundle",
    "reify_output",
]
