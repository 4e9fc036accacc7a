"""Configuration paths, defaults and the per-call render configuration."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path

BASE_DIR = Path(os.environ.get("REIFY_SUMMARY_HOME", str(Path.home() / ".reify-summary"))).expanduser()
CONFIG_FILE = BASE_DIR / "config.toml"

DEFAULT_JSON = False
DEFAULT_FUND = True
DEFAULT_LOGLEVEL = "notice"
DEFAULT_TOOL_NAME = "npm"


class LogLevel(IntEnum):
    """Verbosity levels, lowest (most output) to highest (no output)."""
    SILLY = 0
    VERBOSE = 1
    INFO = 2
    TIMING = 3
    HTTP = 4
    NOTICE = 5
    WARN = 6
    ERROR = 7
    SILENT = 8

    @classmethod
    def parse(cls, value) -> "LogLevel":
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            names = ", ".join(level.name.lower() for level in cls)
            raise ValueError(f"Unknown log level '{value}'. Expected one of: {names}") from None

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class RenderConfig:
    """Settings read by one render call.

    A fresh value is built for every call; nothing here is cached between
    calls.
    """
    json: bool = DEFAULT_JSON
    fund: bool = DEFAULT_FUND
    loglevel: LogLevel = LogLevel.NOTICE
    started: float = field(default_factory=time.time)
    tool_name: str = DEFAULT_TOOL_NAME

    @property
    def silent(self) -> bool:
        return self.loglevel > LogLevel.ERROR


def ensure_base_dirs() -> None:
    """Create the base directory for local configuration if needed."""
    BASE_DIR.mkdir(parents=True, exist_ok=True)
