"""Configuration manager for reify-summary using TOML files."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import toml

from . import config
from .config import LogLevel, RenderConfig

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_CONFIG = {
    "json": config.DEFAULT_JSON,
    "fund": config.DEFAULT_FUND,
    "loglevel": config.DEFAULT_LOGLEVEL,
    "tool_name": config.DEFAULT_TOOL_NAME,
}

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def load_full_config() -> Dict[str, Any]:
    """Load the entire TOML config (all sections)."""
    if not config.CONFIG_FILE.exists():
        return {}
    try:
        with open(config.CONFIG_FILE, "r") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config.CONFIG_FILE, exc)
        return {}


def _save_full_config(data: Dict[str, Any]) -> bool:
    """Write entire config dict to TOML file, preserving all sections."""
    config.ensure_base_dirs()
    try:
        with open(config.CONFIG_FILE, "w") as f:
            toml.dump(data, f)
        return True
    except OSError as exc:
        logger.warning("Could not write config %s: %s", config.CONFIG_FILE, exc)
        return False


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUTHY:
            return True
        if text in _FALSY:
            return False
    return None


def _as_loglevel(value: Any) -> Optional[str]:
    try:
        return str(LogLevel.parse(value))
    except ValueError:
        return None


def _clean_settings(raw: Dict[str, Any], source: str) -> Dict[str, Any]:
    """Keep the valid ``[output]`` keys from ``raw``, warning about the rest."""
    cleaned: Dict[str, Any] = {}
    for key in ("json", "fund"):
        if key not in raw:
            continue
        flag = _as_bool(raw[key])
        if flag is None:
            logger.warning("Ignoring %s %s=%r: expected a boolean", source, key, raw[key])
        else:
            cleaned[key] = flag
    if "loglevel" in raw:
        level = _as_loglevel(raw["loglevel"])
        if level is None:
            logger.warning("Ignoring %s loglevel=%r: unknown log level", source, raw["loglevel"])
        else:
            cleaned["loglevel"] = level
    if "tool_name" in raw:
        if isinstance(raw["tool_name"], str) and raw["tool_name"].strip():
            cleaned["tool_name"] = raw["tool_name"].strip()
        else:
            logger.warning("Ignoring %s tool_name=%r: expected a name", source, raw["tool_name"])
    return cleaned


def load_output_config() -> Dict[str, Any]:
    """Load the ``[output]`` section merged over the defaults.

    Values of the wrong type or unknown log levels are logged and replaced
    by their defaults.
    """
    merged = DEFAULT_OUTPUT_CONFIG.copy()
    section = load_full_config().get("output", {})
    if isinstance(section, dict):
        merged.update(_clean_settings(section, f"{config.CONFIG_FILE} [output]"))
    elif section:
        logger.warning("Ignoring %s [output]: expected a table", config.CONFIG_FILE)
    return merged


def save_output_config(
    json: Optional[bool] = None,
    fund: Optional[bool] = None,
    loglevel: Optional[str] = None,
) -> bool:
    """Persist output defaults to the ``[output]`` section.

    Preserves other sections in the file. ``None`` leaves a key untouched.
    """
    data = load_full_config()
    section = data.setdefault("output", {})
    if json is not None:
        section["json"] = json
    if fund is not None:
        section["fund"] = fund
    if loglevel is not None:
        section["loglevel"] = str(LogLevel.parse(loglevel))
    return _save_full_config(data)


def _env_overrides() -> Dict[str, Any]:
    raw: Dict[str, Any] = {}
    for key in ("json", "fund", "loglevel"):
        value = os.environ.get(f"REIFY_SUMMARY_{key.upper()}")
        if value is not None:
            raw[key] = value
    return _clean_settings(raw, "environment")


def build_render_config(**overrides: Any) -> RenderConfig:
    """Build a ``RenderConfig`` for one render call.

    Precedence, lowest first: defaults, TOML ``[output]`` section,
    ``REIFY_SUMMARY_*`` environment variables, explicit keyword overrides.
    Overrides whose value is ``None`` are ignored.

    Raises:
        ValueError: if an explicit ``loglevel`` override is unknown. Bad
            values from the file or environment only log a warning.
    """
    settings = load_output_config()
    settings.update(_env_overrides())
    settings.update({k: v for k, v in overrides.items() if v is not None})

    kwargs: Dict[str, Any] = {
        "json": bool(settings["json"]),
        "fund": bool(settings["fund"]),
        "loglevel": LogLevel.parse(settings["loglevel"]),
        "tool_name": str(settings["tool_name"]),
    }
    if settings.get("started") is not None:
        kwargs["started"] = float(settings["started"])
    return RenderConfig(**kwargs)
