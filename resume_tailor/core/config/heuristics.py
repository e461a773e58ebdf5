from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

_HEURISTICS_CACHE: dict[str, Any] | None = None
_DEFAULT_HEURISTICS_PATH = Path(__file__).resolve().parents[3] / "config" / "heuristics.yaml"


def _config_path() -> Path:
    override = (os.getenv("HEURISTICS_CONFIG_PATH") or "").strip()
    return Path(override) if override else _DEFAULT_HEURISTICS_PATH


def get_heuristics_config() -> dict[str, Any]:
    """Load heuristic constants from config/heuristics.yaml and cache them.

    A missing file is not fatal: callers pass in-code defaults that carry the
    same values as the shipped YAML.
    """
    global _HEURISTICS_CACHE

    if _HEURISTICS_CACHE is not None:
        return _HEURISTICS_CACHE

    path = _config_path()
    if not path.exists():
        logger.warning("heuristics_config_missing path=%s", path)
        _HEURISTICS_CACHE = {}
        return _HEURISTICS_CACHE

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Failed to read heuristics config '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in heuristics config '{path}': {exc}") from exc

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid heuristics config '{path}': expected a top-level mapping.")

    _HEURISTICS_CACHE = parsed
    return _HEURISTICS_CACHE


def get_heuristic_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'tailoring.base_score'."""
    if not path:
        return default

    current: Any = get_heuristics_config()
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current


def reset_heuristics_cache() -> None:
    global _HEURISTICS_CACHE
    _HEURISTICS_CACHE = None
