"""Outline configuration loading.

Reads optional runtime settings from a YAML file. In non-strict mode any
problem is logged and defaults are used; in strict mode problems raise
``OutlineConfigError``.

Example ``outline.yml``::

    extensions: [".rs"]
    exclude_dirs: ["target", "vendor"]
    auto_outline_size: 16384
    results_per_page: 200
    workers: 4
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "outline.yml"

# Rust file extensions
RUST_EXTENSIONS: frozenset[str] = frozenset({".rs"})

# Directories never descended into during discovery
DEFAULT_EXCLUDE_DIRS: frozenset[str] = frozenset({
    "target",
    "node_modules",
    "__pycache__",
    "dist",
    "out",
})

# Files above this size are outlined instead of returned in full
AUTO_OUTLINE_SIZE: int = 16384

DEFAULT_RESULTS_PER_PAGE: Optional[int] = None
DEFAULT_WORKERS: int = 1

_KNOWN_KEYS = {
    "extensions",
    "exclude_dirs",
    "auto_outline_size",
    "results_per_page",
    "workers",
}


class OutlineConfigError(RuntimeError):
    """Raised when strict configuration validation fails."""


@dataclass(frozen=True)
class OutlineConfig:
    """Runtime settings for discovery and rendering."""

    extensions: frozenset[str] = RUST_EXTENSIONS
    exclude_dirs: frozenset[str] = DEFAULT_EXCLUDE_DIRS
    auto_outline_size: int = AUTO_OUTLINE_SIZE
    results_per_page: Optional[int] = DEFAULT_RESULTS_PER_PAGE
    workers: int = DEFAULT_WORKERS


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag("STRICT_CONFIG_VALIDATION", default=default)


def resolve_config_path(default: str = DEFAULT_CONFIG_FILENAME) -> str:
    """Resolve config file path from ``OUTLINE_CONFIG`` env."""
    raw = os.getenv("OUTLINE_CONFIG", "").strip()
    return raw or default


def _problem(msg: str, strict: bool) -> None:
    if strict:
        raise OutlineConfigError(msg)
    logger.warning("%s; using defaults", msg)


def _parse_str_set(
    payload: dict[str, Any], key: str, default: frozenset[str], strict: bool
) -> frozenset[str]:
    if key not in payload:
        return default
    value = payload[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        _problem(f"'{key}' must be a list of strings", strict)
        return default
    return frozenset(v.strip() for v in value if v.strip())


def _parse_positive_int(
    payload: dict[str, Any],
    key: str,
    default: Optional[int],
    strict: bool,
    allow_none: bool = False,
) -> Optional[int]:
    if key not in payload:
        return default
    value = payload[key]
    if value is None and allow_none:
        return None
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        _problem(f"'{key}' must be a positive integer", strict)
        return default
    return value


def parse_outline_config(payload: Any, strict: bool = False) -> OutlineConfig:
    """Build an ``OutlineConfig`` from a decoded YAML payload."""
    defaults = OutlineConfig()
    if payload is None:
        return defaults
    if not isinstance(payload, dict):
        _problem(f"Unexpected config payload type: {type(payload).__name__}", strict)
        return defaults

    unknown = sorted(set(payload) - _KNOWN_KEYS)
    if unknown:
        msg = "Unknown config keys: " + ", ".join(str(k) for k in unknown)
        if strict:
            raise OutlineConfigError(msg)
        logger.warning("%s; ignoring", msg)

    extensions = _parse_str_set(payload, "extensions", defaults.extensions, strict)
    normalized_exts = frozenset(
        ext if ext.startswith(".") else f".{ext}" for ext in extensions
    )

    return OutlineConfig(
        extensions=normalized_exts,
        exclude_dirs=_parse_str_set(
            payload, "exclude_dirs", defaults.exclude_dirs, strict
        ),
        auto_outline_size=_parse_positive_int(
            payload, "auto_outline_size", defaults.auto_outline_size, strict
        ),
        results_per_page=_parse_positive_int(
            payload,
            "results_per_page",
            defaults.results_per_page,
            strict,
            allow_none=True,
        ),
        workers=_parse_positive_int(payload, "workers", defaults.workers, strict),
    )


def load_outline_config(
    config_path: Optional[str] = None,
    strict: bool = False,
) -> OutlineConfig:
    """Load and validate the outline config file.

    A missing file is not an error in non-strict mode; defaults are
    returned. In strict mode every failure raises ``OutlineConfigError``.
    """
    path = config_path or resolve_config_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except FileNotFoundError as exc:
        msg = f"Outline config file not found: {path}"
        if strict:
            raise OutlineConfigError(msg) from exc
        logger.debug("%s; using defaults", msg)
        return OutlineConfig()
    except yaml.YAMLError as exc:
        msg = f"Failed to parse outline config YAML at {path}: {exc}"
        if strict:
            raise OutlineConfigError(msg) from exc
        logger.warning("%s; using defaults", msg)
        return OutlineConfig()

    config = parse_outline_config(payload, strict=strict)
    logger.info("Loaded outline config from %s", path)
    return config
