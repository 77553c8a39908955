"""Cargo workspace manifest helpers."""

from __future__ import annotations

import glob
import logging
import os
from typing import Any

import toml

logger = logging.getLogger(__name__)

_GLOB_CHARS = "*?["


def _load_manifest_payload(manifest_path: str) -> dict[str, Any]:
    try:
        payload = toml.load(manifest_path)
    except FileNotFoundError:
        logger.debug("No Cargo manifest at %s", manifest_path)
        return {}
    except OSError as exc:
        logger.warning("Cannot read Cargo manifest %s: %s", manifest_path, exc)
        return {}
    except (toml.TomlDecodeError, TypeError) as exc:
        logger.warning("Failed to parse Cargo manifest %s: %s", manifest_path, exc)
        return {}
    if not isinstance(payload, dict):
        return {}
    return payload


def read_workspace_members(manifest_path: str) -> list[str]:
    """Return ``[workspace] members`` declared in a Cargo manifest.

    Glob members (``crates/*``) are expanded against the manifest's
    directory; only existing directories are kept for glob patterns.
    Plain members are returned as written. A missing or invalid manifest
    yields an empty list.

    Example:
        >>> read_workspace_members("Cargo.toml")
        ['crates/agent', 'crates/cli']
    """
    payload = _load_manifest_payload(manifest_path)
    workspace = payload.get("workspace")
    if not isinstance(workspace, dict):
        return []

    raw_members = workspace.get("members", [])
    if not isinstance(raw_members, list):
        logger.warning("workspace.members in %s must be a list", manifest_path)
        return []

    base_dir = os.path.dirname(os.path.abspath(manifest_path))
    members: list[str] = []
    for raw in raw_members:
        member = str(raw).strip().rstrip("/")
        if not member:
            continue
        if any(ch in member for ch in _GLOB_CHARS):
            matches = sorted(glob.glob(os.path.join(base_dir, member)))
            for match in matches:
                if os.path.isdir(match):
                    members.append(os.path.relpath(match, base_dir))
            continue
        members.append(member)

    logger.debug("Workspace members in %s: %s", manifest_path, members)
    return members
