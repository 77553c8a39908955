"""Core shared configuration and logging utilities."""

from core.structured_logging import (
    configure_structured_logging,
    file_scope,
    get_run_id,
    get_source_file,
    set_run_id,
)
from core.outline_config import (
    OutlineConfig,
    OutlineConfigError,
    load_outline_config,
    parse_outline_config,
    resolve_config_path,
    resolve_strict_config_validation,
)
from core.cargo_workspace import read_workspace_members

__all__ = [
    "configure_structured_logging",
    "file_scope",
    "get_run_id",
    "get_source_file",
    "set_run_id",
    "OutlineConfig",
    "OutlineConfigError",
    "load_outline_config",
    "parse_outline_config",
    "resolve_config_path",
    "resolve_strict_config_validation",
    "read_workspace_members",
]
