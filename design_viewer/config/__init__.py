"""Centralized configuration management for design-viewer.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from design_viewer.config import EnvVar, get_environment
    >>>
    >>> root = get_environment(EnvVar.DESIGN_PATH)
    >>> port = get_environment(EnvVar.MCP_PORT, override=9000)

Environment Variable Categories:
    design: Design document root and viewport defaults
    logging: Log level
    service: Kroki and MCP hosts and ports
"""

from .lib import (
    EnvConfig,
    EnvVar,
    get_design_path,
    get_environment,
    get_environment_info,
    get_kroki_url,
    list_environment_variables,
)

__all__ = [
    "EnvConfig",
    "EnvVar",
    "get_environment",
    "get_environment_info",
    "get_design_path",
    "get_kroki_url",
    "list_environment_variables",
]
