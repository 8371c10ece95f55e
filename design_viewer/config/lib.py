"""Centralized environment configuration management for design-viewer.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from design_viewer.config import EnvVar, get_environment
    >>>
    >>> # Get values with automatic type conversion
    >>> root = get_environment(EnvVar.DESIGN_PATH)  # Returns Path
    >>> port = get_environment(EnvVar.MCP_PORT)  # Returns int
    >>>
    >>> # Override at runtime
    >>> port = get_environment(EnvVar.MCP_PORT, override=9000)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "DESIGN_PATH").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str, int, bool, Path).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by design-viewer.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - design: Design document location and resolution defaults
        - logging: Log output
        - service: Service URLs, hosts, and ports
    """

    # -------------------------------------------------------------------------
    # Design Documents
    # -------------------------------------------------------------------------
    DESIGN_PATH = EnvConfig(
        name="DESIGN_PATH",
        default=Path("./design"),
        var_type=Path,
        description="Root directory holding sites/<siteId>/ design documents",
        category="design",
    )
    DEFAULT_VIEWPORT = EnvConfig(
        name="DEFAULT_VIEWPORT",
        default="desktop",
        var_type=str,
        description="Viewport used when a site declares no viewports",
        category="design",
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    LOG_LEVEL = EnvConfig(
        name="LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level name (DEBUG, INFO, WARNING, ERROR)",
        category="logging",
    )

    # -------------------------------------------------------------------------
    # Service Configuration (URLs and Hosts)
    # -------------------------------------------------------------------------
    KROKI_URL = EnvConfig(
        name="KROKI_URL",
        default=None,  # Computed from KROKI_PORT if not set
        var_type=str,
        description="Kroki rendering service URL",
        category="service",
    )
    MCP_HOST = EnvConfig(
        name="MCP_HOST",
        default="0.0.0.0",
        var_type=str,
        description="MCP server bind address",
        category="service",
    )
    MCP_PREVIEW_PROVIDER = EnvConfig(
        name="MCP_PREVIEW_PROVIDER",
        default="d2",
        var_type=str,
        description="Default provider for transition previews (d2, plantuml)",
        category="service",
    )

    # -------------------------------------------------------------------------
    # Service Ports (chosen to avoid common ports like 8000, 8080)
    # -------------------------------------------------------------------------
    KROKI_PORT = EnvConfig(
        name="KROKI_PORT",
        default=18000,
        var_type=int,
        description="Kroki service port (avoids 8000)",
        category="service",
    )
    MCP_PORT = EnvConfig(
        name="MCP_PORT",
        default=18080,
        var_type=int,
        description="MCP server port (avoids 8080)",
        category="service",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _parse_bool(value: str) -> bool | None:
    """Parse string to boolean.

    Recognizes: true/false, 1/0, yes/no (case-insensitive).
    Returns None for unrecognized values.
    """
    normalized = value.lower().strip()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    return None


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None:
        return default

    if var_type is str:
        return value

    if var_type is int:
        try:
            return int(value)
        except ValueError:
            return default

    if var_type is bool:
        result = _parse_bool(value)
        return result if result is not None else default

    if var_type is Path:
        return Path(value)

    # Unknown type, return as-is
    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: bool) -> bool: ...
@overload
def get_environment(env_var: EnvVar, override: Path) -> Path: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str, int, bool, or Path).

    Example:
        >>> get_environment(EnvVar.MCP_PORT)
        18080
        >>> get_environment(EnvVar.MCP_PORT, override=9000)
        9000
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


# =============================================================================
# Convenience Functions
# =============================================================================


def get_design_path(override: Path | str | None = None) -> Path:
    """Get the design document root.

    Resolution: override > DESIGN_PATH > ./design
    """
    if override is not None:
        return Path(override)
    return Path(get_environment(EnvVar.DESIGN_PATH))


def get_kroki_url(override: str | None = None) -> str:
    """Get Kroki service URL.

    Computes URL from KROKI_PORT if KROKI_URL is not set.

    Resolution: override > KROKI_URL > http://localhost:{KROKI_PORT}
    """
    if override:
        return override

    url = get_environment(EnvVar.KROKI_URL)
    if url:
        return url

    port = get_environment(EnvVar.KROKI_PORT)
    return f"http://localhost:{port}"


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (design, logging, service).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_design_path",
    "get_kroki_url",
    # Introspection
    "list_environment_variables",
]
