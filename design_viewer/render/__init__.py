"""Render module for Kroki diagram rendering.

Converts transition diagrams (D2, PlantUML) to images via a Kroki instance.
"""

from .lib import (
    D2Theme,
    OutputFormat,
    PlantUMLTheme,
    RenderClient,
    RenderConfig,
    RenderError,
    RenderOutput,
)

__all__ = [
    "D2Theme",
    "OutputFormat",
    "PlantUMLTheme",
    "RenderClient",
    "RenderConfig",
    "RenderError",
    "RenderOutput",
]
