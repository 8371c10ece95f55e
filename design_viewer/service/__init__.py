"""Service module - resolved designs for transports and the CLI."""

from .lib import DesignService

__all__ = ["DesignService"]
