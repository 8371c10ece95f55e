"""D2 transition diagram provider."""

from design_viewer.providers.d2.lib import D2Provider

__all__ = ["D2Provider"]
