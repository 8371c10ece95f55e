"""PlantUML transition diagram provider."""

from design_viewer.providers.plantuml.lib import PlantUMLProvider

__all__ = ["PlantUMLProvider"]
