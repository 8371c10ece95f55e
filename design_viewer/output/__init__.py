"""Output generation module for scene and transition review.

Provides human-readable text representations of scenes and transition
graphs.
"""

from design_viewer.output.lib import (
    OutputGenerator,
    TransitionOutput,
    format_scene_tree,
    format_transition_tree,
)

__all__ = [
    "format_scene_tree",
    "format_transition_tree",
    "TransitionOutput",
    "OutputGenerator",
]
