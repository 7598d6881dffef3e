"""Rendering for Steeplechase."""

from steeplechase.graphics.renderer import SceneRenderer
from steeplechase.graphics.scenery import Cloud, Manor, Scenery

__all__ = ["SceneRenderer", "Scenery", "Cloud", "Manor"]
