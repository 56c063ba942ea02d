"""Game implementations."""

from .crazyeights.game import CrazyEightsGame

__all__ = ["CrazyEightsGame"]
