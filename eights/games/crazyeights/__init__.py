"""Crazy Eights game package."""

from .game import CrazyEightsGame, CrazyEightsOptions
from .rules import CardNotInHandError
from .state import Actor, GameState, Status

__all__ = [
    "CrazyEightsGame",
    "CrazyEightsOptions",
    "CardNotInHandError",
    "Actor",
    "GameState",
    "Status",
]
