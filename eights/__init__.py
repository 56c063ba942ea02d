"""Rules engine for two-player Crazy Eights."""

from .game_utils.cards import Card, DeckFactory, Rank, Suit
from .games.crazyeights import (
    Actor,
    CardNotInHandError,
    CrazyEightsGame,
    CrazyEightsOptions,
    GameState,
    Status,
)

VERSION = "1.0.0"

__all__ = [
    "Card",
    "DeckFactory",
    "Rank",
    "Suit",
    "Actor",
    "CardNotInHandError",
    "CrazyEightsGame",
    "CrazyEightsOptions",
    "GameState",
    "Status",
    "VERSION",
]
