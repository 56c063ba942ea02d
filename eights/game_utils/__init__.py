"""Shared game utilities."""

from .cards import Card, DeckFactory, Rank, Suit, RANKS, SUITS, WILD_RANK, format_card, suit_name
from .options import GameOptions, IntOption, OptionMeta, get_option_meta, option_field
from .turn_timer import TICKS_PER_SECOND, TurnTimer, ms_to_ticks

__all__ = [
    "Card",
    "DeckFactory",
    "Rank",
    "Suit",
    "RANKS",
    "SUITS",
    "WILD_RANK",
    "format_card",
    "suit_name",
    "GameOptions",
    "IntOption",
    "OptionMeta",
    "get_option_meta",
    "option_field",
    "TICKS_PER_SECOND",
    "TurnTimer",
    "ms_to_ticks",
]
