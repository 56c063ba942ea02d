"""Immutable game-state snapshot for Crazy Eights."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from mashumaro.mixins.json import DataClassJSONMixin

from ...game_utils.cards import Card, Rank, Suit
from ...messages.localization import Localization


HAND_SIZE = 7


class Actor(str, Enum):
    """The two sides of the table."""

    PLAYER = "player"
    COMPUTER = "computer"

    @property
    def other(self) -> "Actor":
        return Actor.COMPUTER if self is Actor.PLAYER else Actor.PLAYER


class Status(str, Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    CHOOSING_SUIT = "choosingSuit"
    GAME_OVER = "gameOver"


@dataclass(frozen=True)
class GameState(DataClassJSONMixin):
    """
    Snapshot of a match.

    States are never mutated; the rules module returns a new snapshot for
    every transition. The last card of ``discard_pile`` is the active card,
    and the top of ``deck`` is its last element.
    """

    deck: tuple[Card, ...] = ()
    player_hand: tuple[Card, ...] = ()
    computer_hand: tuple[Card, ...] = ()
    discard_pile: tuple[Card, ...] = ()
    current_suit: Suit | None = None
    current_rank: Rank | None = None
    turn: Actor = Actor.PLAYER
    status: Status = Status.WAITING
    winner: Actor | None = None
    message: str = ""

    @classmethod
    def waiting(cls, locale: str = "en") -> "GameState":
        return cls(message=Localization.get(locale, "crazyeights-welcome"))

    @property
    def top_card(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def is_over(self) -> bool:
        return self.status == Status.GAME_OVER

    def hand(self, actor: Actor) -> tuple[Card, ...]:
        return self.player_hand if actor == Actor.PLAYER else self.computer_hand

    def card_count(self) -> int:
        """Cards across deck, both hands and the discard pile."""
        return (
            len(self.deck)
            + len(self.player_hand)
            + len(self.computer_hand)
            + len(self.discard_pile)
        )
