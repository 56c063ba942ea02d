"""Playing cards and the 52-card deck factory."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence
import random

from mashumaro.mixins.json import DataClassJSONMixin

from ..messages.localization import Localization


class Suit(str, Enum):
    """Card suits, in canonical deck order."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    def __str__(self) -> str:
        return self.value


class Rank(str, Enum):
    """Card ranks, in canonical deck order."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    def __str__(self) -> str:
        return self.value


SUITS: tuple[Suit, ...] = tuple(Suit)
RANKS: tuple[Rank, ...] = tuple(Rank)
WILD_RANK = Rank.EIGHT


@dataclass(frozen=True)
class Card(DataClassJSONMixin):
    """
    A single playing card.

    ``art`` carries cosmetic metadata (artwork URLs, flavor names) for the
    presentation layer. It is passed through untouched and takes no part in
    equality or hashing.
    """

    suit: Suit
    rank: Rank
    art: dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    @property
    def id(self) -> str:
        return f"{self.rank.value}-{self.suit.value}"

    @property
    def is_wild(self) -> bool:
        return self.rank == WILD_RANK

    def __str__(self) -> str:
        return f"{self.rank.value} of {self.suit.value}"


def suit_name(suit: Suit, locale: str = "en") -> str:
    return Localization.get(locale, f"suit-{suit.value}")


def format_card(card: Card, locale: str = "en") -> str:
    """Localized "rank of suit" label for a card."""
    return Localization.get(
        locale, "card-name", rank=card.rank.value, suit=suit_name(card.suit, locale)
    )


class DeckFactory:
    """
    Builds and shuffles standard 52-card decks.

    Usage:
        cards = DeckFactory.build()
        deck = DeckFactory.shuffle(cards, rng=random.Random(7))
    """

    DECK_SIZE = len(SUITS) * len(RANKS)

    @staticmethod
    def build(artwork: Sequence[dict[str, str]] | None = None) -> list[Card]:
        """
        Build an unshuffled deck, suits outer and ranks inner, both in
        canonical order.

        Args:
            artwork: Optional cosmetic entries; card ``i`` receives a copy of
                ``artwork[i % len(artwork)]``.
        """
        cards = []
        for suit in SUITS:
            for rank in RANKS:
                art = dict(artwork[len(cards) % len(artwork)]) if artwork else {}
                cards.append(Card(suit=suit, rank=rank, art=art))
        return cards

    @staticmethod
    def shuffle(
        cards: Sequence[Card], rng: random.Random | None = None
    ) -> list[Card]:
        """Return a uniformly shuffled copy of ``cards`` (Fisher-Yates)."""
        shuffled = list(cards)
        (rng or random).shuffle(shuffled)
        return shuffled

    @classmethod
    def shuffled_deck(
        cls,
        rng: random.Random | None = None,
        artwork: Sequence[dict[str, str]] | None = None,
    ) -> list[Card]:
        return cls.shuffle(cls.build(artwork), rng)
