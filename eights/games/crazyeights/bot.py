from __future__ import annotations

from collections import Counter
from typing import Iterable

from ...game_utils.cards import Card, Suit
from .state import Actor, GameState, Status


# Fixed tie-break order when several suits share the highest count.
SUIT_PREFERENCE = (Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS, Suit.SPADES)


def choose_suit(hand: Iterable[Card]) -> Suit:
    """Most frequent suit in ``hand``; hearts for an empty hand."""
    counts = Counter(card.suit for card in hand)
    if not counts:
        return Suit.HEARTS
    best = max(counts.values())
    return next(suit for suit in SUIT_PREFERENCE if counts[suit] == best)


def choose_playable_card(state: GameState, actor: Actor = Actor.COMPUTER) -> Card | None:
    """First card in hand order that can legally be played."""
    from .rules import is_playable

    return next(
        (
            card
            for card in state.hand(actor)
            if is_playable(card, state.current_suit, state.current_rank)
        ),
        None,
    )


def bot_think(state: GameState, actor: Actor = Actor.COMPUTER) -> str:
    """Greedy move for ``actor`` as an action id."""
    if state.status == Status.CHOOSING_SUIT:
        return f"suit_{choose_suit(state.hand(actor)).value}"
    card = choose_playable_card(state, actor)
    if card is not None:
        return f"play_card_{card.id}"
    return "draw"
