"""
Rules engine for two-player Crazy Eights.

Every transition takes a GameState and returns a new one; nothing here
mutates its input. Recoverable rejections (an illegal play, drawing from an
exhausted table) are reported through ``GameState.message``. Referencing a
card the actor does not hold is a contract violation and raises
CardNotInHandError.

States: waiting -> playing <-> choosingSuit, and playing -> gameOver (terminal).
"""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence
import random

from ...game_utils.cards import (
    Card,
    DeckFactory,
    Rank,
    Suit,
    SUITS,
    WILD_RANK,
    format_card,
    suit_name,
)
from ...messages.localization import Localization
from .bot import choose_suit as choose_computer_suit
from .state import HAND_SIZE, Actor, GameState, Status


class CardNotInHandError(AssertionError):
    """A move referenced a card the acting side does not hold."""


def initial_state(locale: str = "en") -> GameState:
    return GameState.waiting(locale)


def start(
    rng: random.Random | None = None,
    artwork: Sequence[dict[str, str]] | None = None,
    locale: str = "en",
) -> GameState:
    """Shuffle a fresh deck, deal seven cards each and flip the first discard."""
    deck = DeckFactory.shuffled_deck(rng, artwork)
    player_hand = deck[:HAND_SIZE]
    computer_hand = deck[HAND_SIZE : 2 * HAND_SIZE]
    deck = deck[2 * HAND_SIZE :]
    first_card = deck.pop()
    return GameState(
        deck=tuple(deck),
        player_hand=tuple(player_hand),
        computer_hand=tuple(computer_hand),
        discard_pile=(first_card,),
        current_suit=first_card.suit,
        current_rank=first_card.rank,
        turn=Actor.PLAYER,
        status=Status.PLAYING,
        winner=None,
        message=Localization.get(locale, "crazyeights-your-turn"),
    )


def is_playable(card: Card, required_suit: Suit | None, required_rank: Rank | None) -> bool:
    """An 8 is always playable; anything else must match suit or rank."""
    return card.rank == WILD_RANK or card.suit == required_suit or card.rank == required_rank


def play(
    state: GameState, card: Card | str, actor: Actor, locale: str = "en"
) -> GameState:
    """
    Play ``card`` (a Card or card id) from ``actor``'s hand.

    The computer's moves are not re-validated; the scheduler only submits
    playable cards.
    """
    if state.status != Status.PLAYING:
        return state

    hand = state.hand(actor)
    index = _find_card(hand, card)
    played = hand[index]

    if actor == Actor.PLAYER and not is_playable(
        played, state.current_suit, state.current_rank
    ):
        return replace(state, message=Localization.get(locale, "crazyeights-illegal-play"))

    remaining = hand[:index] + hand[index + 1 :]
    changes = {
        _hand_field(actor): remaining,
        "discard_pile": state.discard_pile + (played,),
    }

    if not remaining:
        return replace(
            state,
            status=Status.GAME_OVER,
            winner=actor,
            message=Localization.get(locale, "crazyeights-player-wins", actor=actor.value),
            **changes,
        )

    if played.is_wild:
        if actor == Actor.PLAYER:
            # Suit and rank stay as they were until choose_suit() resolves them.
            return replace(
                state,
                status=Status.CHOOSING_SUIT,
                message=_choose_suit_prompt(locale),
                **changes,
            )
        suit = choose_computer_suit(remaining)
        return replace(
            state,
            current_suit=suit,
            current_rank=WILD_RANK,
            turn=Actor.PLAYER,
            message=Localization.get(
                locale, "crazyeights-computer-wild", suit=suit_name(suit, locale)
            ),
            **changes,
        )

    return replace(
        state,
        current_suit=played.suit,
        current_rank=played.rank,
        turn=actor.other,
        message=Localization.get(
            locale,
            "crazyeights-player-plays",
            actor=actor.value,
            card=format_card(played, locale),
        ),
        **changes,
    )


def choose_suit(state: GameState, suit: Suit | str, locale: str = "en") -> GameState:
    """Name the active suit after the human's 8. No-op in any other status."""
    if state.status != Status.CHOOSING_SUIT:
        return state
    suit = Suit(suit)
    return replace(
        state,
        current_suit=suit,
        current_rank=WILD_RANK,
        status=Status.PLAYING,
        turn=Actor.COMPUTER,
        message=Localization.get(
            locale, "crazyeights-suit-chosen", suit=suit_name(suit, locale)
        ),
    )


def draw(
    state: GameState,
    actor: Actor,
    rng: random.Random | None = None,
    locale: str = "en",
) -> GameState:
    """
    Draw the top card of the deck into ``actor``'s hand and pass the turn.

    With an empty deck the discard pile (minus its top card) is shuffled into
    a new deck instead; that reshuffle neither draws nor passes the turn, so
    a second draw is needed.
    """
    if state.status != Status.PLAYING:
        return state

    if not state.deck:
        if len(state.discard_pile) <= 1:
            return replace(state, message=Localization.get(locale, "crazyeights-deck-empty"))
        top_card = state.discard_pile[-1]
        new_deck = DeckFactory.shuffle(state.discard_pile[:-1], rng)
        return replace(
            state,
            deck=tuple(new_deck),
            discard_pile=(top_card,),
            message=Localization.get(locale, "crazyeights-reshuffled"),
        )

    card = state.deck[-1]
    return replace(
        state,
        deck=state.deck[:-1],
        turn=actor.other,
        message=Localization.get(locale, "crazyeights-player-draws", actor=actor.value),
        **{_hand_field(actor): state.hand(actor) + (card,)},
    )


def apply_action(
    state: GameState,
    actor: Actor,
    action_id: str,
    rng: random.Random | None = None,
    locale: str = "en",
) -> GameState:
    """Route an action id (``draw``, ``play_card_<id>``, ``suit_<suit>``)."""
    if action_id == "draw":
        return draw(state, actor, rng=rng, locale=locale)
    if action_id.startswith("play_card_"):
        return play(state, action_id[len("play_card_") :], actor, locale=locale)
    if action_id.startswith("suit_"):
        return choose_suit(state, action_id[len("suit_") :], locale=locale)
    raise ValueError(f"Unknown action: {action_id}")


def _hand_field(actor: Actor) -> str:
    return "player_hand" if actor == Actor.PLAYER else "computer_hand"


def _find_card(hand: tuple[Card, ...], card: Card | str) -> int:
    card_id = card if isinstance(card, str) else card.id
    for index, held in enumerate(hand):
        if held.id == card_id:
            return index
    raise CardNotInHandError(f"Card {card_id} is not in hand")


def _choose_suit_prompt(locale: str) -> str:
    suits = Localization.format_list_or(locale, [suit_name(s, locale) for s in SUITS])
    return Localization.get(locale, "crazyeights-choose-suit", suits=suits)
