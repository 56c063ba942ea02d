"""Turn scheduler driving the computer player.

The computer's move is a one-shot deferred callback: when a state in which
the computer must act is observed, a TurnTimer is armed. When it expires the
scheduler asks ``bot_think`` for an action and executes it through the game,
the same entry point the human's intents use.

All scheduler state lives in serialized fields:
- armed_key: the state the pending move was armed for
- armed_generation: the game generation the pending move belongs to
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mashumaro.mixins.json import DataClassJSONMixin

from ...game_utils.turn_timer import TurnTimer
from .bot import bot_think
from .state import Actor, GameState, Status

if TYPE_CHECKING:
    from .game import CrazyEightsGame


def trigger_key(state: GameState, generation: int) -> str:
    """Identify the state a computer move is armed for."""
    hand = ",".join(card.id for card in state.computer_hand)
    suit = state.current_suit.value if state.current_suit else ""
    rank = state.current_rank.value if state.current_rank else ""
    return "|".join(
        [
            str(generation),
            state.status.value,
            state.turn.value,
            hand,
            suit,
            rank,
            str(len(state.deck)),
        ]
    )


@dataclass
class TurnScheduler(DataClassJSONMixin):
    """
    Schedules the computer's move after a pacing delay.

    Usage:
        # After every transition:
        scheduler.observe(game.state, game.generation)

        # In the game's on_tick:
        scheduler.on_tick(game)
    """

    delay_ticks: int = 30
    timer: TurnTimer = field(default_factory=TurnTimer)
    armed_key: str | None = None
    armed_generation: int = 0

    @property
    def pending(self) -> bool:
        return self.timer.is_running

    def observe(self, state: GameState, generation: int) -> None:
        """Arm, keep or cancel the pending move for ``state``."""
        if state.status != Status.PLAYING or state.turn != Actor.COMPUTER:
            self.cancel()
            return
        key = trigger_key(state, generation)
        if key == self.armed_key:
            return
        self.armed_key = key
        self.armed_generation = generation
        self.timer.start(max(1, self.delay_ticks))

    def cancel(self) -> None:
        self.timer.clear()
        self.armed_key = None

    def on_tick(self, game: "CrazyEightsGame") -> bool:
        """
        Advance the timer and run the computer's move when it expires.

        Returns:
            True if a move was executed this tick.
        """
        if not self.timer.tick():
            return False
        if self.armed_generation != game.generation or self.armed_key != trigger_key(
            game.state, game.generation
        ):
            # Stale: the game restarted or moved on since this was armed.
            self.cancel()
            return False
        game.execute_action(Actor.COMPUTER, bot_think(game.state))
        return True
