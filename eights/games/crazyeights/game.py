from __future__ import annotations

from dataclasses import dataclass, field, replace
import random

from mashumaro.mixins.json import DataClassJSONMixin

from ...game_utils.cards import Card, Suit
from ...game_utils.options import GameOptions, IntOption, option_field
from ...game_utils.turn_timer import ms_to_ticks
from ...messages.localization import Localization
from ...users.base import User
from . import rules
from .scheduler import TurnScheduler
from .state import Actor, GameState, Status


@dataclass
class CrazyEightsOptions(GameOptions):
    """Options for Crazy Eights."""

    computer_delay_ms: int = option_field(
        IntOption(
            default=1500,
            min_val=0,
            max_val=10000,
            value_key="ms",
            label="crazyeights-option-computer-delay",
        )
    )
    seed: int = option_field(
        IntOption(
            default=0,
            min_val=0,
            max_val=2**31 - 1,
            value_key="seed",
            label="crazyeights-option-seed",
        )
    )


@dataclass
class CrazyEightsGame(DataClassJSONMixin):
    """
    Human-vs-computer Crazy Eights table.

    The game owns the one live GameState and is its only writer: intents
    from the presentation layer and the scheduler's computer moves both go
    through execute_action(), which applies the pure rules and publishes the
    resulting snapshot to attached users.

    The host loop must call on_tick() 20 times per second so the computer's
    pending move can fire.
    """

    options: CrazyEightsOptions = field(default_factory=CrazyEightsOptions)
    state: GameState = field(default_factory=GameState.waiting)
    generation: int = 0  # Bumped on every start; stale computer moves are dropped
    scheduler: TurnScheduler = field(default_factory=TurnScheduler)
    locale: str = "en"
    artwork: list[dict[str, str]] = field(default_factory=list)

    def __post_init__(self):
        """Initialize non-serialized state."""
        self._users: list[User] = []
        self._rng: random.Random | None = None

    # ==========================================================================
    # Metadata
    # ==========================================================================

    @classmethod
    def get_name(cls) -> str:
        return "Crazy Eights"

    @classmethod
    def get_type(cls) -> str:
        return "crazyeights"

    # ==========================================================================
    # Users
    # ==========================================================================

    def attach_user(self, user: User) -> None:
        if user not in self._users:
            self._users.append(user)

    def detach_user(self, user: User) -> None:
        if user in self._users:
            self._users.remove(user)

    @property
    def snapshot(self) -> GameState:
        return self.state

    # ==========================================================================
    # Intents
    # ==========================================================================

    def start_game(self) -> None:
        """Deal a new match, discarding the current one and any pending computer move."""
        self.generation += 1
        self.scheduler.cancel()
        self.scheduler.delay_ticks = ms_to_ticks(self.options.computer_delay_ms)
        self._commit(
            rules.start(rng=self._get_rng(), artwork=self.artwork or None, locale=self.locale)
        )

    def draw_card(self, actor: Actor | str = Actor.PLAYER) -> None:
        self.execute_action(actor, "draw")

    def play_card(self, card: Card | str, actor: Actor | str = Actor.PLAYER) -> None:
        card_id = card if isinstance(card, str) else card.id
        self.execute_action(actor, f"play_card_{card_id}")

    def choose_suit(self, suit: Suit | str) -> None:
        self.execute_action(Actor.PLAYER, f"suit_{Suit(suit).value}")

    def execute_action(self, actor: Actor | str, action_id: str) -> None:
        actor = Actor(actor)
        if not self._may_act(actor):
            return
        self._commit(
            rules.apply_action(
                self.state, actor, action_id, rng=self._get_rng(), locale=self.locale
            )
        )

    def on_tick(self) -> None:
        self.scheduler.on_tick(self)

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _may_act(self, actor: Actor) -> bool:
        status = self.state.status
        if status == Status.CHOOSING_SUIT:
            return actor == Actor.PLAYER
        if status != Status.PLAYING:
            return False
        if self.state.turn != actor:
            if actor == Actor.PLAYER:
                self._commit(
                    replace(
                        self.state,
                        message=Localization.get(self.locale, "crazyeights-wait-turn"),
                    )
                )
            return False
        return True

    def _commit(self, state: GameState) -> None:
        if state is self.state:
            return
        self.state = state
        for user in list(self._users):
            user.on_state(state)
            user.speak(state.message)
        self.scheduler.observe(state, self.generation)

    def _get_rng(self) -> random.Random:
        if self._rng is None:
            self._rng = random.Random(self.options.seed or None)
        return self._rng
