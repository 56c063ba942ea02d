"""Tests for the computer's turn scheduler."""

from dataclasses import replace

from eights.games.crazyeights.bot import bot_think
from eights.games.crazyeights.game import CrazyEightsGame, CrazyEightsOptions
from eights.games.crazyeights.scheduler import TurnScheduler, trigger_key
from eights.games.crazyeights.state import Actor, Status


def make_game(delay_ms: int = 100, seed: int = 42) -> CrazyEightsGame:
    game = CrazyEightsGame(options=CrazyEightsOptions(computer_delay_ms=delay_ms, seed=seed))
    game.start_game()
    return game


def hand_turn_to_computer(game: CrazyEightsGame) -> None:
    """Make the player's move (and suit choice, if any) with the heuristic."""
    while game.state.turn == Actor.PLAYER and not game.state.is_over:
        game.execute_action(Actor.PLAYER, bot_think(game.state, Actor.PLAYER))


class TestTriggerKey:
    def test_key_ignores_message(self):
        game = make_game()
        state = game.state
        assert trigger_key(state, 1) == trigger_key(replace(state, message="hi"), 1)

    def test_key_changes_with_generation_and_deck(self):
        game = make_game()
        state = game.state
        assert trigger_key(state, 1) != trigger_key(state, 2)
        assert trigger_key(state, 1) != trigger_key(replace(state, deck=state.deck[:-1]), 1)


class TestTurnScheduler:
    def test_idle_on_player_turn(self):
        game = make_game()
        assert game.state.turn == Actor.PLAYER
        assert not game.scheduler.pending

    def test_arms_on_computer_turn(self):
        game = make_game()
        hand_turn_to_computer(game)
        assert game.state.turn == Actor.COMPUTER
        assert game.scheduler.pending
        assert game.scheduler.timer.ticks_remaining == 2

    def test_fires_after_delay(self):
        game = make_game()
        hand_turn_to_computer(game)
        before = game.state

        assert game.scheduler.on_tick(game) is False
        assert game.state is before
        assert game.scheduler.on_tick(game) is True
        assert game.state is not before
        assert game.state.turn == Actor.PLAYER
        assert not game.scheduler.pending

    def test_no_double_fire(self):
        game = make_game()
        hand_turn_to_computer(game)
        game.on_tick()
        game.on_tick()
        after = game.state
        for _ in range(10):
            game.on_tick()
        assert game.state is after

    def test_reobserving_same_state_keeps_timer(self):
        game = make_game(delay_ms=250)
        hand_turn_to_computer(game)
        game.on_tick()
        remaining = game.scheduler.timer.ticks_remaining
        game.scheduler.observe(game.state, game.generation)
        assert game.scheduler.timer.ticks_remaining == remaining

    def test_restart_cancels_pending_move(self):
        game = make_game()
        hand_turn_to_computer(game)
        assert game.scheduler.pending
        game.start_game()
        assert not game.scheduler.pending
        assert game.state.turn == Actor.PLAYER

    def test_stale_generation_dropped(self):
        game = make_game()
        hand_turn_to_computer(game)
        before = game.state
        game.generation += 1
        assert game.scheduler.on_tick(game) is False
        assert game.scheduler.on_tick(game) is False
        assert game.state is before
        assert not game.scheduler.pending

    def test_cancel_on_game_over(self):
        scheduler = TurnScheduler(delay_ticks=5)
        game = make_game()
        hand_turn_to_computer(game)
        scheduler.observe(game.state, game.generation)
        assert scheduler.pending
        scheduler.observe(replace(game.state, status=Status.GAME_OVER), game.generation)
        assert not scheduler.pending
        assert scheduler.armed_key is None

    def test_zero_delay_still_waits_one_tick(self):
        game = make_game(delay_ms=0)
        hand_turn_to_computer(game)
        assert game.scheduler.timer.ticks_remaining == 1
        assert game.scheduler.on_tick(game) is True
