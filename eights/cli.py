"""
Command-line interface for simulating and watching games.

Both seats are played by the greedy heuristic; the computer through the
game's own turn scheduler, the player seat by the simulator.

Usage examples:
    # Simulate one game
    python -m eights simulate

    # Reproducible run with a faster computer
    python -m eights simulate --seed 7 -o computer_delay_ms=100

    # Output as JSON for machine parsing
    python -m eights simulate --games 20 --json

    # Test serialization (save/restore after each tick)
    python -m eights simulate --test-serialization

    # Show game options
    python -m eights show-options
"""

import argparse
import json
import sys
from typing import Any

from eights.games.crazyeights.bot import bot_think
from eights.games.crazyeights.game import CrazyEightsGame, CrazyEightsOptions
from eights.games.crazyeights.state import Actor, GameState, Status
from eights.game_utils.options import get_option_meta
from eights.users.base import User, generate_uuid


class SpectatorUser(User):
    """
    A spectator user that captures all game output.
    Used for CLI simulation to watch games play out.
    """

    def __init__(self, json_mode: bool = False, quiet: bool = False):
        self._uuid = generate_uuid()
        self._json_mode = json_mode
        self._quiet = quiet
        self.messages: list[str] = []
        self.last_state: GameState | None = None

    @property
    def username(self) -> str:
        return "__spectator__"

    @property
    def uuid(self) -> str:
        return self._uuid

    def speak(self, text: str) -> None:
        self.messages.append(text)
        if not self._quiet and not self._json_mode:
            print(f"  {text}")

    def on_state(self, state: GameState) -> None:
        self.last_state = state


class GameSimulator:
    """Runs a game simulation with the heuristic on both seats and a spectator."""

    def __init__(
        self,
        options: dict[str, str],
        seed: int | None = None,
        json_mode: bool = False,
        quiet: bool = False,
        max_ticks: int = 100000,
        test_serialization: bool = False,
    ):
        self.options = options
        self.seed = seed
        self.json_mode = json_mode
        self.quiet = quiet
        self.max_ticks = max_ticks
        self.test_serialization = test_serialization

        self.game: CrazyEightsGame | None = None
        self.spectator: SpectatorUser | None = None

    def setup(self) -> bool:
        """Set up the game. Returns True on success."""
        game_options = CrazyEightsOptions()
        for key, value in self.options.items():
            if not game_options.set_option(key, value):
                if not self.json_mode:
                    print(f"Error: Invalid option '{key}={value}'")
                return False
        if self.seed is not None:
            game_options.seed = self.seed

        self.game = CrazyEightsGame(options=game_options)
        self.spectator = SpectatorUser(json_mode=self.json_mode, quiet=self.quiet)
        self.game.attach_user(self.spectator)
        return True

    def _save_and_restore(self, tick: int) -> None:
        """Save game to JSON and restore it, testing serialization."""
        if not self.game:
            return

        # Save non-serialized runtime state
        saved_users = list(self.game._users)
        saved_rng = self.game._rng

        try:
            game_json = self.game.to_json()
        except Exception as e:
            raise RuntimeError(f"Serialization failed at tick {tick}: {e}")

        try:
            restored = CrazyEightsGame.from_json(game_json)
        except Exception as e:
            raise RuntimeError(f"Deserialization failed at tick {tick}: {e}")

        if restored.state != self.game.state:
            raise RuntimeError(f"State changed across serialization at tick {tick}")

        restored._users = saved_users
        restored._rng = saved_rng
        self.game = restored

    def _player_turn(self) -> None:
        """Let the heuristic act for the player seat when it is its move."""
        state = self.game.state
        if state.status == Status.CHOOSING_SUIT or (
            state.status == Status.PLAYING and state.turn == Actor.PLAYER
        ):
            self.game.execute_action(Actor.PLAYER, bot_think(state, Actor.PLAYER))

    def run(self) -> dict[str, Any]:
        """Run the simulation to completion. Returns results dict."""
        if not self.game or not self.spectator:
            return {"error": "Game not set up"}

        if not self.json_mode and not self.quiet:
            mode_str = " [testing serialization]" if self.test_serialization else ""
            print(f"\n=== {self.game.get_name()}{mode_str} ===\n")

        self.game.start_game()

        # A table where neither seat can move is left as-is by the rules;
        # give up once nothing has changed for a while.
        stall_limit = self.game.scheduler.delay_ticks * 4 + 20
        idle_ticks = 0
        tick = 0
        stalled = False
        serialization_error = None
        while not self.game.state.is_over and tick < self.max_ticks:
            before = self.game.state
            self._player_turn()
            self.game.on_tick()
            tick += 1

            if self.test_serialization:
                try:
                    self._save_and_restore(tick)
                except RuntimeError as e:
                    serialization_error = str(e)
                    if not self.json_mode:
                        print(f"\nError: {serialization_error}")
                    break

            idle_ticks = 0 if self.game.state != before else idle_ticks + 1
            if idle_ticks > stall_limit:
                stalled = True
                break

        timed_out = tick >= self.max_ticks and not self.game.state.is_over
        if timed_out and not self.json_mode:
            print(f"\nWarning: Game timed out after {self.max_ticks} ticks")
        if stalled and not self.json_mode:
            print(f"\nWarning: Game stalled after {tick} ticks")

        state = self.game.state
        results = {
            "game_type": self.game.get_type(),
            "game_name": self.game.get_name(),
            "seed": self.game.options.seed,
            "ticks": tick,
            "status": state.status.value,
            "winner": state.winner.value if state.winner else None,
            "player_cards": len(state.player_hand),
            "computer_cards": len(state.computer_hand),
            "card_count": state.card_count(),
            "timed_out": timed_out,
            "stalled": stalled,
            "messages": list(self.spectator.messages),
        }

        if self.test_serialization:
            results["serialization_tested"] = True
            if serialization_error:
                results["serialization_error"] = serialization_error
            else:
                results["serialization_passed"] = True

        return results


def cmd_show_options(args):
    """Show the game's options."""
    options_obj = CrazyEightsOptions()
    options_list = []

    for field_name in options_obj.__dataclass_fields__:
        current_value = getattr(options_obj, field_name)
        option_data = {
            "name": field_name,
            "type": type(current_value).__name__,
            "default": current_value,
        }
        meta = get_option_meta(type(options_obj), field_name)
        if meta:
            if hasattr(meta, "min_val"):
                option_data["min"] = meta.min_val
            if hasattr(meta, "max_val"):
                option_data["max"] = meta.max_val
            option_data["label"] = meta.get_label("en", current_value)
        options_list.append(option_data)

    if args.json:
        print(json.dumps({"game_type": CrazyEightsGame.get_type(), "options": options_list}, indent=2))
    else:
        print(f"Options for {CrazyEightsGame.get_type()}:\n")
        for opt in options_list:
            print(f"  {opt['name']} ({opt['type']})")
            print(f"    Default: {opt['default']}")
            if "min" in opt:
                print(f"    Range: {opt['min']} - {opt['max']}")
            print()


def cmd_simulate(args):
    """Simulate one or more games."""
    options = {}
    if args.option:
        for opt in args.option:
            if "=" in opt:
                key, value = opt.split("=", 1)
                options[key.strip()] = value.strip()

    all_results = []
    for game_number in range(args.games):
        seed = args.seed + game_number if args.seed is not None else None
        simulator = GameSimulator(
            options=options,
            seed=seed,
            json_mode=args.json,
            quiet=args.quiet,
            max_ticks=args.max_ticks,
            test_serialization=args.test_serialization,
        )
        if not simulator.setup():
            sys.exit(1)
        results = simulator.run()
        all_results.append(results)

        if not args.json and not args.quiet:
            winner = results["winner"] or "nobody"
            print(f"\n=== Finished: {results['ticks']} ticks, winner: {winner} ===")

    if args.json:
        print(json.dumps(all_results if args.games > 1 else all_results[0], indent=2))


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Crazy Eights CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    options_parser = subparsers.add_parser("show-options", help="Show game options")
    options_parser.add_argument("--json", action="store_true", help="Output as JSON")

    sim_parser = subparsers.add_parser("simulate", help="Simulate games with bots")
    sim_parser.add_argument(
        "--option",
        "-o",
        action="append",
        help="Set game option (e.g., -o computer_delay_ms=100)",
    )
    sim_parser.add_argument("--seed", type=int, help="Shuffle seed for the first game")
    sim_parser.add_argument(
        "--games", "-n", type=int, default=1, help="Number of games to simulate"
    )
    sim_parser.add_argument("--json", action="store_true", help="Output as JSON")
    sim_parser.add_argument(
        "--quiet", "-q", action="store_true", help="Suppress game output"
    )
    sim_parser.add_argument(
        "--max-ticks",
        type=int,
        default=100000,
        help="Maximum ticks before timeout (default: 100000)",
    )
    sim_parser.add_argument(
        "--test-serialization",
        "-s",
        action="store_true",
        help="Save and restore game state after each tick to test serialization",
    )

    args = parser.parse_args(argv)

    if args.command == "show-options":
        cmd_show_options(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
