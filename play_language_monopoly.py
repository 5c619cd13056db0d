#!/usr/bin/env python3
"""
Minimal CLI for simulating Language Monopoly games.

Scripted players roll, buy whatever they can afford, build whenever the
gateway offers it and pick special-event options at random.
"""

import argparse
import logging
import random
from typing import Optional

from language_monopoly import GameConfig, Player, create_game
from language_monopoly.game import ActionType, GameState
from language_monopoly.rules import Action, apply_action, apply_roll, get_legal_actions
from language_monopoly.settings import configure_logging, get_game_settings
from language_monopoly.turns import Dice

logger = logging.getLogger(__name__)

# Preference order when several actions are legal
_PRIORITY = [
    ActionType.RESOLVE_SPECIAL,
    ActionType.BUY_PROPERTY,
    ActionType.UPGRADE_ACADEMY,
    ActionType.CONSUME_CREDIT,
    ActionType.BUILD_HOUSE,
    ActionType.SKIP_PURCHASE,
    ActionType.END_TURN,
]


def choose_action(game: GameState, player_id: int, rng: random.Random) -> Optional[Action]:
    """Pick the next action for a scripted player."""
    actions = get_legal_actions(game, player_id)
    if not actions:
        return None
    for action_type in _PRIORITY:
        candidates = [a for a in actions if a.action_type == action_type]
        if candidates:
            return rng.choice(candidates)
    return actions[0]


def print_game_state(game: GameState) -> None:
    """Print current game state."""
    print("\n" + "=" * 60)
    print(f"TURN {game.turn_number}")
    print("=" * 60)

    for player_id, player in sorted(game.players.items()):
        space = game.board.get_space(player.position)
        print(
            f"Player {player_id} ({player.name}): {player.resources} resources | "
            f"{len(player.properties)} properties | {player.upgrade_credits} credits | at {space.name}"
        )

    print("\nRecent events:")
    for event in game.event_log.get_recent_events(5):
        print(f"  {event}")


def print_game_summary(game: GameState) -> None:
    """Print final standings."""
    print("\n" + "=" * 60)
    print("FINAL STANDINGS")
    print("=" * 60)

    for player_id, player in sorted(game.players.items(), key=lambda kv: -kv[1].resources):
        academies = sum(1 for sid in player.properties if game.ledger[sid].academy)
        houses = sum(game.ledger[sid].houses for sid in player.properties)
        print(
            f"{player.name}: {player.resources} resources, {len(player.properties)} properties, "
            f"{houses} houses, {academies} academies"
        )


def simulate_game(
    num_players: int = 4,
    seed: Optional[int] = None,
    max_turns: int = 100,
    verbose: bool = True,
) -> GameState:
    """Run one scripted game through the gateway."""
    config = GameConfig.from_settings(get_game_settings())
    if seed is not None:
        config.seed = seed

    names = ["Alice", "Bob", "Charlie", "Diana", "Eve", "Frank"]
    players = [Player(i, names[i]) for i in range(num_players)]
    game = create_game(config, players)
    dice = Dice(seed=config.seed)
    rng = random.Random(config.seed)

    while game.turn_number < max_turns:
        player_id = game.get_current_player().player_id
        result = apply_roll(game, player_id, dice.roll())
        if not result.ok:
            logger.error(f"Roll rejected for player {player_id}: {result.reason}")
            break

        # Safety limit on actions per turn
        for _ in range(50):
            action = choose_action(game, player_id, rng)
            if action is None:
                break
            result = apply_action(game, action)
            if not result.ok:
                logger.warning(f"Scripted action rejected: {action!r} ({result.reason})")
                break
            if action.action_type == ActionType.END_TURN:
                break

        if verbose and game.turn_number % 10 == 0:
            print_game_state(game)

    if verbose:
        print_game_summary(game)
    return game


def main():
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(description="Simulate a Language Monopoly game")
    parser.add_argument(
        "--players",
        type=int,
        default=4,
        choices=range(2, 7),
        help="Number of players (2-6)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--max-turns", type=int, default=100, help="Number of turns to play")
    parser.add_argument("--quiet", action="store_true", help="Reduce output verbosity")

    args = parser.parse_args()
    configure_logging()

    simulate_game(
        num_players=args.players,
        seed=args.seed,
        max_turns=args.max_turns,
        verbose=not args.quiet,
    )


if __name__ == "__main__":
    main()
