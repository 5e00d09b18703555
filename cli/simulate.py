"""Simulate Belote games with random legal-move players.

Usage: python -m cli.simulate --games 100 [--seed 42] [--target 1000] [--strategy random] [--verbose]
"""

from __future__ import annotations

import argparse
import random
import time
from collections.abc import Callable

from belote.db.memory import InMemoryGameRepository
from belote.game.engine import GameEngine
from belote.game.integrity import validate_game_integrity
from belote.game.models import Card, Hand
from belote.game.state import GameState
from belote.utils.constants import (
    PHASE_FINISHED,
    PHASE_PLAY,
    PHASE_ROUND_END,
)
from belote.utils.crypto import create_rng


def choose_random(legal: list[Card], hand: Hand, trump: str, rng: random.Random) -> Card:
    return rng.choice(legal)


def choose_lowest(legal: list[Card], hand: Hand, trump: str, rng: random.Random) -> Card:
    """Cheapest legal card; non-trump preferred on equal points."""
    return Hand(legal).lowest_card(trump)


STRATEGIES: dict[str, Callable[[list[Card], Hand, str, random.Random], Card]] = {
    "random": choose_random,
    "lowest": choose_lowest,
}


def ai_turn(
    engine: GameEngine, game: GameState, rng: random.Random, strategy: str = "random"
) -> GameState:
    """Play one card for the seat whose turn it is. Returns updated game state."""
    position = game.current_player
    assert position is not None
    legal = engine.legal_cards(game.game_id, position)
    if not legal:
        raise RuntimeError(f"No legal card for {position}")

    player = game.get_player(position)
    trump = game.current_round().trump_suit
    card = STRATEGIES[strategy](legal, player.hand, trump, rng)

    result = engine.process_play(game.game_id, position, card)
    if not result.success:
        raise RuntimeError(f"Play failed: {result.error}")
    assert result.game is not None
    return result.game


def simulate_game(
    rng: random.Random,
    target_score: int = 1000,
    strategy: str = "random",
    verbose: bool = False,
) -> dict:
    """Simulate one complete game. Returns stats dict."""
    repo = InMemoryGameRepository()
    engine = GameEngine(repo, rng)

    game = engine.create_game({"targetScore": target_score})
    max_rounds = 500
    plays = 0

    while game.phase != PHASE_FINISHED and len(game.rounds) < max_rounds:
        if game.phase != PHASE_PLAY:
            result = engine.start_round(game.game_id)
            if not result.success:
                return {"error": result.error, "plays": plays}
            assert result.game is not None
            game = result.game

        errors = validate_game_integrity(game)
        if errors:
            return {"error": f"Integrity: {errors}", "plays": plays}

        try:
            game = ai_turn(engine, game, rng, strategy)
        except Exception as e:
            return {"error": str(e), "plays": plays}
        plays += 1

        if game.phase in (PHASE_ROUND_END, PHASE_FINISHED):
            errors = validate_game_integrity(game)
            if errors:
                return {"error": f"Integrity: {errors}", "plays": plays}
            if verbose:
                print(f"  {game.current_round()}")

    return {
        "winner": game.winner,
        "plays": plays,
        "rounds": len(game.rounds),
        "scores": {team: s.game_score for team, s in game.team_scores.items()},
        "error": None,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Belote Simulator")
    parser.add_argument("--games", type=int, default=100)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--target", type=int, default=1000)
    parser.add_argument("--strategy", choices=sorted(STRATEGIES), default="random")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    base_seed = args.seed if args.seed is not None else int(time.time())
    print(f"Simulating {args.games} games to {args.target} (base seed: {base_seed})")

    errors = 0
    wins: dict[str, int] = {}
    total_rounds = 0

    for i in range(args.games):
        rng = create_rng(base_seed + i)
        result = simulate_game(rng, args.target, args.strategy, verbose=args.verbose)

        if result.get("error"):
            errors += 1
            if args.verbose:
                print(f"  Game {i + 1}: ERROR - {result['error']}")
        else:
            winner = result.get("winner") or "none"
            wins[winner] = wins.get(winner, 0) + 1
            total_rounds += result["rounds"]

            if args.verbose:
                print(
                    f"  Game {i + 1}: winner={winner}, "
                    f"rounds={result['rounds']}, scores={result['scores']}"
                )

        if (i + 1) % 100 == 0 and not args.verbose:
            print(f"  {i + 1}/{args.games} done...")

    completed = args.games - errors
    print("\nResults:")
    print(f"  Games completed: {completed}/{args.games}")
    print(f"  Errors: {errors}")
    if completed > 0:
        print(f"  Average rounds: {total_rounds / completed:.1f}")
        print(f"  Wins: {wins}")


if __name__ == "__main__":
    main()
