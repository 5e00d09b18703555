"""Interactive CLI for Belote: you sit South, three random players fill the table.

Usage: python -m cli.play [--seed 42] [--target 1000] [--trump h]
"""

from __future__ import annotations

import argparse

from belote.db.memory import InMemoryGameRepository
from belote.game.engine import GameEngine
from belote.game.integrity import validate_game_integrity
from belote.game.models import Card, Hand
from belote.game.state import GameState
from belote.utils.constants import (
    PHASE_FINISHED,
    PHASE_PLAY,
    PHASE_ROUND_END,
    POSITION_NAMES,
    SUIT_NAMES,
    SUIT_SYMBOLS,
    SUITS,
    TEAM_EW,
    TEAM_NS,
)
from belote.utils.crypto import create_rng
from cli.simulate import ai_turn


def parse_card(s: str) -> Card:
    """Parse compact card notation."""
    return Card.from_compact(s.strip())


def display_hand(hand: Hand, legal: list[Card]) -> str:
    """Format hand for terminal display, marking playable cards."""
    if not hand:
        return "  (empty)"
    lines = []
    for i, card in enumerate(hand, 1):
        mark = "*" if card in legal else " "
        lines.append(f"  {mark}{i:2d}. {card.display()} [{card.compact()}]")
    return "\n".join(lines)


def display_table(game: GameState) -> str:
    """Format table state for terminal display."""
    round_ = game.current_round()
    trick = round_.current_trick()
    trump = round_.trump_suit
    ns = game.team_scores[TEAM_NS].game_score
    ew = game.team_scores[TEAM_EW].game_score
    lines = [
        "",
        f"{'=' * 50}",
        f"  BELOTE - Round #{round_.round_number}, trick {trick.trick_number}/8",
        f"{'=' * 50}",
        "",
        f"  Trump: {SUIT_SYMBOLS[trump]} ({SUIT_NAMES[trump]})",
        f"  Dealer: {POSITION_NAMES[game.dealer]}",
        f"  Scores: NS {ns} | EW {ew} (target {game.settings.target_score})",
        "",
        "  On the table:",
    ]
    if trick.is_empty():
        lines.append("    (nothing yet)")
    for play in trick.plays:
        lines.append(f"    {POSITION_NAMES[play.position]}: {play.card.display()}")
    lines.append("")
    return "\n".join(lines)


def play_game(seed: int | None = None, target: int = 1000, trump: str | None = None) -> None:
    rng = create_rng(seed)
    repo = InMemoryGameRepository()
    engine = GameEngine(repo, rng)

    game = engine.create_game({"targetScore": target, "trumpSuit": trump})
    human = game.human_player()
    assert human is not None
    seat = human.position

    print("\n  Welcome to Belote!")
    if seed is not None:
        print(f"  Seed: {seed}")

    while game.phase != PHASE_FINISHED:
        if game.phase != PHASE_PLAY:
            result = engine.start_round(game.game_id)
            if not result.success:
                print(f"  Error: {result.error}")
                return
            assert result.game is not None
            game = result.game

        if game.current_player != seat:
            game = ai_turn(engine, game, rng)
            _report_round_end(game)
            continue

        print(display_table(game))
        legal = engine.legal_cards(game.game_id, seat)
        player = game.get_player(seat)
        print(display_hand(player.hand, legal))
        print()

        try:
            action = input("  play <card> | quit > ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n  Game interrupted.")
            return

        parts = action.split()
        if not parts:
            continue
        if parts[0].lower() == "quit":
            print("  Game abandoned.")
            return
        if parts[0].lower() != "play" or len(parts) < 2:
            print("  Usage: play <card> (e.g. play 10h)")
            continue
        try:
            card = parse_card(parts[1])
        except ValueError as e:
            print(f"  Parse error: {e}")
            continue

        result = engine.process_play(game.game_id, seat, card)
        if not result.success:
            print(f"  ✗ {result.error}")
            continue
        assert result.game is not None
        game = result.game
        for event in result.events:
            if event["event"] == "belote":
                print(f"  *** {event['announcement'].capitalize()}! ***")

        if game.phase == PHASE_PLAY:
            errors = validate_game_integrity(game)
            if errors:
                print(f"\n  ⚠ INTEGRITY ERROR: {errors}")
                return
        _report_round_end(game)

    print(f"\n  Game over! Winner: {game.winner}")
    for team, score in game.team_scores.items():
        print(f"    {team}: {score.game_score} points")


def _report_round_end(game: GameState) -> None:
    if game.phase not in (PHASE_ROUND_END, PHASE_FINISHED) or not game.round_history:
        return
    last = game.round_history[-1]
    print("\n  End of round.")
    for team, score in last.items():
        print(
            f"    {team}: {score.card_points} cards + {score.belote_bonus} belote "
            f"+ {score.last_trick_bonus} last trick = {score.total}"
        )


def main() -> None:
    parser = argparse.ArgumentParser(description="Belote CLI")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--target", type=int, default=1000)
    parser.add_argument("--trump", choices=SUITS, default=None)
    args = parser.parse_args()
    play_game(args.seed, args.target, args.trump)


if __name__ == "__main__":
    main()
