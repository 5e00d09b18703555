"""State integrity checker for Belote game state."""

from __future__ import annotations

from collections import Counter

from belote.game.announcements import validate_belote_distribution
from belote.game.models import Card
from belote.game.scoring import validate_round_scores
from belote.game.state import GameState
from belote.utils.constants import (
    CARDS_PER_PLAYER,
    PHASE_PLAY,
    POSITIONS,
    SUITS,
    TEAM_EW,
    TEAM_NS,
    TOTAL_CARDS,
)


def validate_game_integrity(game: GameState) -> list[str]:
    """Validate all game state invariants. Returns list of errors (empty = OK).

    Checks:
    1. Dealer and seats are valid
    2. Scores are non-negative
    3. During play: 32 distinct cards between hands and tricks
    4. Hand sizes match the number of cards each seat has played
    5. Current turn matches the open trick
    6. Rebelote never announced without belote
    7. A finalized round distributed exactly 152 card points and 10 last-trick points
    """
    errors: list[str] = []

    # 1. Seats
    if game.dealer not in POSITIONS:
        errors.append(f"Invalid dealer: {game.dealer}")
    if sorted(game.players) != sorted(POSITIONS):
        errors.append(f"Seats = {sorted(game.players)}, expected {sorted(POSITIONS)}")
        return errors

    # 2. Non-negative scores
    for team, score in game.team_scores.items():
        if score.game_score < 0:
            errors.append(f"Negative game score for {team}: {score.game_score}")

    round_ = game.current_round()
    if round_ is None:
        return errors

    if round_.trump_suit not in SUITS:
        errors.append(f"Invalid trump suit: {round_.trump_suit}")

    # 6. Announcement order
    for position, player in game.players.items():
        if player.rebelote_announced and not player.belote_announced:
            errors.append(f"Player {position} announced rebelote without belote")

    if game.phase == PHASE_PLAY:
        errors.extend(_check_cards_in_play(game))

    # 7. Round conservation
    if round_.finalized and round_.is_completed():
        ns = round_.get_team_score(TEAM_NS).current_round_data()
        ew = round_.get_team_score(TEAM_EW).current_round_data()
        if not validate_round_scores(ns, ew):
            errors.append(
                f"Round {round_.round_number} scores do not add up: "
                f"cards {ns.card_points}+{ew.card_points}, "
                f"last trick {ns.last_trick_bonus}+{ew.last_trick_bonus}"
            )

    return errors


def _check_cards_in_play(game: GameState) -> list[str]:
    errors: list[str] = []
    round_ = game.current_round()

    # 3. Card conservation
    all_cards: list[Card] = []
    for player in game.players.values():
        all_cards.extend(player.hand)
    for trick in round_.tricks:
        all_cards.extend(trick.cards())

    if len(all_cards) != TOTAL_CARDS:
        errors.append(f"Total cards = {len(all_cards)}, expected {TOTAL_CARDS}")

    for (suit, rank), count in Counter((c.suit, c.rank) for c in all_cards).items():
        if count > 1:
            errors.append(f"Duplicate card: suit={suit} rank={rank} (x{count})")

    # 4. Hand sizes
    played = Counter(pos for trick in round_.tricks for pos in trick.played_positions())
    for position, player in game.players.items():
        expected = CARDS_PER_PLAYER - played[position]
        if len(player.hand) != expected:
            errors.append(
                f"Player {position} holds {len(player.hand)} cards, expected {expected}"
            )

    if not validate_belote_distribution(game.players.values(), round_.trump_suit):
        errors.append("Both teams hold the belote pair")

    # 5. Turn pointer
    trick = round_.current_trick()
    if trick is None or trick.completed:
        errors.append("No open trick during play")
    elif game.current_player != trick.next_player():
        errors.append(
            f"Current player {game.current_player} but trick expects {trick.next_player()}"
        )

    return errors
