"""Score calculation and win checks for Belote."""

from __future__ import annotations

from collections.abc import Iterable

from belote.game.models import RoundScore, team_of
from belote.game.trick import Trick
from belote.utils.constants import (
    BELOTE_BONUS,
    DEFAULT_TARGET_SCORE,
    LAST_TRICK_BONUS,
    TEAM_EW,
    TEAM_NS,
    TEAMS,
    TOTAL_CARD_POINTS,
    TRICKS_PER_ROUND,
)


def calculate_trick_points(trick: Trick) -> int:
    """Card points in a completed trick; 0 while it is still being played."""
    if not trick.completed:
        return 0
    return trick.total_points()


def trick_winning_team(trick: Trick) -> str | None:
    winner = trick.winner()
    if winner is None:
        return None
    return team_of(winner)


def calculate_round_scores(
    tricks: Iterable[Trick], belote_teams: Iterable[str] = ()
) -> dict[str, RoundScore]:
    """Per-team breakdown for a round.

    Each completed trick's points go to the team that took it. The
    last-trick bonus goes to the winner of the eighth trick only, and
    the belote bonus to each team listed in ``belote_teams``.
    """
    card_points = {team: 0 for team in TEAMS}
    last_trick = {team: 0 for team in TEAMS}
    for trick in tricks:
        team = trick_winning_team(trick)
        if team is None:
            continue
        card_points[team] += trick.total_points()
        if trick.trick_number == TRICKS_PER_ROUND:
            last_trick[team] = LAST_TRICK_BONUS

    belote = set(belote_teams)
    return {
        team: RoundScore(
            card_points=card_points[team],
            belote_bonus=BELOTE_BONUS if team in belote else 0,
            last_trick_bonus=last_trick[team],
        )
        for team in TEAMS
    }


def validate_round_scores(ns: RoundScore, ew: RoundScore) -> bool:
    """Card points must total 152 and the last-trick bonus exactly 10."""
    return (
        ns.card_points + ew.card_points == TOTAL_CARD_POINTS
        and ns.last_trick_bonus + ew.last_trick_bonus == LAST_TRICK_BONUS
    )


def has_team_won(game_score: int, target_score: int = DEFAULT_TARGET_SCORE) -> bool:
    return game_score >= target_score


def points_to_win(game_score: int, target_score: int = DEFAULT_TARGET_SCORE) -> int:
    return max(0, target_score - game_score)


def get_game_winner(
    ns_score: int, ew_score: int, target_score: int = DEFAULT_TARGET_SCORE
) -> str | None:
    """Winning team, or None while the game goes on.

    When both teams reach the target the higher score wins; an exact tie
    leaves the game undecided so another round is played.
    """
    ns_done = ns_score >= target_score
    ew_done = ew_score >= target_score
    if ns_done and ew_done:
        if ns_score == ew_score:
            return None
        return TEAM_NS if ns_score > ew_score else TEAM_EW
    if ns_done:
        return TEAM_NS
    if ew_done:
        return TEAM_EW
    return None


def score_percentage(score: RoundScore, total_round_points: int) -> int:
    if total_round_points == 0:
        return 0
    return round(score.total / total_round_points * 100)


def round_score_summary(ns: RoundScore, ew: RoundScore) -> str:
    lines = ["Round score:"]
    for label, s in (("North-South", ns), ("East-West", ew)):
        lines.append(
            f"{label}: {s.card_points} (cards) + {s.belote_bonus} (belote) "
            f"+ {s.last_trick_bonus} (last trick) = {s.total}"
        )
    return "\n".join(lines)
