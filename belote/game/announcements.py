"""Belote / Rebelote announcements.

A player holding both King and Queen of trump announces "belote" when
the first of them is played and "rebelote" with the second. Only the
completed pair earns the bonus at the end of the round.
"""

from __future__ import annotations

from collections.abc import Iterable

from belote.game.models import Card, Player
from belote.utils.constants import (
    ANNOUNCE_BELOTE,
    ANNOUNCE_REBELOTE,
    BELOTE_BONUS,
    KING,
    QUEEN,
)


def check_belote_announcement(card: Card, player: Player, trump_suit: str) -> str | None:
    """Announcement triggered by ``player`` playing ``card``, without applying it.

    Must be called before the card leaves the hand.
    """
    if not card.is_belote_card(trump_suit):
        return None
    if not player.belote_announced:
        return ANNOUNCE_BELOTE if player.hand.has_belote(trump_suit) else None
    if not player.rebelote_announced:
        return ANNOUNCE_REBELOTE
    return None


def process_belote_announcement(card: Card, player: Player, trump_suit: str) -> str | None:
    """Check and record the announcement on the player's flags."""
    announcement = check_belote_announcement(card, player, trump_suit)
    if announcement == ANNOUNCE_BELOTE:
        player.announce_belote()
    elif announcement == ANNOUNCE_REBELOTE:
        player.announce_rebelote()
    return announcement


def belote_pair(card: Card, trump_suit: str) -> Card | None:
    """The other half of the belote pair for a King or Queen of trump."""
    if not card.is_belote_card(trump_suit):
        return None
    return Card(suit=trump_suit, rank=QUEEN if card.rank == KING else KING)


def players_with_belote(players: Iterable[Player], trump_suit: str) -> list[Player]:
    return [p for p in players if p.hand.has_belote(trump_suit)]


def validate_belote_distribution(players: Iterable[Player], trump_suit: str) -> bool:
    """At most one team can hold the belote pair."""
    teams = {p.team for p in players_with_belote(players, trump_suit)}
    return len(teams) <= 1


def has_team_completed_belote(players: Iterable[Player], team: str) -> bool:
    return any(p.team == team and p.has_complete_belote() for p in players)


def belote_bonus(players: Iterable[Player], team: str) -> int:
    """20 if a player of ``team`` announced both belote and rebelote, else 0."""
    return BELOTE_BONUS if has_team_completed_belote(players, team) else 0


def belote_status(player: Player, trump_suit: str) -> str:
    if player.has_complete_belote():
        return f"Belote and rebelote announced (+{BELOTE_BONUS} points)"
    if player.belote_announced:
        return "Belote announced (rebelote pending)"
    if player.hand.has_belote(trump_suit):
        return "Belote available (not announced)"
    return "No belote"
