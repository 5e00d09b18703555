"""Trick state machine: four plays in rotation, then a winner."""

from __future__ import annotations

from dataclasses import dataclass

from belote.game.errors import InvalidStateError, OutOfTurnError
from belote.game.models import Card, play_order
from belote.utils.constants import NUM_PLAYERS, POSITION_NAMES


@dataclass(frozen=True)
class Play:
    position: str
    card: Card
    order: int  # 0-3 within the trick


class Trick:
    """One exchange of four plays, led by ``leader``.

    empty -> partial (1..3 plays) -> completed (4 plays, immutable).
    """

    def __init__(
        self, trick_number: int, leader: str, trump_suit: str, trick_id: str = ""
    ) -> None:
        self.trick_id = trick_id or f"trick_{trick_number}"
        self.trick_number = trick_number
        self.leader = leader
        self.trump_suit = trump_suit
        self._plays: list[Play] = []
        self._seats = play_order(leader)

    @property
    def plays(self) -> list[Play]:
        return list(self._plays)

    @property
    def completed(self) -> bool:
        return len(self._plays) == NUM_PLAYERS

    def is_completed(self) -> bool:
        return self.completed

    def is_empty(self) -> bool:
        return not self._plays

    def play_count(self) -> int:
        return len(self._plays)

    def next_player(self) -> str | None:
        """Seat expected to play next, None once completed."""
        if self.completed:
            return None
        return self._seats[len(self._plays)]

    def add_play(self, position: str, card: Card) -> None:
        if self.completed:
            raise InvalidStateError("Cannot add play to completed trick")
        expected = self.next_player()
        if position != expected:
            raise OutOfTurnError(f"Expected play from {expected}, got {position}")
        self._plays.append(Play(position=position, card=card, order=len(self._plays)))

    def lead_suit(self) -> str | None:
        if not self._plays:
            return None
        return self._plays[0].card.suit

    def _best_play(self) -> Play | None:
        if not self._plays:
            return None
        lead = self._plays[0].card.suit
        best = self._plays[0]
        for play in self._plays[1:]:
            if play.card.beats(best.card, self.trump_suit, lead):
                best = play
        return best

    def current_winner(self) -> str | None:
        """Seat holding the best card so far (provisional), None if empty."""
        best = self._best_play()
        return best.position if best else None

    def winner(self) -> str | None:
        """Seat that took the trick; None until completed."""
        if not self.completed:
            return None
        return self.current_winner()

    def winning_card(self) -> Card | None:
        if not self.completed:
            return None
        best = self._best_play()
        return best.card if best else None

    def highest_trump(self) -> Card | None:
        """Strongest trump played so far, if any."""
        trumps = [c for c in self.cards() if c.is_trump(self.trump_suit)]
        if not trumps:
            return None
        highest = trumps[0]
        for card in trumps[1:]:
            if card.order(self.trump_suit) > highest.order(self.trump_suit):
                highest = card
        return highest

    def total_points(self) -> int:
        """Sum of card points played so far (full total once completed)."""
        return sum(p.card.points(self.trump_suit) for p in self._plays)

    def play_by_position(self, position: str) -> Play | None:
        for play in self._plays:
            if play.position == position:
                return play
        return None

    def card_by_position(self, position: str) -> Card | None:
        play = self.play_by_position(position)
        return play.card if play else None

    def has_played(self, position: str) -> bool:
        return self.play_by_position(position) is not None

    def cards(self) -> list[Card]:
        return [p.card for p in self._plays]

    def played_positions(self) -> list[str]:
        return [p.position for p in self._plays]

    def to_dict(self) -> dict:
        return {
            "trickId": self.trick_id,
            "trickNumber": self.trick_number,
            "leader": self.leader,
            "trumpSuit": self.trump_suit,
            "plays": [
                {"position": p.position, "card": p.card.compact()} for p in self._plays
            ],
            "winner": self.winner(),
            "points": self.total_points(),
        }

    def __str__(self) -> str:
        plays = ", ".join(f"{p.position}: {p.card.display()}" for p in self._plays)
        winner = self.winner()
        winner_str = POSITION_NAMES[winner] if winner else "TBD"
        return (
            f"Trick {self.trick_number} (Leader: {self.leader}): {plays} "
            f"| Winner: {winner_str} | Points: {self.total_points()}"
        )
