"""One deal of Belote: dealing, eight tricks, end-of-round scoring."""

from __future__ import annotations

from collections.abc import Callable

from belote.game.announcements import has_team_completed_belote
from belote.game.deck import Deck
from belote.game.errors import InvalidStateError
from belote.game.models import Player, TeamScore, deal_order
from belote.game.scoring import calculate_round_scores
from belote.game.trick import Trick
from belote.utils.constants import (
    DEAL_PATTERN,
    SOUTH,
    TEAM_EW,
    TEAM_NS,
    TEAMS,
    TRICKS_PER_ROUND,
)


class Round:
    """A single deal and the tricks played from it.

    The round owns its tricks and a round-local TeamScore per team. It is
    completed once eight tricks are completed; ``finalize_round`` credits
    the scores exactly once.
    """

    def __init__(
        self,
        round_number: int,
        trump_suit: str,
        players: dict[str, Player],
        dealer: str = SOUTH,
        round_id: str = "",
    ) -> None:
        self.round_id = round_id or f"round_{round_number}"
        self.round_number = round_number
        self.trump_suit = trump_suit
        self.players = dict(players)
        self.dealer = dealer
        self.team_scores = {team: TeamScore(team) for team in TEAMS}
        self._deck = Deck()
        self._tricks: list[Trick] = []
        self._finalized = False

    # --- Dealing ---

    def deal_cards(self, random_fn: Callable[[], float]) -> None:
        """Shuffle and deal 3-2-3, starting with the seat left of the dealer."""
        self._deck.shuffle(random_fn)
        order = deal_order(self.dealer)
        for batch in DEAL_PATTERN:
            for position in order:
                self.players[position].hand.add_cards(self._deck.deal(batch))
        for player in self.players.values():
            player.hand.sort(self.trump_suit)

    @property
    def deck(self) -> Deck:
        return self._deck

    # --- Tricks ---

    def start_trick(self, leader: str) -> Trick:
        if self._finalized or len(self._tricks) >= TRICKS_PER_ROUND:
            raise InvalidStateError("Cannot start trick in completed round")
        current = self.current_trick()
        if current is not None and not current.completed:
            raise InvalidStateError("Current trick is still being played")
        number = len(self._tricks) + 1
        trick = Trick(
            trick_number=number,
            leader=leader,
            trump_suit=self.trump_suit,
            trick_id=f"{self.round_id}_trick_{number}",
        )
        self._tricks.append(trick)
        return trick

    def current_trick(self) -> Trick | None:
        return self._tricks[-1] if self._tricks else None

    def trick(self, index: int) -> Trick | None:
        if 0 <= index < len(self._tricks):
            return self._tricks[index]
        return None

    @property
    def tricks(self) -> list[Trick]:
        return list(self._tricks)

    def completed_tricks(self) -> list[Trick]:
        return [t for t in self._tricks if t.completed]

    def next_trick_leader(self) -> str | None:
        """Winner of the current trick, who leads the next one."""
        current = self.current_trick()
        return current.winner() if current else None

    def is_completed(self) -> bool:
        return len(self._tricks) == TRICKS_PER_ROUND and all(
            t.completed for t in self._tricks
        )

    @property
    def finalized(self) -> bool:
        return self._finalized

    # --- Scoring ---

    def belote_teams(self) -> list[str]:
        players = self.players.values()
        return [team for team in TEAMS if has_team_completed_belote(players, team)]

    def finalize_round(self) -> None:
        """Credit card points, last-trick and belote bonuses. Runs once."""
        if self._finalized:
            return
        scores = calculate_round_scores(self.completed_tricks(), self.belote_teams())
        for team, score in scores.items():
            team_score = self.team_scores[team]
            team_score.add_card_points(score.card_points)
            if score.last_trick_bonus:
                team_score.add_last_trick_bonus(score.last_trick_bonus)
            if score.belote_bonus:
                team_score.add_belote_bonus(score.belote_bonus)
        self._finalized = True

    def get_team_score(self, team: str) -> TeamScore:
        return self.team_scores[team]

    def get_player(self, position: str) -> Player | None:
        return self.players.get(position)

    def all_players(self) -> list[Player]:
        return list(self.players.values())

    def stats(self) -> dict:
        return {
            "tricksPlayed": len(self._tricks),
            "tricksCompleted": len(self.completed_tricks()),
            "totalPoints": sum(t.total_points() for t in self._tricks),
            "completed": self.is_completed(),
        }

    def __str__(self) -> str:
        ns = self.team_scores[TEAM_NS].round_total()
        ew = self.team_scores[TEAM_EW].round_total()
        return f"Round {self.round_number} (Trump: {self.trump_suit}) - NS: {ns}, EW: {ew}"
