"""Game state: roster, dealer rotation, rounds and cumulative scores."""

from __future__ import annotations

from belote.game.errors import InvalidStateError
from belote.game.models import (
    GameSettings,
    Player,
    RoundScore,
    TeamScore,
    default_players,
    next_position,
    previous_position,
)
from belote.game.round import Round
from belote.game.scoring import get_game_winner
from belote.utils.constants import (
    PHASE_DEALING,
    PHASE_FINISHED,
    SOUTH,
    TEAM_EW,
    TEAM_NS,
    TEAMS,
)


class GameState:
    """A game of Belote across as many rounds as it takes to reach the target."""

    def __init__(
        self,
        game_id: str,
        settings: GameSettings | None = None,
        players: dict[str, Player] | None = None,
    ) -> None:
        self.game_id = game_id
        self.settings = settings or GameSettings()
        self.players = players or default_players(self.settings.ai_level)
        self.team_scores = {team: TeamScore(team) for team in TEAMS}
        self.round_history: list[dict[str, RoundScore]] = []
        self.phase = PHASE_DEALING
        self.dealer = SOUTH
        self.current_player: str | None = None
        self.winner: str | None = None
        self.version = 1
        self.updated_at = ""
        self._rounds: list[Round] = []
        self._scored_rounds: set[str] = set()

    # --- Rounds ---

    def start_new_round(self, trump_suit: str) -> Round:
        """Reset per-round player state and open a new (undealt) round."""
        if self.is_game_completed():
            raise InvalidStateError("Cannot start a round in a finished game")
        for player in self.players.values():
            player.reset_for_new_round()
        number = len(self._rounds) + 1
        round_ = Round(
            round_number=number,
            trump_suit=trump_suit,
            players=self.players,
            dealer=self.dealer,
            round_id=f"{self.game_id}_round_{number}",
        )
        self._rounds.append(round_)
        self.phase = PHASE_DEALING
        self.current_player = None
        return round_

    def current_round(self) -> Round | None:
        return self._rounds[-1] if self._rounds else None

    @property
    def rounds(self) -> list[Round]:
        return list(self._rounds)

    def update_scores_from_round(self, round_: Round) -> dict[str, RoundScore]:
        """Fold a finished round into the game scores, once per round."""
        round_.finalize_round()
        if round_.round_id in self._scored_rounds:
            return {}
        summary: dict[str, RoundScore] = {}
        for team in TEAMS:
            source = round_.get_team_score(team)
            target = self.team_scores[team]
            target.add_card_points(source.card_points)
            target.add_belote_bonus(source.belote_bonus)
            target.add_last_trick_bonus(source.last_trick_bonus)
            summary[team] = target.finalize_round()
        self._scored_rounds.add(round_.round_id)
        self.round_history.append(summary)
        self.check_game_end()
        return summary

    def complete_round(self, round_: Round) -> dict[str, RoundScore]:
        """Score the round, then pass the deal to the next seat."""
        summary = self.update_scores_from_round(round_)
        if summary:
            self.next_dealer()
        return summary

    def check_game_end(self) -> str | None:
        winner = get_game_winner(
            self.team_scores[TEAM_NS].game_score,
            self.team_scores[TEAM_EW].game_score,
            self.settings.target_score,
        )
        if winner is not None:
            self.winner = winner
            self.phase = PHASE_FINISHED
        return winner

    def is_game_completed(self) -> bool:
        return self.winner is not None

    # --- Seats ---

    def next_dealer(self) -> str:
        self.dealer = next_position(self.dealer)
        return self.dealer

    def get_next_position(self, position: str) -> str:
        return next_position(position)

    def get_previous_position(self, position: str) -> str:
        return previous_position(position)

    def get_player(self, position: str) -> Player | None:
        return self.players.get(position)

    def human_player(self) -> Player | None:
        for player in self.players.values():
            if player.is_human:
                return player
        return None

    def ai_players(self) -> list[Player]:
        return [p for p in self.players.values() if not p.is_human]

    def all_players(self) -> list[Player]:
        return list(self.players.values())

    def get_team_score(self, team: str) -> TeamScore:
        return self.team_scores[team]

    # --- Lifecycle ---

    def reset_game(self) -> None:
        for score in self.team_scores.values():
            score.reset_game()
        for player in self.players.values():
            player.reset_for_new_round()
        self._rounds = []
        self._scored_rounds = set()
        self.round_history = []
        self.phase = PHASE_DEALING
        self.dealer = SOUTH
        self.current_player = None
        self.winner = None

    def stats(self) -> dict:
        return {
            "roundsPlayed": len(self._rounds),
            "phase": self.phase,
            "scores": {team: s.game_score for team, s in self.team_scores.items()},
            "dealer": self.dealer,
            "currentPlayer": self.current_player,
            "completed": self.is_game_completed(),
            "winner": self.winner,
            "targetScore": self.settings.target_score,
        }

    def __str__(self) -> str:
        ns = self.team_scores[TEAM_NS].game_score
        ew = self.team_scores[TEAM_EW].game_score
        return (
            f"Game {self.game_id} - Round {len(self._rounds)} - NS: {ns}, EW: {ew} "
            f"(Target: {self.settings.target_score})"
        )
