"""Game engine for Belote: orchestrates deals, plays and round ends."""

from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone

from belote.db.repository import GameRepository
from belote.game.announcements import process_belote_announcement
from belote.game.errors import InvalidStateError
from belote.game.models import Card, GameSettings, Player, next_position
from belote.game.state import GameState
from belote.game.trick import Trick
from belote.game.validator import check_play
from belote.game.validator import legal_cards as compute_legal_cards
from belote.utils.constants import (
    PHASE_FINISHED,
    PHASE_PLAY,
    PHASE_ROUND_END,
    SUITS,
)
from belote.utils.crypto import create_rng, new_game_id, random_source

logger = logging.getLogger("belote.engine")


@dataclass
class PlayResult:
    """Outcome of a single play submission."""

    success: bool
    error: str | None = None
    belote_announcement: str | None = None
    trick_completed: bool = False
    trick_winner: str | None = None
    next_player: str | None = None


def play_card(card: Card, player: Player, trick: Trick, trump_suit: str) -> PlayResult:
    """Play ``card`` from ``player``'s hand onto ``trick``.

    Wrong card, wrong turn or an illegal play come back as a failed
    result. Playing on a completed trick is a programming error.
    """
    if trick.completed:
        raise InvalidStateError("Cannot play on a completed trick")

    check = check_play(card, player, trick, trump_suit)
    if not check.valid:
        return PlayResult(success=False, error=check.error)

    # Announcement is decided while the card is still in hand
    announcement = process_belote_announcement(card, player, trump_suit)
    player.hand.remove_card(card)
    trick.add_play(player.position, card)

    if trick.completed:
        return PlayResult(
            success=True,
            belote_announcement=announcement,
            trick_completed=True,
            trick_winner=trick.winner(),
        )
    return PlayResult(
        success=True,
        belote_announcement=announcement,
        next_player=trick.next_player(),
    )


@dataclass
class ActionResult:
    success: bool
    game: GameState | None
    error: str | None = None
    events: list[dict] = field(default_factory=list)


class GameEngine:
    """Stateless game engine. All state lives in GameState / repository."""

    def __init__(
        self, repo: GameRepository, rng: random.Random | None = None
    ) -> None:
        self._repo = repo
        self._rng = rng or create_rng()

    def create_game(
        self,
        settings: GameSettings | dict | None = None,
        game_id: str | None = None,
    ) -> GameState:
        """Create a new game. Does NOT deal cards yet (call start_round)."""
        if not isinstance(settings, GameSettings):
            settings = GameSettings.from_dict(settings)
        game = GameState(game_id or new_game_id(), settings)
        game.updated_at = self._now()
        self._repo.save_game(game)

        logger.info(json.dumps({
            "event": "game_created",
            "game_id": game.game_id,
            "settings": settings.to_dict(),
        }))
        return self._repo.get_game(game.game_id)

    def start_round(self, game_id: str) -> ActionResult:
        """Start a new round: pick trump, shuffle, deal, open the first trick."""
        game = self._repo.get_game(game_id)
        if game is None:
            return ActionResult(success=False, game=None, error="Game not found")

        if game.is_game_completed():
            return ActionResult(success=False, game=game, error="The game is over")

        current = game.current_round()
        if current is not None and not current.finalized:
            return ActionResult(
                success=False, game=game, error="A round is already in progress"
            )

        trump = game.settings.trump_suit or self._rng.choice(SUITS)
        round_ = game.start_new_round(trump)
        round_.deal_cards(random_source(self._rng))

        # The seat left of the dealer leads the first trick
        leader = next_position(game.dealer)
        round_.start_trick(leader)
        game.phase = PHASE_PLAY
        game.current_player = leader
        game.updated_at = self._now()

        self._repo.save_game(game)
        game = self._repo.get_game(game_id)

        event = {
            "event": "round_start",
            "game_id": game_id,
            "round": round_.round_number,
            "dealer": game.dealer,
            "trump": trump,
            "first_player": leader,
            "players_cards": {pos: len(p.hand) for pos, p in game.players.items()},
        }
        logger.info(json.dumps(event))
        return ActionResult(success=True, game=game, events=[event])

    def legal_cards(self, game_id: str, position: str) -> list[Card]:
        """Cards ``position`` may play now; empty when it is not their turn."""
        game = self._repo.get_game(game_id)
        if game is None or game.phase != PHASE_PLAY:
            return []
        round_ = game.current_round()
        trick = round_.current_trick() if round_ else None
        if trick is None or trick.completed or trick.next_player() != position:
            return []
        return compute_legal_cards(game.players[position].hand, trick, round_.trump_suit)

    def process_play(self, game_id: str, position: str, card: Card) -> ActionResult:
        """Submit one play for ``position``. May close the trick and the round."""
        game = self._repo.get_game(game_id)
        if game is None:
            return ActionResult(success=False, game=None, error="Game not found")

        if game.phase != PHASE_PLAY:
            return ActionResult(
                success=False, game=game, error="No round is being played"
            )

        player = game.get_player(position)
        if player is None:
            return ActionResult(
                success=False, game=game, error=f"Unknown seat: {position}"
            )

        round_ = game.current_round()
        trick = round_.current_trick()
        result = play_card(card, player, trick, round_.trump_suit)
        if not result.success:
            return ActionResult(success=False, game=game, error=result.error)

        events = []
        play_event = {
            "event": "play",
            "game_id": game_id,
            "round": round_.round_number,
            "trick": trick.trick_number,
            "position": position,
            "card": card.compact(),
            "hand_remaining": len(player.hand),
        }
        events.append(play_event)
        logger.info(json.dumps(play_event))

        if result.belote_announcement:
            belote_event = {
                "event": "belote",
                "game_id": game_id,
                "position": position,
                "announcement": result.belote_announcement,
            }
            events.append(belote_event)
            logger.info(json.dumps(belote_event))

        if result.trick_completed:
            trick_event = {
                "event": "trick_end",
                "game_id": game_id,
                "trick": trick.trick_number,
                "winner": result.trick_winner,
                "points": trick.total_points(),
            }
            events.append(trick_event)
            logger.info(json.dumps(trick_event))

            if round_.is_completed():
                self._handle_round_end(game, events)
            else:
                round_.start_trick(result.trick_winner)
                game.current_player = result.trick_winner
        else:
            game.current_player = result.next_player

        game.updated_at = self._now()
        self._repo.save_game(game)
        game = self._repo.get_game(game_id)

        return ActionResult(success=True, game=game, events=events)

    def reset_game(self, game_id: str) -> ActionResult:
        """Clear scores, rounds and hands; the game can be dealt again."""
        game = self._repo.get_game(game_id)
        if game is None:
            return ActionResult(success=False, game=None, error="Game not found")

        game.reset_game()
        game.updated_at = self._now()
        self._repo.save_game(game)
        game = self._repo.get_game(game_id)

        event = {"event": "game_reset", "game_id": game_id}
        logger.info(json.dumps(event))
        return ActionResult(success=True, game=game, events=[event])

    def get_game(self, game_id: str) -> GameState | None:
        return self._repo.get_game(game_id)

    # --- Private helpers ---

    def _handle_round_end(self, game: GameState, events: list[dict]) -> None:
        """Finalize the round, fold it into game scores, check for a winner."""
        round_ = game.current_round()
        summary = game.complete_round(round_)
        game.current_player = None

        round_event = {
            "event": "round_end",
            "game_id": game.game_id,
            "round": round_.round_number,
            "round_scores": {team: s.to_dict() for team, s in summary.items()},
            "scores": {team: s.game_score for team, s in game.team_scores.items()},
            "next_dealer": game.dealer,
        }
        events.append(round_event)
        logger.info(json.dumps(round_event))

        if game.is_game_completed():
            game.phase = PHASE_FINISHED
            end_event = {
                "event": "game_end",
                "game_id": game.game_id,
                "winner": game.winner,
                "final_scores": {
                    team: s.game_score for team, s in game.team_scores.items()
                },
            }
            events.append(end_event)
            logger.info(json.dumps(end_event))
        else:
            game.phase = PHASE_ROUND_END

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()
