"""Tests for game state: dealer rotation, score folding and game end."""

import pytest

from belote.game.errors import InvalidStateError
from belote.game.models import GameSettings
from belote.game.state import GameState
from belote.utils.constants import (
    CLUBS,
    EAST,
    HEARTS,
    NORTH,
    PHASE_DEALING,
    PHASE_FINISHED,
    SOUTH,
    TEAM_EW,
    TEAM_NS,
    TOTAL_CARD_POINTS,
    WEST,
)
from belote.utils.crypto import create_rng, random_source
from tests.conftest import play_out_round


def played_round(game, seed, trump=CLUBS):
    round_ = game.start_new_round(trump)
    rng = create_rng(seed)
    round_.deal_cards(random_source(rng))
    play_out_round(round_, rng, game.get_next_position(game.dealer))
    return round_


class TestNewGame:
    def test_defaults(self):
        game = GameState("g1")
        assert game.dealer == SOUTH
        assert game.phase == PHASE_DEALING
        assert game.winner is None
        assert game.human_player().position == SOUTH
        assert len(game.ai_players()) == 3
        assert game.get_team_score(TEAM_NS).game_score == 0

    def test_start_round_resets_players(self):
        game = GameState("g1")
        game.players[NORTH].announce_belote()
        round_ = game.start_new_round(HEARTS)
        assert round_.round_number == 1
        assert round_.dealer == SOUTH
        assert round_.trump_suit == HEARTS
        assert not game.players[NORTH].belote_announced
        assert game.current_round() is round_

    def test_round_shares_players(self):
        game = GameState("g1")
        round_ = game.start_new_round(CLUBS)
        assert round_.players[WEST] is game.players[WEST]


class TestDealerRotation:
    def test_rotates_each_round(self):
        game = GameState("g1")
        dealers = []
        for _ in range(5):
            round_ = game.start_new_round(CLUBS)
            dealers.append(round_.dealer)
            game.complete_round(round_)
        assert dealers == [SOUTH, WEST, NORTH, EAST, SOUTH]

    def test_position_helpers(self):
        game = GameState("g1")
        assert game.get_next_position(NORTH) == EAST
        assert game.get_previous_position(WEST) == SOUTH


class TestScoreFolding:
    def test_round_added_to_game_score(self):
        game = GameState("g1")
        round_ = played_round(game, 1)
        summary = game.complete_round(round_)
        ns = game.team_scores[TEAM_NS].game_score
        ew = game.team_scores[TEAM_EW].game_score
        assert ns == summary[TEAM_NS].total
        assert ew == summary[TEAM_EW].total
        assert summary[TEAM_NS].card_points + summary[TEAM_EW].card_points == TOTAL_CARD_POINTS
        assert game.round_history == [summary]

    def test_update_twice_credits_once(self):
        game = GameState("g1")
        round_ = played_round(game, 2)
        game.update_scores_from_round(round_)
        before = {t: s.game_score for t, s in game.team_scores.items()}
        assert game.update_scores_from_round(round_) == {}
        assert {t: s.game_score for t, s in game.team_scores.items()} == before
        assert len(game.round_history) == 1

    def test_complete_twice_rotates_once(self):
        game = GameState("g1")
        round_ = played_round(game, 3)
        game.complete_round(round_)
        game.complete_round(round_)
        assert game.dealer == WEST


class TestGameEnd:
    def test_team_reaching_target_wins(self):
        game = GameState("g1", GameSettings(target_score=500))
        game.team_scores[TEAM_EW].game_score = 510
        game.team_scores[TEAM_NS].game_score = 300
        assert game.check_game_end() == TEAM_EW
        assert game.phase == PHASE_FINISHED
        assert game.is_game_completed()

    def test_below_target_continues(self):
        game = GameState("g1")
        game.team_scores[TEAM_NS].game_score = 999
        assert game.check_game_end() is None
        assert not game.is_game_completed()

    def test_tie_above_target_continues(self):
        game = GameState("g1")
        game.team_scores[TEAM_NS].game_score = 1010
        game.team_scores[TEAM_EW].game_score = 1010
        assert game.check_game_end() is None

    def test_no_round_after_game_over(self):
        game = GameState("g1")
        game.team_scores[TEAM_NS].game_score = 1000
        game.check_game_end()
        with pytest.raises(InvalidStateError):
            game.start_new_round(CLUBS)

    def test_low_target_ends_after_one_round(self):
        game = GameState("g1", GameSettings(target_score=1))
        game.complete_round(played_round(game, 4))
        ns = game.team_scores[TEAM_NS].game_score
        ew = game.team_scores[TEAM_EW].game_score
        if ns == ew:
            assert game.winner is None
        else:
            assert game.winner == (TEAM_NS if ns > ew else TEAM_EW)


class TestReset:
    def test_reset_game(self):
        game = GameState("g1")
        game.complete_round(played_round(game, 5))
        game.reset_game()
        assert game.rounds == []
        assert game.round_history == []
        assert game.dealer == SOUTH
        assert game.winner is None
        assert all(s.game_score == 0 for s in game.team_scores.values())
        assert all(p.hand.is_empty() for p in game.all_players())

    def test_stats(self):
        game = GameState("g1")
        stats = game.stats()
        assert stats["roundsPlayed"] == 0
        assert stats["targetScore"] == 1000
        assert stats["winner"] is None
