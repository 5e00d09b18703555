"""Tests for the game engine."""

import json
import logging

import pytest

from belote.game.models import Card, GameSettings
from belote.utils.constants import (
    EAST,
    HEARTS,
    NORTH,
    PHASE_DEALING,
    PHASE_PLAY,
    PHASE_ROUND_END,
    SOUTH,
    SUITS,
    TEAM_EW,
    TEAM_NS,
    TOTAL_CARD_POINTS,
    WEST,
)


@pytest.fixture
def game_with_round(engine):
    """Game with a round dealt and the first trick open."""
    game = engine.create_game(game_id="test")
    result = engine.start_round(game.game_id)
    assert result.success
    return result.game


def play_first_legal(engine, game):
    position = game.current_player
    card = engine.legal_cards(game.game_id, position)[0]
    result = engine.process_play(game.game_id, position, card)
    assert result.success, result.error
    return result


def finish_round(engine, game):
    while game.phase == PHASE_PLAY:
        game = play_first_legal(engine, game).game
    return game


class TestCreateGame:
    def test_creates_game(self, engine):
        game = engine.create_game()
        assert game is not None
        assert game.phase == PHASE_DEALING
        assert game.dealer == SOUTH
        assert game.settings.target_score == 1000
        assert engine.get_game(game.game_id) is not None

    def test_settings_dict(self, engine):
        game = engine.create_game({"targetScore": 500, "trumpSuit": "s"})
        assert game.settings.target_score == 500
        assert game.settings.trump_suit == "s"

    def test_settings_object(self, engine):
        game = engine.create_game(GameSettings(target_score=300), game_id="fixed")
        assert game.game_id == "fixed"
        assert game.settings.target_score == 300

    def test_invalid_settings(self, engine):
        with pytest.raises(ValueError):
            engine.create_game({"targetScore": -5})

    def test_logs_creation(self, engine, caplog):
        with caplog.at_level(logging.INFO, logger="belote.engine"):
            engine.create_game(game_id="logged")
        events = [json.loads(r.message) for r in caplog.records]
        assert events[0]["event"] == "game_created"
        assert events[0]["game_id"] == "logged"


class TestStartRound:
    def test_deals_eight_cards(self, game_with_round):
        for player in game_with_round.all_players():
            assert len(player.hand) == 8

    def test_left_of_dealer_leads(self, game_with_round):
        game = game_with_round
        assert game.phase == PHASE_PLAY
        assert game.current_player == WEST
        trick = game.current_round().current_trick()
        assert trick.trick_number == 1
        assert trick.leader == WEST

    def test_random_trump(self, game_with_round):
        assert game_with_round.current_round().trump_suit in SUITS

    def test_fixed_trump(self, engine):
        game = engine.create_game({"trumpSuit": HEARTS})
        result = engine.start_round(game.game_id)
        assert result.game.current_round().trump_suit == HEARTS

    def test_round_start_event(self, engine):
        game = engine.create_game()
        result = engine.start_round(game.game_id)
        event = result.events[0]
        assert event["event"] == "round_start"
        assert event["first_player"] == WEST
        assert event["players_cards"] == {SOUTH: 8, WEST: 8, NORTH: 8, EAST: 8}

    def test_game_not_found(self, engine):
        result = engine.start_round("missing")
        assert not result.success
        assert result.error == "Game not found"

    def test_round_in_progress(self, engine, game_with_round):
        result = engine.start_round(game_with_round.game_id)
        assert not result.success
        assert "in progress" in result.error


class TestLegalCards:
    def test_leader_may_play_anything(self, engine, game_with_round):
        game = game_with_round
        legal = engine.legal_cards(game.game_id, WEST)
        assert set(legal) == set(game.players[WEST].hand)

    def test_empty_when_not_your_turn(self, engine, game_with_round):
        assert engine.legal_cards(game_with_round.game_id, SOUTH) == []

    def test_empty_before_deal(self, engine):
        game = engine.create_game()
        assert engine.legal_cards(game.game_id, WEST) == []


class TestProcessPlay:
    def test_valid_play_advances_turn(self, engine, game_with_round):
        game = game_with_round
        card = game.players[WEST].hand.cards[0]
        result = engine.process_play(game.game_id, WEST, card)
        assert result.success
        assert result.game.current_player == NORTH
        assert card not in result.game.players[WEST].hand
        assert result.events[0]["event"] == "play"
        assert result.events[0]["card"] == card.compact()

    def test_wrong_turn(self, engine, game_with_round):
        game = game_with_round
        card = game.players[SOUTH].hand.cards[0]
        result = engine.process_play(game.game_id, SOUTH, card)
        assert not result.success
        assert "turn" in result.error

    def test_card_not_in_hand(self, engine, game_with_round):
        game = game_with_round
        card = game.players[SOUTH].hand.cards[0]
        result = engine.process_play(game.game_id, WEST, card)
        assert not result.success
        assert "does not hold" in result.error

    def test_rejected_play_leaves_state(self, engine, game_with_round):
        game = game_with_round
        card = game.players[SOUTH].hand.cards[0]
        engine.process_play(game.game_id, WEST, card)
        stored = engine.get_game(game.game_id)
        assert len(stored.players[WEST].hand) == 8
        assert stored.current_round().current_trick().is_empty()

    def test_illegal_card_rejected(self, engine, game_with_round):
        game = game_with_round
        found = False
        while game.phase == PHASE_PLAY:
            position = game.current_player
            legal = engine.legal_cards(game.game_id, position)
            illegal = [c for c in game.players[position].hand if c not in legal]
            if illegal:
                result = engine.process_play(game.game_id, position, illegal[0])
                assert not result.success
                assert "Cannot play" in result.error
                found = True
                break
            game = play_first_legal(engine, game).game
        assert found

    def test_unknown_seat(self, engine, game_with_round):
        game = game_with_round
        card = game.players[WEST].hand.cards[0]
        result = engine.process_play(game.game_id, "X", card)
        assert not result.success
        assert "Unknown seat" in result.error

    def test_no_round(self, engine):
        game = engine.create_game()
        result = engine.process_play(game.game_id, WEST, Card(suit="h", rank=7))
        assert not result.success
        assert result.error == "No round is being played"

    def test_trick_winner_leads_next(self, engine, game_with_round):
        game = game_with_round
        for _ in range(3):
            game = play_first_legal(engine, game).game
        result = play_first_legal(engine, game)
        trick_end = [e for e in result.events if e["event"] == "trick_end"]
        assert len(trick_end) == 1
        winner = trick_end[0]["winner"]
        round_ = result.game.current_round()
        assert round_.current_trick().trick_number == 2
        assert round_.current_trick().leader == winner
        assert result.game.current_player == winner


class TestRoundEnd:
    def test_full_round(self, engine, game_with_round):
        game = finish_round(engine, game_with_round)
        assert game.phase == PHASE_ROUND_END
        assert game.current_player is None
        assert game.dealer == WEST
        assert len(game.round_history) == 1
        summary = game.round_history[0]
        assert summary[TEAM_NS].card_points + summary[TEAM_EW].card_points == TOTAL_CARD_POINTS
        assert game.team_scores[TEAM_NS].game_score == summary[TEAM_NS].total

    def test_next_round_after_end(self, engine, game_with_round):
        game = finish_round(engine, game_with_round)
        result = engine.start_round(game.game_id)
        assert result.success
        assert result.game.current_round().round_number == 2
        assert result.game.current_player == NORTH

    def test_play_after_round_end_rejected(self, engine, game_with_round):
        game = finish_round(engine, game_with_round)
        card = game_with_round.players[WEST].hand.cards[0]
        result = engine.process_play(game.game_id, WEST, card)
        assert not result.success

    def test_game_over(self, engine):
        game = engine.create_game({"targetScore": 1})
        while not game.is_game_completed():
            game = engine.start_round(game.game_id).game
            game = finish_round(engine, game)
        result = engine.start_round(game.game_id)
        assert not result.success
        assert result.error == "The game is over"


class TestResetGame:
    def test_reset(self, engine, game_with_round):
        game = finish_round(engine, game_with_round)
        result = engine.reset_game(game.game_id)
        assert result.success
        assert result.game.rounds == []
        assert result.game.dealer == SOUTH
        assert all(s.game_score == 0 for s in result.game.team_scores.values())
        assert result.events == [{"event": "game_reset", "game_id": game.game_id}]

    def test_reset_missing(self, engine):
        assert not engine.reset_game("missing").success
