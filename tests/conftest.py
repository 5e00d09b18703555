"""Shared test fixtures and helpers for Belote."""

from __future__ import annotations

import random

import pytest

from belote.db.memory import InMemoryGameRepository
from belote.game.engine import GameEngine, play_card
from belote.game.models import Card, play_order
from belote.game.round import Round
from belote.game.trick import Trick
from belote.game.validator import legal_cards
from belote.utils.constants import TRICKS_PER_ROUND
from belote.utils.crypto import create_rng


def c(code: str) -> Card:
    """Shorthand to create a card from compact notation."""
    return Card.from_compact(code)


def build_trick(leader: str, trump: str, codes: list[str], number: int = 1) -> Trick:
    """Trick led by ``leader`` with ``codes`` played in rotation."""
    trick = Trick(number, leader, trump)
    for position, code in zip(play_order(leader), codes):
        trick.add_play(position, c(code))
    return trick


def play_out_round(round_: Round, rng: random.Random, leader: str) -> None:
    """Play all eight tricks with random legal cards, winner leading next."""
    for _ in range(TRICKS_PER_ROUND):
        trick = round_.start_trick(leader)
        while not trick.completed:
            player = round_.players[trick.next_player()]
            card = rng.choice(legal_cards(player.hand, trick, round_.trump_suit))
            result = play_card(card, player, trick, round_.trump_suit)
            assert result.success, result.error
        leader = trick.winner()


@pytest.fixture
def game_repo():
    return InMemoryGameRepository()


@pytest.fixture
def engine(game_repo):
    return GameEngine(game_repo, create_rng(42))
