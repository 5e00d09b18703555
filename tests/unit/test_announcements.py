"""Tests for belote / rebelote announcements."""

from belote.game.announcements import (
    belote_bonus,
    belote_pair,
    belote_status,
    check_belote_announcement,
    players_with_belote,
    process_belote_announcement,
    validate_belote_distribution,
)
from belote.game.engine import play_card
from belote.game.models import Hand, Player
from belote.game.trick import Trick
from belote.utils.constants import CLUBS, EAST, NORTH, SOUTH, TEAM_EW, TEAM_NS, WEST
from tests.conftest import c


def player(position, *codes):
    return Player(
        player_id=position, position=position, name=position,
        hand=Hand([c(code) for code in codes]),
    )


class TestCheckAnnouncement:
    def test_first_of_pair_is_belote(self):
        p = player(SOUTH, "Kc", "Qc", "7h")
        assert check_belote_announcement(c("Kc"), p, CLUBS) == "belote"
        assert check_belote_announcement(c("Qc"), p, CLUBS) == "belote"

    def test_check_does_not_mutate(self):
        p = player(SOUTH, "Kc", "Qc")
        check_belote_announcement(c("Kc"), p, CLUBS)
        assert not p.belote_announced

    def test_single_half_announces_nothing(self):
        p = player(SOUTH, "Kc", "7h")
        assert check_belote_announcement(c("Kc"), p, CLUBS) is None

    def test_non_belote_card(self):
        p = player(SOUTH, "Kc", "Qc", "Kh")
        assert check_belote_announcement(c("Kh"), p, CLUBS) is None
        assert check_belote_announcement(c("Jc"), p, CLUBS) is None

    def test_second_of_pair_is_rebelote(self):
        p = player(SOUTH, "Kc", "Qc")
        assert process_belote_announcement(c("Kc"), p, CLUBS) == "belote"
        p.hand.remove_card(c("Kc"))
        assert process_belote_announcement(c("Qc"), p, CLUBS) == "rebelote"
        assert p.has_complete_belote()

    def test_nothing_after_rebelote(self):
        p = player(SOUTH, "Qc")
        p.announce_belote()
        p.announce_rebelote()
        assert check_belote_announcement(c("Qc"), p, CLUBS) is None


class TestAnnouncementThroughPlay:
    def test_play_card_reports_belote_then_rebelote(self):
        p = player(SOUTH, "Kc", "Qc", "7h")
        first = Trick(1, SOUTH, CLUBS)
        assert play_card(c("Qc"), p, first, CLUBS).belote_announcement == "belote"
        assert p.belote_announced
        assert not p.hand.has_card(c("Qc"))

        second = Trick(2, SOUTH, CLUBS)
        assert play_card(c("Kc"), p, second, CLUBS).belote_announcement == "rebelote"
        assert p.rebelote_announced

    def test_rejected_play_announces_nothing(self):
        p = player(WEST, "Kc", "Qc", "7h")
        trick = Trick(1, SOUTH, CLUBS)
        trick.add_play(SOUTH, c("Ah"))
        result = play_card(c("Kc"), p, trick, CLUBS)
        assert not result.success
        assert not p.belote_announced


class TestBeloteHelpers:
    def test_belote_pair(self):
        assert belote_pair(c("Kc"), CLUBS) == c("Qc")
        assert belote_pair(c("Qc"), CLUBS) == c("Kc")
        assert belote_pair(c("Kh"), CLUBS) is None

    def test_players_with_belote(self):
        players = [player(SOUTH, "Kc", "Qc"), player(NORTH, "Kh", "Qh")]
        assert [p.position for p in players_with_belote(players, CLUBS)] == [SOUTH]

    def test_distribution(self):
        assert validate_belote_distribution([player(SOUTH, "Kc", "Qc")], CLUBS)
        split = [player(SOUTH, "Kc"), player(EAST, "Qc")]
        assert validate_belote_distribution(split, CLUBS)

    def test_bonus_all_or_nothing(self):
        p = player(EAST)
        p.announce_belote()
        assert belote_bonus([p], TEAM_EW) == 0
        p.announce_rebelote()
        assert belote_bonus([p], TEAM_EW) == 20
        assert belote_bonus([p], TEAM_NS) == 0

    def test_status(self):
        p = player(SOUTH, "Kc", "Qc")
        assert belote_status(p, CLUBS) == "Belote available (not announced)"
        p.announce_belote()
        assert belote_status(p, CLUBS) == "Belote announced (rebelote pending)"
        p.announce_rebelote()
        assert "+20" in belote_status(p, CLUBS)
        assert belote_status(player(SOUTH, "7h"), CLUBS) == "No belote"
