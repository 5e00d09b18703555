"""Data models for Belote game state."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from belote.utils.constants import (
    AI_LEVELS,
    BELOTE_BONUS,
    DEFAULT_AI_LEVEL,
    DEFAULT_TARGET_SCORE,
    EAST,
    JACK,
    KING,
    LAST_TRICK_BONUS,
    NINE,
    NORMAL_ORDER,
    NORMAL_POINTS,
    NORTH,
    POSITION_NAMES,
    POSITIONS,
    QUEEN,
    RANK_NAMES,
    SOUTH,
    SUIT_SYMBOLS,
    SUITS,
    TEAM_EW,
    TEAM_NS,
    TRUMP_ORDER,
    TRUMP_POINTS,
    WEST,
)


# --- Seats ---


def next_position(position: str) -> str:
    """Next seat clockwise (S -> W -> N -> E -> S)."""
    return POSITIONS[(POSITIONS.index(position) + 1) % len(POSITIONS)]


def previous_position(position: str) -> str:
    return POSITIONS[(POSITIONS.index(position) - 1) % len(POSITIONS)]


def partner_of(position: str) -> str:
    return POSITIONS[(POSITIONS.index(position) + 2) % len(POSITIONS)]


def are_partners(pos1: str, pos2: str) -> bool:
    return pos1 != pos2 and partner_of(pos1) == pos2


def team_of(position: str) -> str:
    return TEAM_NS if position in (NORTH, SOUTH) else TEAM_EW


def play_order(start: str) -> list[str]:
    """All four seats in rotation, starting with ``start``."""
    idx = POSITIONS.index(start)
    return [POSITIONS[(idx + i) % len(POSITIONS)] for i in range(len(POSITIONS))]


def deal_order(dealer: str) -> list[str]:
    """Seats in dealing order: the seat left of the dealer first, dealer last."""
    return play_order(next_position(dealer))


# --- Cards ---


@dataclass(frozen=True)
class Card:
    """A single playing card.

    Compact encoding examples: "7c" = 7 of clubs, "10h" = 10 of hearts,
    "Js" = Jack of spades, "Ad" = Ace of diamonds.
    """

    suit: str  # "c", "d", "h", "s"
    rank: int  # 7-10, 11=J, 12=Q, 13=K, 14=A

    def is_trump(self, trump_suit: str) -> bool:
        return self.suit == trump_suit

    def is_trump_jack(self, trump_suit: str) -> bool:
        return self.suit == trump_suit and self.rank == JACK

    def is_trump_nine(self, trump_suit: str) -> bool:
        return self.suit == trump_suit and self.rank == NINE

    def is_belote_card(self, trump_suit: str) -> bool:
        """King or Queen of trump."""
        return self.suit == trump_suit and self.rank in (KING, QUEEN)

    def points(self, trump_suit: str) -> int:
        """Point value of this card for the given trump."""
        if self.is_trump(trump_suit):
            return TRUMP_POINTS[self.rank]
        return NORMAL_POINTS[self.rank]

    def order(self, trump_suit: str) -> int:
        """Playing strength (higher = stronger) within its trump status."""
        if self.is_trump(trump_suit):
            return TRUMP_ORDER[self.rank]
        return NORMAL_ORDER[self.rank]

    def beats(self, other: Card, trump_suit: str, lead_suit: str) -> bool:
        """True if this card takes ``other`` in a trick led with ``lead_suit``."""
        self_trump = self.is_trump(trump_suit)
        other_trump = other.is_trump(trump_suit)
        if self_trump and not other_trump:
            return True
        if other_trump and not self_trump:
            return False
        if self_trump and other_trump:
            return self.order(trump_suit) > other.order(trump_suit)

        # Neither is trump: only a card following the lead can win
        if self.suit != lead_suit:
            return False
        if other.suit != lead_suit:
            return True
        return self.order(trump_suit) > other.order(trump_suit)

    def compact(self) -> str:
        """Encode to compact string."""
        return f"{RANK_NAMES[self.rank]}{self.suit}"

    @classmethod
    def from_compact(cls, code: str) -> Card:
        """Decode from compact string ("7c", "10h", "Qs", "Ad")."""
        code = code.strip()
        if len(code) < 2:
            raise ValueError(f"Invalid card code: {code!r}")
        suit = code[-1].lower()
        rank_str = code[:-1].upper()
        rank_map = {v: k for k, v in RANK_NAMES.items()}
        if suit not in SUITS or rank_str not in rank_map:
            raise ValueError(f"Invalid card code: {code!r}")
        return cls(suit=suit, rank=rank_map[rank_str])

    def display(self) -> str:
        """Unicode display string."""
        return f"{RANK_NAMES[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    def to_dict(self) -> dict:
        return {"suit": self.suit, "rank": self.rank}

    @classmethod
    def from_dict(cls, d: dict) -> Card:
        return cls(suit=d["suit"], rank=d["rank"])

    def __str__(self) -> str:
        return self.display()


class Hand:
    """Cards held by one seat for the current round."""

    def __init__(self, cards: list[Card] | None = None) -> None:
        self._cards: list[Card] = list(cards or [])

    @property
    def cards(self) -> list[Card]:
        return list(self._cards)

    def add_card(self, card: Card) -> None:
        self._cards.append(card)

    def add_cards(self, cards: list[Card]) -> None:
        self._cards.extend(cards)

    def remove_card(self, card: Card) -> Card | None:
        """Remove and return ``card``, or None if it is not in the hand."""
        for i, held in enumerate(self._cards):
            if held == card:
                return self._cards.pop(i)
        return None

    def remove_cards(self, cards: list[Card]) -> list[Card]:
        """Remove several cards; returns those that were actually removed."""
        removed = []
        for card in cards:
            taken = self.remove_card(card)
            if taken is not None:
                removed.append(taken)
        return removed

    def has_card(self, card: Card) -> bool:
        return card in self._cards

    def cards_of_suit(self, suit: str) -> list[Card]:
        return [c for c in self._cards if c.suit == suit]

    def cards_following_suit(self, lead_suit: str) -> list[Card]:
        return self.cards_of_suit(lead_suit)

    def trump_cards(self, trump_suit: str) -> list[Card]:
        return [c for c in self._cards if c.is_trump(trump_suit)]

    def non_trump_cards(self, trump_suit: str) -> list[Card]:
        return [c for c in self._cards if not c.is_trump(trump_suit)]

    def can_follow_suit(self, lead_suit: str) -> bool:
        return any(c.suit == lead_suit for c in self._cards)

    def has_trump(self, trump_suit: str) -> bool:
        return any(c.is_trump(trump_suit) for c in self._cards)

    def has_belote(self, trump_suit: str) -> bool:
        """True if the hand currently holds both King and Queen of trump."""
        ranks = {c.rank for c in self.trump_cards(trump_suit)}
        return KING in ranks and QUEEN in ranks

    def belote_cards(self, trump_suit: str) -> list[Card]:
        if not self.has_belote(trump_suit):
            return []
        return [c for c in self.trump_cards(trump_suit) if c.rank in (KING, QUEEN)]

    def highest_trump(self, trump_suit: str) -> Card | None:
        trumps = self.trump_cards(trump_suit)
        if not trumps:
            return None
        return max(trumps, key=lambda c: c.order(trump_suit))

    def lowest_card(self, trump_suit: str) -> Card | None:
        """Cheapest card to give away; non-trump preferred on equal points."""
        if not self._cards:
            return None
        lowest = self._cards[0]
        for card in self._cards[1:]:
            lowest_pts = lowest.points(trump_suit)
            card_pts = card.points(trump_suit)
            if card_pts < lowest_pts:
                lowest = card
            elif card_pts == lowest_pts and lowest.is_trump(trump_suit) and not card.is_trump(trump_suit):
                lowest = card
        return lowest

    def sort(self, trump_suit: str) -> None:
        """Trumps first, then by suit, strongest first. Presentation only."""
        self._cards.sort(
            key=lambda c: (not c.is_trump(trump_suit), c.suit, -c.order(trump_suit))
        )

    def total_points(self, trump_suit: str) -> int:
        return sum(c.points(trump_suit) for c in self._cards)

    def size(self) -> int:
        return len(self._cards)

    def is_empty(self) -> bool:
        return not self._cards

    def clear(self) -> None:
        self._cards = []

    def clone(self) -> Hand:
        return Hand(self._cards)

    def to_list(self) -> list[str]:
        return [c.compact() for c in self._cards]

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self):
        return iter(list(self._cards))

    def __contains__(self, card: object) -> bool:
        return card in self._cards

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self._cards == other._cards

    def __repr__(self) -> str:
        return f"Hand({' '.join(self.to_list())})"


@dataclass
class Player:
    """One seat at the table."""

    player_id: str
    position: str
    name: str
    is_human: bool = False
    ai_level: str | None = None
    hand: Hand = field(default_factory=Hand)
    belote_announced: bool = False
    rebelote_announced: bool = False

    @property
    def team(self) -> str:
        return team_of(self.position)

    @property
    def partner_position(self) -> str:
        return partner_of(self.position)

    @property
    def opponent_positions(self) -> list[str]:
        return [p for p in POSITIONS if team_of(p) != self.team]

    def is_teammate(self, other_position: str) -> bool:
        return are_partners(self.position, other_position)

    def is_opponent(self, other_position: str) -> bool:
        return team_of(other_position) != self.team

    def announce_belote(self) -> None:
        self.belote_announced = True

    def announce_rebelote(self) -> None:
        self.rebelote_announced = True

    def has_complete_belote(self) -> bool:
        return self.belote_announced and self.rebelote_announced

    def reset_for_new_round(self) -> None:
        self.hand.clear()
        self.belote_announced = False
        self.rebelote_announced = False

    @classmethod
    def human(cls, player_id: str, position: str, name: str) -> Player:
        return cls(player_id=player_id, position=position, name=name, is_human=True)

    @classmethod
    def ai(cls, player_id: str, position: str, name: str, ai_level: str) -> Player:
        return cls(player_id=player_id, position=position, name=name, ai_level=ai_level)

    def __str__(self) -> str:
        kind = "Human" if self.is_human else f"AI({self.ai_level or 'unknown'})"
        return f"{self.name} ({POSITION_NAMES[self.position]}, {kind})"


# --- Scores ---


@dataclass(frozen=True)
class RoundScore:
    """One team's score breakdown for a single round."""

    card_points: int = 0
    belote_bonus: int = 0
    last_trick_bonus: int = 0

    @property
    def total(self) -> int:
        return self.card_points + self.belote_bonus + self.last_trick_bonus

    def to_dict(self) -> dict:
        return {
            "cardPoints": self.card_points,
            "beloteBonus": self.belote_bonus,
            "lastTrickBonus": self.last_trick_bonus,
            "total": self.total,
        }


@dataclass
class TeamScore:
    """Cumulative game score plus the current round's components for one team."""

    team: str
    game_score: int = 0
    card_points: int = 0
    belote_bonus: int = 0
    last_trick_bonus: int = 0

    def round_total(self) -> int:
        return self.card_points + self.belote_bonus + self.last_trick_bonus

    def add_card_points(self, points: int) -> None:
        self.card_points += points

    def add_belote_bonus(self, points: int = BELOTE_BONUS) -> None:
        self.belote_bonus += points

    def add_last_trick_bonus(self, points: int = LAST_TRICK_BONUS) -> None:
        self.last_trick_bonus += points

    def current_round_data(self) -> RoundScore:
        return RoundScore(
            card_points=self.card_points,
            belote_bonus=self.belote_bonus,
            last_trick_bonus=self.last_trick_bonus,
        )

    def finalize_round(self) -> RoundScore:
        """Move the round total into the game score and reset the round."""
        data = self.current_round_data()
        self.game_score += data.total
        self.reset_round()
        return data

    def reset_round(self) -> None:
        self.card_points = 0
        self.belote_bonus = 0
        self.last_trick_bonus = 0

    def reset_game(self) -> None:
        self.game_score = 0
        self.reset_round()

    def has_won(self, target_score: int) -> bool:
        return self.game_score >= target_score

    def clone(self) -> TeamScore:
        return copy.copy(self)

    def to_dict(self) -> dict:
        return {
            "team": self.team,
            "gameScore": self.game_score,
            "cardPoints": self.card_points,
            "beloteBonus": self.belote_bonus,
            "lastTrickBonus": self.last_trick_bonus,
        }


# --- Settings ---


@dataclass
class GameSettings:
    """Settings handed in by the presentation layer."""

    target_score: int = DEFAULT_TARGET_SCORE
    trump_suit: str | None = None
    ai_level: str = DEFAULT_AI_LEVEL

    def __post_init__(self) -> None:
        if self.target_score <= 0:
            raise ValueError(f"Target score must be positive, got {self.target_score}")
        if self.trump_suit is not None and self.trump_suit not in SUITS:
            raise ValueError(f"Unknown trump suit: {self.trump_suit!r}")
        if self.ai_level not in AI_LEVELS:
            raise ValueError(f"Unknown AI level: {self.ai_level!r}")

    def to_dict(self) -> dict:
        return {
            "targetScore": self.target_score,
            "trumpSuit": self.trump_suit,
            "aiLevel": self.ai_level,
        }

    @classmethod
    def from_dict(cls, d: dict | None) -> GameSettings:
        d = d or {}
        return cls(
            target_score=d.get("targetScore", DEFAULT_TARGET_SCORE),
            trump_suit=d.get("trumpSuit"),
            ai_level=d.get("aiLevel", DEFAULT_AI_LEVEL),
        )


def default_players(ai_level: str = DEFAULT_AI_LEVEL) -> dict[str, Player]:
    """Human in the South seat, AI opponents and partner elsewhere."""
    players = {SOUTH: Player.human("human", SOUTH, "You")}
    for i, position in enumerate([WEST, NORTH, EAST], start=1):
        players[position] = Player.ai(f"ai_{i}", position, f"Computer {i}", ai_level)
    return players
