"""Deck operations for Belote: creation, shuffle, deal."""

from __future__ import annotations

from collections.abc import Callable

from belote.game.errors import InsufficientCardsError
from belote.game.models import Card
from belote.utils.constants import RANKS, SUITS


def create_deck() -> list[Card]:
    """Create the 32-card Belote deck (8 ranks x 4 suits), in a fixed order."""
    return [Card(suit=suit, rank=rank) for suit in SUITS for rank in RANKS]


def shuffle_cards(cards: list[Card], random_fn: Callable[[], float]) -> list[Card]:
    """Fisher-Yates shuffle driven by ``random_fn`` (floats in [0, 1)).

    Returns a new list; the same source sequence always yields the same order.
    """
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(random_fn() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


class Deck:
    """The 32 cards not yet dealt this round."""

    def __init__(self) -> None:
        self._cards: list[Card] = []
        self.initialize()

    def initialize(self) -> None:
        self._cards = create_deck()

    def reset(self) -> None:
        self.initialize()

    def shuffle(self, random_fn: Callable[[], float]) -> None:
        """Shuffle in place using only the injected random source."""
        self._cards = shuffle_cards(self._cards, random_fn)

    def deal(self, num_cards: int) -> list[Card]:
        """Remove and return the top ``num_cards`` cards.

        Raises InsufficientCardsError if fewer remain.
        """
        if num_cards < 0:
            raise ValueError(f"Cannot deal a negative number of cards: {num_cards}")
        if num_cards > len(self._cards):
            raise InsufficientCardsError(
                f"Cannot deal {num_cards} cards, only {len(self._cards)} remaining"
            )
        dealt = self._cards[:num_cards]
        self._cards = self._cards[num_cards:]
        return dealt

    @property
    def cards(self) -> list[Card]:
        return list(self._cards)

    def size(self) -> int:
        return len(self._cards)

    def is_empty(self) -> bool:
        return not self._cards

    def total_points(self, trump_suit: str) -> int:
        """Card points left in the deck (152 for a full deck, any trump)."""
        return sum(c.points(trump_suit) for c in self._cards)

    def __len__(self) -> int:
        return len(self._cards)
