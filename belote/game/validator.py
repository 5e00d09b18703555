"""Legal-move engine for Belote.

Given a hand, the trick in progress and the trump suit, computes exactly
which cards may be played. The obligations are checked in a fixed order:

1. Leading: anything goes.
2. Must follow the lead suit when able, whatever else the hand holds.
3. Unable to follow a trump lead: free play.
4. Unable to follow a plain lead:
   - partner currently holds the trick: free play (discard or trump);
   - otherwise must cut with a trump, overcutting the best trump already
     in the trick when the hand can;
   - no trump at all: discard any card.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from belote.game.errors import InvalidStateError
from belote.game.models import Card, Hand, Player, are_partners
from belote.game.trick import Trick


@dataclass
class ValidationResult:
    valid: bool
    error: str | None = None


@dataclass
class PlayOptions:
    """Summary of a seat's obligations for the current trick."""

    legal_cards: list[Card] = field(default_factory=list)
    must_follow_suit: bool = False
    must_cut: bool = False
    must_overcut: bool = False
    has_trump: bool = False

    @property
    def has_choice(self) -> bool:
        return len(self.legal_cards) > 1


def _held(hand: Hand | Iterable[Card]) -> list[Card]:
    return list(hand)


def is_partner_winning(trick: Trick) -> bool:
    """True if the partner of the seat about to play holds the trick so far."""
    next_seat = trick.next_player()
    current = trick.current_winner()
    if next_seat is None or current is None:
        return False
    return are_partners(current, next_seat)


def legal_cards(hand: Hand | Iterable[Card], trick: Trick, trump_suit: str) -> list[Card]:
    """All cards the seat to play may legally put on ``trick``.

    An empty hand yields an empty list (no move). Querying a completed
    trick is a programming error.
    """
    if trick.completed:
        raise InvalidStateError("Cannot compute legal cards for a completed trick")

    held = _held(hand)
    if not held or trick.is_empty():
        return held

    lead = trick.lead_suit()
    following = [c for c in held if c.suit == lead]
    if following:
        return following

    if lead == trump_suit:
        return held

    if is_partner_winning(trick):
        return held

    trumps = [c for c in held if c.is_trump(trump_suit)]
    if trumps:
        highest = trick.highest_trump()
        if highest is None:
            return trumps
        overcuts = [c for c in trumps if c.order(trump_suit) > highest.order(trump_suit)]
        return overcuts or trumps

    return [c for c in held if not c.is_trump(trump_suit)]


def is_valid_play(card: Card, hand: Hand | Iterable[Card], trick: Trick, trump_suit: str) -> bool:
    held = _held(hand)
    if card not in held:
        return False
    return card in legal_cards(held, trick, trump_suit)


def must_follow_suit(hand: Hand | Iterable[Card], trick: Trick) -> bool:
    lead = trick.lead_suit()
    if lead is None:
        return False
    return any(c.suit == lead for c in _held(hand))


def must_cut(hand: Hand | Iterable[Card], trick: Trick, trump_suit: str) -> bool:
    """True if the seat cannot follow a plain lead and has to play trump."""
    lead = trick.lead_suit()
    if lead is None or lead == trump_suit:
        return False
    held = _held(hand)
    if any(c.suit == lead for c in held):
        return False
    if is_partner_winning(trick):
        return False
    return any(c.is_trump(trump_suit) for c in held)


def must_overcut(hand: Hand | Iterable[Card], trick: Trick, trump_suit: str) -> bool:
    """True if the seat must cut and holds a trump above the trick's best trump."""
    if not must_cut(hand, trick, trump_suit):
        return False
    highest = trick.highest_trump()
    if highest is None:
        return False
    return any(
        c.is_trump(trump_suit) and c.order(trump_suit) > highest.order(trump_suit)
        for c in _held(hand)
    )


def follow_suit_cards(hand: Hand | Iterable[Card], trick: Trick) -> list[Card]:
    lead = trick.lead_suit()
    if lead is None:
        return []
    return [c for c in _held(hand) if c.suit == lead]


def overcut_cards(hand: Hand | Iterable[Card], trick: Trick, trump_suit: str) -> list[Card]:
    """Trumps that satisfy an overcut obligation; empty when there is none."""
    if not must_overcut(hand, trick, trump_suit):
        return []
    return [c for c in legal_cards(hand, trick, trump_suit) if c.is_trump(trump_suit)]


def only_legal_card(hand: Hand | Iterable[Card], trick: Trick, trump_suit: str) -> Card | None:
    """The forced card when exactly one play is legal, else None."""
    legal = legal_cards(hand, trick, trump_suit)
    if len(legal) == 1:
        return legal[0]
    return None


def play_options(hand: Hand | Iterable[Card], trick: Trick, trump_suit: str) -> PlayOptions:
    held = _held(hand)
    return PlayOptions(
        legal_cards=legal_cards(held, trick, trump_suit),
        must_follow_suit=must_follow_suit(held, trick),
        must_cut=must_cut(held, trick, trump_suit),
        must_overcut=must_overcut(held, trick, trump_suit),
        has_trump=any(c.is_trump(trump_suit) for c in held),
    )


def check_play(card: Card, player: Player, trick: Trick, trump_suit: str) -> ValidationResult:
    """Validate one play by ``player``. Returns an error message instead of raising."""
    if not player.hand.has_card(card):
        return ValidationResult(
            False, error=f"{player.name} does not hold {card.display()}"
        )

    expected = trick.next_player()
    if expected != player.position:
        return ValidationResult(
            False, error=f"Not {player.name}'s turn to play (expected {expected})"
        )

    if card in legal_cards(player.hand, trick, trump_suit):
        return ValidationResult(True)

    if must_follow_suit(player.hand, trick):
        reason = "must follow suit"
    elif must_overcut(player.hand, trick, trump_suit):
        reason = "must overcut"
    elif must_cut(player.hand, trick, trump_suit):
        reason = "must cut"
    else:
        reason = "not allowed by the rules"
    return ValidationResult(False, error=f"Cannot play {card.display()}: {reason}")
