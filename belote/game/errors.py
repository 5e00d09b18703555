"""Exceptions raised for programming and state errors.

Invalid player input (wrong card, wrong turn) is never raised; it is
returned as a failed result by the engine. These exceptions signal a bug
in the orchestrating layer.
"""

from __future__ import annotations


class BeloteError(ValueError):
    """Base class for Belote state errors."""


class InvalidStateError(BeloteError):
    """Operation attempted on a trick, round or game in the wrong state."""


class OutOfTurnError(InvalidStateError):
    """A play was added to a trick by a seat other than the expected one."""


class InsufficientCardsError(InvalidStateError):
    """More cards were requested from the deck than remain."""
