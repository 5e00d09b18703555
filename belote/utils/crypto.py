"""Random utilities for Belote."""

from __future__ import annotations

import hashlib
import random
import secrets
import uuid
from collections.abc import Callable
from datetime import date


def create_rng(seed: int | None = None) -> random.Random:
    """Create a Random instance.

    If seed is provided, returns a deterministic Random (for tests/replay).
    If seed is None, returns SystemRandom (cryptographically secure).
    """
    if seed is not None:
        return random.Random(seed)
    return secrets.SystemRandom()


def random_source(rng: random.Random) -> Callable[[], float]:
    """Adapt an RNG to the ``() -> float in [0, 1)`` shape the deck consumes."""
    return rng.random


def seeded_source(seed: int) -> Callable[[], float]:
    return random_source(random.Random(seed))


def daily_seed(day: date | None = None) -> int:
    """Stable integer seed for a calendar day, so everyone gets the same deals."""
    day = day or date.today()
    digest = hashlib.sha256(day.isoformat().encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


def new_game_id() -> str:
    return str(uuid.uuid4())
