"""Repository protocol interface for Belote game state."""

from __future__ import annotations

from typing import Protocol

from belote.game.state import GameState


class GameRepository(Protocol):
    def get_game(self, game_id: str) -> GameState | None:
        ...

    def save_game(self, game: GameState) -> None:
        ...

    def delete_game(self, game_id: str) -> None:
        ...
