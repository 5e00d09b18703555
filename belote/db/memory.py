"""In-memory game repository for the engine, tests and local CLI."""

from __future__ import annotations

import copy

from belote.game.state import GameState


class InMemoryGameRepository:
    def __init__(self) -> None:
        self._games: dict[str, GameState] = {}

    def get_game(self, game_id: str) -> GameState | None:
        game = self._games.get(game_id)
        if game is None:
            return None
        return copy.deepcopy(game)

    def save_game(self, game: GameState) -> None:
        existing = self._games.get(game.game_id)
        if existing is not None and existing.version != game.version:
            raise ValueError(
                f"Version conflict: expected {game.version}, found {existing.version}"
            )
        saved = copy.deepcopy(game)
        saved.version = game.version + 1
        self._games[game.game_id] = saved

    def delete_game(self, game_id: str) -> None:
        self._games.pop(game_id, None)
