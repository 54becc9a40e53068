from __future__ import annotations

import threading
import uuid
from typing import Dict, Optional

from ...engine.game import Game


class GameSessions:
    """Games in progress, keyed by an opaque ``game_id``.

    The dictionary is guarded by a lock; the games themselves are not, so two
    concurrent requests on the same game see whichever finished last.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._games: Dict[str, Game] = {}

    def open(self, game: Game) -> str:
        game_id = uuid.uuid4().hex
        with self._lock:
            self._games[game_id] = game
        return game_id

    def lookup(self, game_id: str) -> Optional[Game]:
        with self._lock:
            return self._games.get(game_id)

    def replace(self, game_id: str, game: Game) -> None:
        with self._lock:
            if game_id not in self._games:
                raise KeyError(game_id)
            self._games[game_id] = game

    def close(self, game_id: str) -> bool:
        with self._lock:
            return self._games.pop(game_id, None) is not None
