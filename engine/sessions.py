from __future__ import annotations

import threading
from collections import OrderedDict
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, Optional

from .ai import AIPlayer
from .game import Game

DEFAULT_MAX_SESSIONS = 1000


class _Slot:
    __slots__ = ("game", "lock")

    def __init__(self, game: Game) -> None:
        self.game = game
        self.lock = threading.Lock()


class SessionStore:
    """Independent games keyed by session id.

    Every access to a game happens under that session's own lock, so at
    most one mutation is in flight per session. Different sessions never
    wait on each other except for the brief lookup of their slot.

    At most ``max_sessions`` sessions are held; past that the least recently
    used one is dropped. ``max_sessions=None`` disables the cap.
    """

    def __init__(
        self,
        ai: Optional[AIPlayer] = None,
        factory: Optional[Callable[[], Game]] = None,
        max_sessions: Optional[int] = DEFAULT_MAX_SESSIONS,
    ) -> None:
        self.ai = ai if ai is not None else AIPlayer()
        self._factory = factory or (lambda: Game(ai=self.ai))
        self.max_sessions = max_sessions
        self._slots: "OrderedDict[str, _Slot]" = OrderedDict()
        self._lock = threading.Lock()

    def _slot(self, session_id: str, create: bool = True) -> Optional[_Slot]:
        with self._lock:
            slot = self._slots.get(session_id)
            if slot is not None:
                self._slots.move_to_end(session_id)
                return slot
            if not create:
                return None
            slot = _Slot(self._factory())
            self._slots[session_id] = slot
            while self.max_sessions is not None and len(self._slots) > self.max_sessions:
                self._slots.popitem(last=False)
            return slot

    @contextmanager
    def session(self, session_id: str, create: bool = True) -> Iterator[Game]:
        """Hold ``session_id``'s lock and yield its game.

        Unknown ids get a new stored game, or with ``create=False`` a fresh
        game that is not stored, for read-only access.
        """
        slot = self._slot(session_id, create)
        if slot is None:
            yield self._factory()
            return
        with slot.lock:
            yield slot.game

    def reset(self, session_id: str) -> Dict[str, object]:
        """Replace the session's game with a fresh one and return its snapshot.

        The session's win tally carries over to the new game.
        """
        slot = self._slot(session_id)
        with slot.lock:
            fresh = self._factory()
            fresh.scores = slot.game.scores
            slot.game = fresh
            return fresh.snapshot()

    def __len__(self) -> int:
        with self._lock:
            return len(self._slots)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._slots
