"""Tic-tac-toe engine package: outcome evaluation, minimax search, and game sessions.

Modules:
- evaluator: Board marks, win patterns, and terminal-state detection
- ai: Full-depth minimax with optional alpha-beta pruning
- game: A single human-versus-computer game session
- sessions: Independent sessions, each mutated under its own lock
"""

from .evaluator import Evaluator, Mark, Outcome, OutcomeKind
from .ai import AIPlayer, NoMoveAvailable, SearchResult
from .game import Game, InvalidMove
from .sessions import SessionStore

__all__ = [
    "Evaluator",
    "Mark",
    "Outcome",
    "OutcomeKind",
    "AIPlayer",
    "NoMoveAvailable",
    "SearchResult",
    "Game",
    "InvalidMove",
    "SessionStore",
]
