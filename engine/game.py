from __future__ import annotations

from typing import Dict, Optional

from .ai import AIPlayer
from .evaluator import (
    Evaluator,
    Mark,
    Outcome,
    new_board,
    serialize_board,
)


class InvalidMove(ValueError):
    """A move the session refused; the session state is left untouched."""


class Game:
    """One human-versus-computer game.

    The human always plays X and moves first; the computer's O reply is
    applied within the same ``accept_move`` call, so between calls it is
    always the human's turn unless the game is over.
    """

    HUMAN = Mark.X
    COMPUTER = Mark.O

    def __init__(self, ai: Optional[AIPlayer] = None, scores: Optional[Dict[str, int]] = None) -> None:
        self.ai = ai if ai is not None else AIPlayer(mark=self.COMPUTER)
        self.board = new_board()
        self.move_count = 0
        self.game_over = False
        self.winner: Optional[str] = None
        self.ai_move: Optional[int] = None
        # Finished-game tally; shared with the replacement game on reset
        self.scores = scores if scores is not None else {"player": 0, "ai": 0, "draw": 0}

    def get_turn(self) -> Optional[str]:
        if self.game_over:
            return None
        return self.HUMAN.value if self.move_count % 2 == 0 else self.COMPUTER.value

    def accept_move(self, position: int) -> Dict[str, object]:
        self._validate(position)

        self.ai_move = None
        self._place(position, self.HUMAN)
        if self.game_over:
            return self.snapshot()

        # Terminal check above guarantees at least one empty cell here
        reply = self.ai.best_move(self.board, self.COMPUTER)
        self.ai_move = reply
        self._place(reply, self.COMPUTER)
        return self.snapshot()

    def hint(self) -> int:
        """Best cell for the human, computed without touching the session."""
        if self.game_over:
            raise InvalidMove("Game is over")
        return self.ai.best_move(list(self.board), self.HUMAN)

    def _validate(self, position: object) -> None:
        if self.game_over:
            raise InvalidMove("Game is over")
        if isinstance(position, bool) or not isinstance(position, int):
            raise InvalidMove(f"Position must be an integer, got {position!r}")
        if not 0 <= position < 9:
            raise InvalidMove(f"Position {position} is out of range")
        if self.board[position] != Mark.EMPTY:
            raise InvalidMove("Invalid move")

    def _place(self, position: int, mark: Mark) -> None:
        self.board[position] = mark
        self.move_count += 1
        outcome = Evaluator.evaluate(self.board)
        if outcome.is_terminal:
            self._finish(outcome)

    def _finish(self, outcome: Outcome) -> None:
        self.game_over = True
        self.winner = outcome.winner_label()
        if self.winner == self.HUMAN.value:
            self.scores["player"] += 1
        elif self.winner == self.COMPUTER.value:
            self.scores["ai"] += 1
        else:
            self.scores["draw"] += 1

    def snapshot(self) -> Dict[str, object]:
        return {
            "board": serialize_board(self.board),
            "current_player": self.get_turn(),
            "game_over": self.game_over,
            "winner": self.winner,
            "move_count": self.move_count,
            "ai_move": self.ai_move,
            "scores": dict(self.scores),
        }
