from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple


class Mark(str, Enum):
    X = "X"
    O = "O"
    EMPTY = ""

    @property
    def opponent(self) -> "Mark":
        if self is Mark.X:
            return Mark.O
        if self is Mark.O:
            return Mark.X
        raise ValueError("Empty cell has no opponent")


Board = List[Mark]


class OutcomeKind(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    mark: Optional[Mark] = None

    @property
    def is_terminal(self) -> bool:
        return self.kind is not OutcomeKind.IN_PROGRESS

    def winner_label(self) -> Optional[str]:
        """Serialized winner: 'X', 'O', 'draw', or None while in progress."""
        if self.kind is OutcomeKind.WON:
            return self.mark.value
        if self.kind is OutcomeKind.DRAW:
            return "draw"
        return None

    @classmethod
    def won(cls, mark: Mark) -> "Outcome":
        return cls(OutcomeKind.WON, mark)


IN_PROGRESS = Outcome(OutcomeKind.IN_PROGRESS)
DRAW = Outcome(OutcomeKind.DRAW)


def new_board() -> Board:
    return [Mark.EMPTY] * 9


def parse_board(symbols: Sequence[str]) -> Board:
    """Build a board from its serialized form ('', 'X' or 'O' per cell)."""
    if len(symbols) != 9:
        raise ValueError(f"Board must have 9 cells, got {len(symbols)}")
    return [Mark(symbol) for symbol in symbols]


def serialize_board(board: Sequence[Mark]) -> List[str]:
    return [Mark(cell).value for cell in board]


def empty_cells(board: Sequence[Mark]) -> List[int]:
    return [i for i, cell in enumerate(board) if cell == Mark.EMPTY]


def is_full(board: Sequence[Mark]) -> bool:
    return all(cell != Mark.EMPTY for cell in board)


class Evaluator:
    """Terminal-state detection for a 3x3 board.

    Cells are indexed 0..8 row-major. The pattern table order is fixed so
    the reported winner is deterministic for any input.
    """

    WIN_PATTERNS: Tuple[Tuple[int, int, int], ...] = (
        (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
        (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
        (0, 4, 8), (2, 4, 6),  # diagonals
    )

    @classmethod
    def evaluate(cls, board: Sequence[Mark]) -> Outcome:
        if len(board) != 9:
            raise ValueError(f"Board must have 9 cells, got {len(board)}")

        for a, b, c in cls.WIN_PATTERNS:
            mark = board[a]
            if mark != Mark.EMPTY and mark == board[b] == board[c]:
                return Outcome.won(Mark(mark))

        if is_full(board):
            return DRAW
        return IN_PROGRESS
