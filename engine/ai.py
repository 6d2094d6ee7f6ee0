from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .evaluator import Board, Evaluator, Mark, OutcomeKind, empty_cells

WIN_SCORE = 10


class NoMoveAvailable(Exception):
    """Raised when a search is requested on a board with no empty cell."""


@dataclass
class SearchResult:
    best_move: int
    score: int
    nodes: int
    scored_moves: Optional[List[Tuple[int, int]]] = None


class AIPlayer:
    """Full-depth minimax over the 3x3 board, with optional alpha-beta pruning.

    Scores are from the point of view of the side being searched for:
    ``10 - depth`` for a win, ``depth - 10`` for a loss, 0 for a draw, so
    faster wins and slower losses are preferred.
    """

    def __init__(self, mark: Mark = Mark.O, pruning: bool = False) -> None:
        self.mark = mark
        self.pruning = pruning
        # key: (cells, depth, maximizing, side) -> score; only filled without pruning
        self.transposition_table: Dict[Tuple[Tuple[Mark, ...], int, bool, Mark], int] = {}

    def best_move(self, board: Board, side: Optional[Mark] = None) -> int:
        return self.search(board, side).best_move

    def search(self, board: Board, side: Optional[Mark] = None) -> SearchResult:
        """Score every empty cell for ``side`` and return the best one.

        Ties go to the lowest index. With pruning on, the scores in
        ``scored_moves`` for cells that could not beat the running best are
        upper bounds rather than exact values.
        """
        side = Mark(side) if side is not None else self.mark
        moves = empty_cells(board)
        if not moves:
            raise NoMoveAvailable("No empty cell left on the board")

        best_score = -10**9
        best_move: Optional[int] = None
        nodes = 0
        scored_moves: List[Tuple[int, int]] = []

        for move in moves:
            board[move] = side
            try:
                score, sub_nodes = self._minimax(
                    board, 0, False, side, best_score, 10**9
                )
                nodes += sub_nodes + 1
            finally:
                board[move] = Mark.EMPTY
            scored_moves.append((move, score))
            if score > best_score:
                best_score = score
                best_move = move

        return SearchResult(best_move=best_move, score=best_score, nodes=nodes, scored_moves=scored_moves)

    def _minimax(
        self,
        board: Board,
        depth: int,
        maximizing: bool,
        side: Mark,
        alpha: int,
        beta: int,
    ) -> Tuple[int, int]:
        outcome = Evaluator.evaluate(board)
        if outcome.kind is OutcomeKind.WON:
            if outcome.mark is side:
                return WIN_SCORE - depth, 1
            return depth - WIN_SCORE, 1
        if outcome.kind is OutcomeKind.DRAW:
            return 0, 1

        key = None
        if not self.pruning:
            key = (tuple(board), depth, maximizing, side)
            if key in self.transposition_table:
                return self.transposition_table[key], 0

        nodes = 0
        to_move = side if maximizing else side.opponent
        value = -10**9 if maximizing else 10**9

        for move in empty_cells(board):
            board[move] = to_move
            try:
                score, child_nodes = self._minimax(
                    board, depth + 1, not maximizing, side, alpha, beta
                )
                nodes += child_nodes + 1
            finally:
                board[move] = Mark.EMPTY
            if maximizing:
                value = max(value, score)
                alpha = max(alpha, value)
            else:
                value = min(value, score)
                beta = min(beta, value)
            if self.pruning and alpha >= beta:
                break

        if key is not None:
            self.transposition_table[key] = value
        return value, nodes


def best_move(board: Sequence[Mark], side: Mark = Mark.O, pruning: bool = False) -> int:
    """Convenience wrapper: search a copy of ``board`` with a fresh engine."""
    return AIPlayer(mark=side, pruning=pruning).best_move(list(board))
