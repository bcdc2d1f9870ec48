"""Fixed-depth minimax with alpha-beta pruning.

The search drives the board through apply/undo only, so the position is
mutated in place while a call is running: one board, one search at a time.
There is deliberately no transposition table, quiescence or iterative
deepening; the value at a given depth is exactly the minimax value.
"""

from typing import Optional

from tierchess.core.board import ChessBoard
from tierchess.core.evaluator import Evaluator
from tierchess.core.ordering import order_moves

INF = float("inf")


class SearchEngine:
    def __init__(self, evaluator: Optional[Evaluator] = None):
        self.evaluator = evaluator or Evaluator()
        self.nodes = 0

    def search(
        self,
        board: ChessBoard,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
    ) -> float:
        """Alpha-beta value of `board` searched `depth` plies deep.

        White maximizes, Black minimizes. IllegalMove from the board aborts
        the whole call; every applied move is undone on the way out.
        """
        self.nodes += 1
        if depth <= 0 or board.is_game_over():
            return self.evaluator.evaluate(board)

        moves = order_moves(board.legal_moves())

        if maximizing:
            best = -INF
            for move in moves:
                board.apply_move(move)
                try:
                    value = self.search(board, depth - 1, alpha, beta, False)
                finally:
                    board.undo_last_move()
                best = max(best, value)
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return best

        best = INF
        for move in moves:
            board.apply_move(move)
            try:
                value = self.search(board, depth - 1, alpha, beta, True)
            finally:
                board.undo_last_move()
            best = min(best, value)
            beta = min(beta, value)
            if beta <= alpha:
                break
        return best

    def minimax(self, board: ChessBoard, depth: int, maximizing: bool) -> float:
        """Plain minimax without pruning. Same value as search(), more nodes."""
        self.nodes += 1
        if depth <= 0 or board.is_game_over():
            return self.evaluator.evaluate(board)

        values = []
        for move in board.legal_moves():
            board.apply_move(move)
            try:
                values.append(self.minimax(board, depth - 1, not maximizing))
            finally:
                board.undo_last_move()
        return max(values) if maximizing else min(values)
