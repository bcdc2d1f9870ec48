"""Static evaluator: material + piece-square tables + mobility, from White's point of view."""

import chess

from tierchess.core.board import ChessBoard
from tierchess.core.tables import (
    DRAW_SCORE,
    MATE_SCORE,
    MOBILITY_WEIGHT,
    PIECE_VALUES,
    PST,
)


class Evaluator:
    def evaluate(self, board: ChessBoard) -> float:
        """Return static eval in centipawns, positive favors White.

        Checkmate scores -MATE_SCORE with White to move and +MATE_SCORE with
        Black to move; stalemate and draws score 0. The board is not modified.
        """
        legal_count = board.legal_move_count()
        if legal_count == 0:
            if board.is_check():
                return -MATE_SCORE if board.turn == chess.WHITE else MATE_SCORE
            return DRAW_SCORE
        if board.is_draw():
            return DRAW_SCORE

        score = 0
        for row, cells in enumerate(board.board_snapshot()):
            for col, cell in enumerate(cells):
                if cell is None:
                    continue
                piece_type, color = cell
                value = PIECE_VALUES[piece_type] + self.positional_value(
                    piece_type, color, row, col
                )
                score += value if color == chess.WHITE else -value

        # Mobility of the side about to act.
        mobility = legal_count * MOBILITY_WEIGHT
        score += mobility if board.turn == chess.WHITE else -mobility
        return score

    @staticmethod
    def positional_value(piece_type: int, color: bool, row: int, col: int) -> int:
        """Piece-square bonus for a piece on board row `row` (0 = rank 8), column `col`."""
        index = (7 - row) * 8 + col if color == chess.WHITE else row * 8 + col
        return PST[piece_type][index]

    @staticmethod
    def material(board: ChessBoard) -> int:
        """Material balance only (White minus Black), kings included."""
        total = 0
        for cells in board.board_snapshot():
            for cell in cells:
                if cell is None:
                    continue
                piece_type, color = cell
                total += PIECE_VALUES[piece_type] if color == chess.WHITE else -PIECE_VALUES[piece_type]
        return total
