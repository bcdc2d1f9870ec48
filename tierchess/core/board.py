"""Board wrapper over python-chess providing make/unmake and fixed-shape move values."""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

import chess

from tierchess.errors import IllegalMove, ParseError

# (piece_type, color) for an occupied square, None for an empty one.
Cell = Optional[Tuple[int, bool]]


@dataclass(frozen=True)
class Move:
    """One legal move as produced by the rules engine.

    Squares are python-chess square indices (a1 = 0, h8 = 63), piece types
    are python-chess piece-type constants and color is chess.WHITE/BLACK.
    """

    from_square: int
    to_square: int
    color: bool
    promotion: Optional[int] = None
    captured: Optional[int] = None

    @classmethod
    def from_chess(cls, board: chess.Board, mv: chess.Move) -> "Move":
        """Describe `mv` as played from `board` (board must be pre-move)."""
        if board.is_en_passant(mv):
            captured = chess.PAWN
        else:
            captured = board.piece_type_at(mv.to_square)
        return cls(mv.from_square, mv.to_square, board.turn, mv.promotion, captured)

    def to_chess(self) -> chess.Move:
        return chess.Move(self.from_square, self.to_square, promotion=self.promotion)

    def uci(self) -> str:
        """Compact form: origin + destination + optional promotion letter."""
        text = chess.square_name(self.from_square) + chess.square_name(self.to_square)
        if self.promotion:
            text += chess.piece_symbol(self.promotion)
        return text

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def __str__(self):
        return self.uci()


class ChessBoard:
    def __init__(self, fen: str = None):
        """Initialize from FEN, or the standard starting position when fen is None."""
        self.board = self._parse_fen(fen) if fen is not None else chess.Board()

    @staticmethod
    def _parse_fen(fen: str) -> chess.Board:
        try:
            return chess.Board(fen)
        except ValueError as e:
            raise ParseError(f"Invalid FEN {fen!r}: {e}") from e

    # ── Position I/O ────────────────────────────────────────

    def reset(self):
        """Reset to the initial position."""
        self.board.reset()

    def set_fen(self, fen: str):
        """Replace the position with `fen`. The current state is kept on failure."""
        self.board = self._parse_fen(fen)

    def fen(self) -> str:
        return self.board.fen()

    def copy(self) -> "ChessBoard":
        """Independent board with the same position and move stack."""
        clone = ChessBoard.__new__(ChessBoard)
        clone.board = self.board.copy()
        return clone

    @property
    def move_history(self) -> List[str]:
        return [m.uci() for m in self.board.move_stack]

    @property
    def turn(self) -> bool:
        return self.board.turn

    # ── Moves ───────────────────────────────────────────────

    def legal_moves(self, square: Union[int, str, None] = None) -> List[Move]:
        """Legal moves for the side to move, optionally only those leaving `square`."""
        board = self.board
        if square is None:
            return [Move.from_chess(board, mv) for mv in board.legal_moves]
        origin = self._parse_square(square)
        return [
            Move.from_chess(board, mv)
            for mv in board.legal_moves
            if mv.from_square == origin
        ]

    def legal_move_count(self) -> int:
        return self.board.legal_moves.count()

    def parse_move(self, text: str) -> Move:
        """Turn UCI text into the matching legal Move."""
        try:
            mv = chess.Move.from_uci(text.strip())
        except ValueError as e:
            raise ParseError(f"Invalid move text {text!r}") from e
        if not self.board.is_legal(mv):
            raise IllegalMove(text, self.board.fen())
        return Move.from_chess(self.board, mv)

    def apply_move(self, move: Union[Move, str]):
        """Play `move` in place. Raises IllegalMove if it is not legal here."""
        if isinstance(move, str):
            move = self.parse_move(move)
        mv = move.to_chess()
        if not self.board.is_legal(mv):
            raise IllegalMove(move, self.board.fen())
        self.board.push(mv)

    def undo_last_move(self) -> Optional[Move]:
        """Take back the last move, restoring rights and counters. None if no history."""
        if not self.board.move_stack:
            return None
        mv = self.board.pop()
        return Move.from_chess(self.board, mv)

    def san(self, move: Move) -> str:
        return self.board.san(move.to_chess())

    # ── Status queries ──────────────────────────────────────

    def is_check(self) -> bool:
        return self.board.is_check()

    def is_checkmate(self) -> bool:
        return self.board.is_checkmate()

    def is_stalemate(self) -> bool:
        return self.board.is_stalemate()

    def is_draw(self) -> bool:
        """Fifty-move rule, insufficient material or threefold repetition."""
        b = self.board
        return b.is_insufficient_material() or b.is_fifty_moves() or b.is_repetition(3)

    def is_game_over(self) -> bool:
        if not any(self.board.generate_legal_moves()):
            return True
        return self.is_draw()

    def status(self) -> str:
        if self.is_checkmate():
            return "checkmate"
        if self.is_stalemate():
            return "stalemate"
        if self.is_draw():
            return "draw"
        if self.is_check():
            return "check"
        return "playing"

    def result(self) -> str:
        """PGN-style result string: 1-0, 0-1, 1/2-1/2 or *."""
        if self.is_checkmate():
            return "0-1" if self.turn == chess.WHITE else "1-0"
        if self.is_stalemate() or self.is_draw():
            return "1/2-1/2"
        return "*"

    # ── Inspection ──────────────────────────────────────────

    def piece_at(self, square: int) -> Cell:
        piece = self.board.piece_at(square)
        return (piece.piece_type, piece.color) if piece else None

    def board_snapshot(self) -> List[List[Cell]]:
        """8x8 grid, row 0 is rank 8 and column 0 is the a-file."""
        grid: List[List[Cell]] = [[None] * 8 for _ in range(8)]
        for sq, piece in self.board.piece_map().items():
            row = 7 - chess.square_rank(sq)
            grid[row][chess.square_file(sq)] = (piece.piece_type, piece.color)
        return grid

    @staticmethod
    def _parse_square(square: Union[int, str]) -> int:
        if isinstance(square, int):
            if not 0 <= square < 64:
                raise ParseError(f"Square index out of range: {square}")
            return square
        try:
            return chess.parse_square(square)
        except ValueError as e:
            raise ParseError(f"Invalid square name {square!r}") from e

    def print_board(self):
        """Print ASCII representation."""
        print(self.board)
