"""Row of captured-piece glyphs with material advantage display."""

from typing import List

import chess
from PySide6.QtWidgets import QWidget
from PySide6.QtGui import QPainter, QPen, QFont, QPaintEvent

from gui.helpers import MoveRecord, TXT, glyph
from tierchess.core.board import ChessBoard
from tierchess.core.evaluator import Evaluator


class CapturedPiecesWidget(QWidget):
    """Shows pieces captured by one side, sorted by value, with material diff."""

    _SORT = {
        chess.QUEEN: 0,
        chess.ROOK: 1,
        chess.BISHOP: 2,
        chess.KNIGHT: 3,
        chess.PAWN: 4,
    }

    def __init__(self, capturing_color: bool, parent=None):
        super().__init__(parent)
        self.capturing_color = capturing_color
        self.setFixedHeight(26)
        self._captured: List[int] = []
        self._advantage = 0

    def refresh(self, records: List[MoveRecord], board: ChessBoard):
        """Recalculate captured pieces and material advantage."""
        self._captured = sorted(
            (
                r.captured_piece
                for r in records
                if r.captured_piece is not None and r.color == self.capturing_color
            ),
            key=lambda pt: self._SORT.get(pt, 5),
        )
        balance = Evaluator.material(board)
        if self.capturing_color == chess.BLACK:
            balance = -balance
        # Shown in pawns.
        self._advantage = round(balance / 100)
        self.update()

    def paintEvent(self, event: QPaintEvent):
        if not self._captured:
            return
        p = QPainter(self)
        p.setRenderHint(QPainter.TextAntialiasing)
        p.setFont(QFont("Segoe UI Symbol", 14))
        p.setPen(QPen(TXT))
        x, opp = 4, not self.capturing_color
        for pt in self._captured:
            p.drawText(x, 20, glyph(pt, opp))
            x += 17
        if self._advantage > 0:
            p.setFont(QFont("Segoe UI", 10, QFont.Bold))
            p.drawText(x + 4, 18, f"+{self._advantage}")
        p.end()
