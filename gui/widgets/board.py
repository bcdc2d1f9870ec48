"""Clickable chess board drawn from a ChessBoard snapshot, with a promotion chooser."""

from typing import List, Optional, Tuple

import chess
from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import Qt, QRect, QPoint, QPointF, Signal
from PySide6.QtGui import QPainter, QColor, QBrush, QPen, QFont, QMouseEvent, QPaintEvent

from gui.helpers import (
    MIN_BOARD_PX,
    BOARD_LIGHT,
    BOARD_DARK,
    HL_SELECTED,
    HL_LAST_MOVE,
    HL_CHECK,
    HL_LEGAL_DOT,
    glyph,
)
from tierchess.core.board import ChessBoard, Move

PROMOTION_CHOICES = (chess.QUEEN, chess.ROOK, chess.BISHOP, chess.KNIGHT)


class ChessBoardWidget(QWidget):
    """Board for the human side of a game against the engine.

    The widget paints `board_snapshot()` rows directly: row 0 is rank 8, so
    with the board flipped rows and columns are read back to front. A square
    is picked by a click (select, then click the target) or by dragging the
    piece. Only legal moves leave through `move_made`, as tierchess Move values.
    """

    move_made = Signal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMinimumSize(MIN_BOARD_PX, MIN_BOARD_PX)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

        self.board: ChessBoard = ChessBoard()
        self.flipped: bool = False
        self.selected_sq: Optional[int] = None
        self.game_over: bool = False
        self.engine_thinking: bool = False
        self.human_color: bool = chess.WHITE

        self._pressed_sq: Optional[int] = None
        self._cursor: Optional[QPoint] = None
        self._pending_promotion: Optional[Tuple[int, int]] = None

    def set_board(self, board: ChessBoard):
        self.board = board
        self.selected_sq = None
        self._pressed_sq = None
        self._pending_promotion = None
        self.update()

    @property
    def can_move(self) -> bool:
        return (
            not self.game_over
            and not self.engine_thinking
            and self.board.turn == self.human_color
        )

    # ── Geometry ────────────────────────────────────────────

    @property
    def cell(self) -> int:
        return min(self.width(), self.height()) // 8

    def _grid_pos(self, row: int, col: int) -> Tuple[int, int]:
        """Screen (row, col) of snapshot cell (row, col)."""
        return (7 - row, 7 - col) if self.flipped else (row, col)

    def _square_rect(self, sq: int) -> QRect:
        row, col = self._grid_pos(7 - chess.square_rank(sq), chess.square_file(sq))
        return QRect(col * self.cell, row * self.cell, self.cell, self.cell)

    def _square_at(self, pos: QPoint) -> Optional[int]:
        if self.cell <= 0:
            return None
        row, col = pos.y() // self.cell, pos.x() // self.cell
        if not (0 <= row < 8 and 0 <= col < 8):
            return None
        row, col = self._grid_pos(row, col)
        return chess.square(col, 7 - row)

    def _moves_from(self, sq: int) -> List[Move]:
        return self.board.legal_moves(sq)

    # ── Painting ────────────────────────────────────────────

    def paintEvent(self, event: QPaintEvent):
        pr = QPainter(self)
        pr.setRenderHint(QPainter.Antialiasing)
        pr.setRenderHint(QPainter.TextAntialiasing)
        self._paint_squares(pr)
        self._paint_marks(pr)
        self._paint_pieces(pr)
        if self._pending_promotion:
            self._paint_promotion(pr)
        pr.end()

    def _paint_squares(self, pr: QPainter):
        sz = self.cell
        label_font = QFont("Segoe UI", max(7, sz // 9))
        pr.setFont(label_font)
        for row in range(8):
            for col in range(8):
                light = (row + col) % 2 == 0
                rect = QRect(col * sz, row * sz, sz, sz)
                pr.fillRect(rect, BOARD_LIGHT if light else BOARD_DARK)
                rank_row, file_col = self._grid_pos(row, col)
                pr.setPen(QPen(BOARD_DARK if light else BOARD_LIGHT))
                if col == 0:
                    pr.drawText(rect.adjusted(3, 2, 0, 0), Qt.AlignLeft | Qt.AlignTop, str(8 - rank_row))
                if row == 7:
                    pr.drawText(
                        rect.adjusted(0, 0, -3, -2),
                        Qt.AlignRight | Qt.AlignBottom,
                        chess.FILE_NAMES[file_col],
                    )

    def _paint_marks(self, pr: QPainter):
        """Last move, selection, king in check, and targets of the selected piece."""
        history = self.board.move_history
        if history:
            last = chess.Move.from_uci(history[-1])
            for sq in (last.from_square, last.to_square):
                pr.fillRect(self._square_rect(sq), HL_LAST_MOVE)

        if self.selected_sq is not None:
            pr.fillRect(self._square_rect(self.selected_sq), HL_SELECTED)

        if self.board.is_check():
            for sq in chess.SQUARES:
                if self.board.piece_at(sq) == (chess.KING, self.board.turn):
                    pr.fillRect(self._square_rect(sq), HL_CHECK)
                    break

        if self.selected_sq is None or not self.can_move:
            return
        pr.setPen(Qt.NoPen)
        pr.setBrush(QBrush(HL_LEGAL_DOT))
        for mv in self._moves_from(self.selected_sq):
            center = QPointF(self._square_rect(mv.to_square).center())
            radius = self.cell * (0.42 if mv.is_capture else 0.14)
            if mv.is_capture:
                pr.setBrush(Qt.NoBrush)
                pr.setPen(QPen(HL_LEGAL_DOT, max(3, self.cell // 12)))
                pr.drawEllipse(center, radius, radius)
                pr.setPen(Qt.NoPen)
                pr.setBrush(QBrush(HL_LEGAL_DOT))
            else:
                pr.drawEllipse(center, radius, radius)

    def _draw_glyph(self, pr: QPainter, piece_type: int, color: bool, rect: QRect):
        pr.setFont(QFont("Segoe UI Symbol", max(8, int(rect.height() * 0.72))))
        # Filled glyphs for both sides; the pen picks the color.
        text = glyph(piece_type, chess.BLACK)
        pr.setPen(QPen(QColor(0, 0, 0, 140) if color else QColor(255, 255, 255, 60)))
        pr.drawText(rect.translated(1, 1), Qt.AlignCenter, text)
        pr.setPen(QPen(QColor("#FFFFFF") if color else QColor("#111111")))
        pr.drawText(rect, Qt.AlignCenter, text)

    def _paint_pieces(self, pr: QPainter):
        sz = self.cell
        dragging = self._pressed_sq is not None and self._cursor is not None
        for row, cells in enumerate(self.board.board_snapshot()):
            for col, cell in enumerate(cells):
                if cell is None:
                    continue
                sq = chess.square(col, 7 - row)
                if dragging and sq == self._pressed_sq:
                    continue
                screen_row, screen_col = self._grid_pos(row, col)
                self._draw_glyph(pr, *cell, QRect(screen_col * sz, screen_row * sz, sz, sz))
        if dragging:
            cell = self.board.piece_at(self._pressed_sq)
            if cell is not None:
                rect = QRect(0, 0, sz, sz)
                rect.moveCenter(self._cursor)
                self._draw_glyph(pr, *cell, rect)

    def _promotion_rects(self) -> List[QRect]:
        """One rect per PROMOTION_CHOICES entry, stacked from the target square inward."""
        _, to_sq = self._pending_promotion
        target = self._square_rect(to_sq)
        step = self.cell if target.top() < 4 * self.cell else -self.cell
        return [target.translated(0, i * step) for i in range(len(PROMOTION_CHOICES))]

    def _paint_promotion(self, pr: QPainter):
        pr.fillRect(self.rect(), QColor(0, 0, 0, 140))
        color = self.board.turn
        for rect, piece_type in zip(self._promotion_rects(), PROMOTION_CHOICES):
            pr.setPen(QPen(QColor("#555350"), 1))
            pr.setBrush(QBrush(QColor("#3c3a36")))
            pr.drawRoundedRect(rect.adjusted(1, 1, -1, -1), 6, 6)
            self._draw_glyph(pr, piece_type, color, rect.adjusted(4, 4, -4, -4))

    # ── Mouse events ────────────────────────────────────────

    def mousePressEvent(self, ev: QMouseEvent):
        if ev.button() != Qt.LeftButton:
            return
        pos = ev.position().toPoint()
        if self._pending_promotion:
            self._choose_promotion(pos)
            return
        sq = self._square_at(pos)
        if sq is None or not self.can_move:
            return
        cell = self.board.piece_at(sq)
        if cell is not None and cell[1] == self.human_color:
            self.selected_sq = sq
            self._pressed_sq = sq
        elif self.selected_sq is not None:
            self._try_move(self.selected_sq, sq)
            self.selected_sq = None
        self.update()

    def mouseMoveEvent(self, ev: QMouseEvent):
        if self._pressed_sq is not None:
            self._cursor = ev.position().toPoint()
            self.update()

    def mouseReleaseEvent(self, ev: QMouseEvent):
        if ev.button() != Qt.LeftButton or self._pressed_sq is None:
            return
        origin, self._pressed_sq = self._pressed_sq, None
        dragged = self._cursor is not None
        self._cursor = None
        if dragged:
            target = self._square_at(ev.position().toPoint())
            if target is not None and target != origin:
                self._try_move(origin, target)
                self.selected_sq = None
        self.update()

    def _try_move(self, origin: int, target: int):
        """Emit the legal move origin→target; promotions wait for a piece choice."""
        candidates = [m for m in self._moves_from(origin) if m.to_square == target]
        if not candidates:
            return
        if candidates[0].promotion:
            self._pending_promotion = (origin, target)
        else:
            self.move_made.emit(candidates[0])

    def _choose_promotion(self, pos: QPoint):
        origin, target = self._pending_promotion
        self._pending_promotion = None
        for rect, piece_type in zip(self._promotion_rects(), PROMOTION_CHOICES):
            if rect.contains(pos):
                for mv in self._moves_from(origin):
                    if mv.to_square == target and mv.promotion == piece_type:
                        self.move_made.emit(mv)
                        break
                break
        self.update()
