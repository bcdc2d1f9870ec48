"""Custom-painted scrollable move list (SAN, two columns)."""

from typing import List

from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import Qt, QRect
from PySide6.QtGui import QPainter, QBrush, QPen, QFont, QPaintEvent, QWheelEvent

from gui.helpers import MoveRecord, BG_ROW_ALT, BG_ACTIVE, TXT, TXT_DIM, TXT_WHITE


class MoveHistoryWidget(QWidget):
    """Numbered two-column move list with the latest move highlighted."""

    ROW_H = 30

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self._moves: List[MoveRecord] = []
        self._scroll = 0

    def set_moves(self, moves: List[MoveRecord]):
        self._moves = list(moves)
        # Keep the newest row in view.
        total = ((len(self._moves) + 1) // 2) * self.ROW_H
        self._scroll = max(0, total - self.height())
        self.update()

    def _clamp_scroll(self):
        total = ((len(self._moves) + 1) // 2) * self.ROW_H
        self._scroll = max(0, min(self._scroll, total - self.height()))

    def paintEvent(self, event: QPaintEvent):
        pr = QPainter(self)
        pr.setRenderHint(QPainter.Antialiasing)
        w, rh = self.width(), self.ROW_H
        num_w = 38
        col_w = (w - num_w) // 2

        fnt_num = QFont("Segoe UI", 11)
        fnt_move = QFont("Segoe UI", 12, QFont.DemiBold)

        total_rows = (len(self._moves) + 1) // 2
        v0 = max(0, self._scroll // rh)
        v1 = min(total_rows, (self._scroll + self.height()) // rh + 2)
        last = len(self._moves) - 1

        for row in range(v0, v1):
            y = row * rh - self._scroll
            if row % 2 == 1:
                pr.fillRect(0, y, w, rh, QBrush(BG_ROW_ALT))

            pr.setFont(fnt_num)
            pr.setPen(QPen(TXT_DIM))
            pr.drawText(
                QRect(4, y, num_w - 4, rh),
                Qt.AlignVCenter | Qt.AlignRight,
                f"{row + 1}.",
            )

            for side, idx in enumerate((row * 2, row * 2 + 1)):
                if idx >= len(self._moves):
                    continue
                x = num_w + 6 + side * col_w
                if idx == last:
                    pr.setPen(Qt.NoPen)
                    pr.setBrush(QBrush(BG_ACTIVE))
                    pr.drawRoundedRect(x - 4, y + 3, col_w - 2, rh - 6, 5, 5)
                pr.setFont(fnt_move)
                pr.setPen(QPen(TXT_WHITE if idx == last else TXT))
                pr.drawText(QRect(x, y, col_w - 8, rh), Qt.AlignVCenter, self._moves[idx].san)
        pr.end()

    def wheelEvent(self, ev: QWheelEvent):
        self._scroll -= ev.angleDelta().y() // 3
        self._clamp_scroll()
        self.update()
