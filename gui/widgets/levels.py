"""Level select screen: one card per tier, locked until the previous tier is beaten."""

from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QGridLayout,
    QLabel,
    QPushButton,
    QFrame,
    QScrollArea,
    QMessageBox,
)
from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QMouseEvent

from gui.helpers import TIER_STYLE
from tierchess.config import CONFIG
from tierchess.difficulty import Tier, tier_for, tier_names
from tierchess.progress import ProgressStore


class LevelCard(QFrame):
    """Clickable card for one tier."""

    clicked = Signal(str)

    def __init__(self, tier: Tier, state: str, parent=None):
        super().__init__(parent)
        self.tier = tier
        self.state = state  # "completed", "open" or "locked"
        self.setObjectName("level_card")
        color, icon = TIER_STYLE.get(tier.name, ("#D4A843", "♟"))
        locked = state == "locked"
        border = "#333333" if locked else color
        self.setStyleSheet(
            f"QFrame#level_card {{ background:#1A1A1A; border-radius:10px;"
            f" border:2px solid {border}; }}"
        )
        self.setCursor(Qt.ArrowCursor if locked else Qt.PointingHandCursor)
        self.setMinimumHeight(96)

        lay = QHBoxLayout(self)
        lay.setContentsMargins(14, 10, 14, 10)
        lay.setSpacing(12)

        badge = QLabel("🔒" if locked else icon)
        badge.setFixedSize(44, 44)
        badge.setAlignment(Qt.AlignCenter)
        badge.setStyleSheet(
            f"background:{'#2A2A2A' if locked else color};border-radius:22px;font-size:22px;"
        )
        lay.addWidget(badge)

        col = QVBoxLayout()
        col.setSpacing(2)
        name = QLabel(tier.label)
        name.setStyleSheet(
            f"color:{'#444444' if locked else '#FFFFFF'};font-size:16px;font-weight:bold;"
        )
        col.addWidget(name)
        desc = QLabel(tier.description)
        desc.setWordWrap(True)
        desc.setStyleSheet(f"color:{'#444444' if locked else '#9B9892'};font-size:12px;")
        col.addWidget(desc)
        depth = QLabel(f"Depth {tier.depth}")
        depth.setStyleSheet(f"color:{'#444444' if locked else color};font-size:11px;")
        col.addWidget(depth)
        lay.addLayout(col, stretch=1)

        if state == "completed":
            done = QLabel("✓")
            done.setStyleSheet(f"color:{color};font-size:22px;font-weight:bold;")
            lay.addWidget(done)

    def mousePressEvent(self, ev: QMouseEvent):
        if ev.button() == Qt.LeftButton and self.state != "locked":
            self.clicked.emit(self.tier.name)
        super().mousePressEvent(ev)


class LevelSelectView(QWidget):
    """Grid of level cards plus a progress reset button."""

    tier_chosen = Signal(str)

    def __init__(self, store: ProgressStore, parent=None):
        super().__init__(parent)
        self.store = store
        self._cards = []

        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(12)

        title = QLabel(f"♞  {CONFIG.ui.app_name}")
        title.setStyleSheet("color:#D4A843;font-size:26px;font-weight:bold;")
        root.addWidget(title)
        self.subtitle = QLabel()
        self.subtitle.setStyleSheet("color:#9B9892;font-size:13px;")
        root.addWidget(self.subtitle)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        holder = QWidget()
        self._grid = QGridLayout(holder)
        self._grid.setSpacing(12)
        scroll.setWidget(holder)
        root.addWidget(scroll, stretch=1)

        bottom = QHBoxLayout()
        bottom.addStretch()
        reset = QPushButton("Reset progress")
        reset.setObjectName("danger_btn")
        reset.clicked.connect(self._confirm_reset)
        bottom.addWidget(reset)
        root.addLayout(bottom)

        self.refresh()

    def refresh(self):
        """Rebuild the cards from the stored progress."""
        for card in self._cards:
            self._grid.removeWidget(card)
            card.deleteLater()
        self._cards = []

        unlocked = self.store.unlocked_index
        names = tier_names()
        for i, name in enumerate(names):
            if i < unlocked:
                state = "completed"
            elif i == unlocked:
                state = "open"
            else:
                state = "locked"
            card = LevelCard(tier_for(name), state)
            card.clicked.connect(self.tier_chosen.emit)
            self._grid.addWidget(card, i // 2, i % 2)
            self._cards.append(card)

        current = tier_for(names[unlocked])
        self.subtitle.setText(
            f"{unlocked + 1} of {len(names)} levels unlocked · next up: {current.label}"
        )

    def _confirm_reset(self):
        answer = QMessageBox.question(
            self,
            "Reset progress",
            "Lock every level except Beginner again?",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        if answer == QMessageBox.Yes:
            self.store.reset()
            self.refresh()
