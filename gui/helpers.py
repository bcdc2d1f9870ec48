"""Shared helpers for the TierChess GUI: theme, piece glyphs, tier styling, move records."""

from dataclasses import dataclass
from typing import Dict, Optional

import chess
from PySide6.QtGui import QColor

from tierchess.config import CONFIG

# ── Board colors (classic wood, as in the mobile app) ───────
BOARD_LIGHT = QColor("#F0D9B5")
BOARD_DARK = QColor("#B58863")

# ── Highlight colors ────────────────────────────────────────
HL_SELECTED = QColor(246, 246, 105, 180)
HL_LAST_MOVE = QColor(246, 246, 105, 110)
HL_CHECK = QColor(255, 0, 0, 150)
HL_LEGAL_DOT = QColor(0, 0, 0, 50)

# ── Panel colors ────────────────────────────────────────────
BG_ROW_ALT = QColor("#202020")
BG_ACTIVE = QColor("#5C4A1E")

# ── Text colors ─────────────────────────────────────────────
TXT = QColor("#D0D0D0")
TXT_DIM = QColor("#7A7A7A")
TXT_WHITE = QColor("#FFFFFF")

MIN_BOARD_PX = 360

# Accent color and icon per tier, weakest first.
TIER_STYLE: Dict[str, tuple] = {
    "beginner": ("#2ECC71", "🌱"),
    "easy": ("#27AE60", "😊"),
    "medium": ("#F39C12", "⚡"),
    "hard": ("#E67E22", "🔥"),
    "expert": ("#E74C3C", "💎"),
    "master": ("#9B59B6", "👑"),
    "grandmaster": ("#D4A843", "🏆"),
}

PIECE_GLYPHS = {
    "K": "♔", "Q": "♕", "R": "♖", "B": "♗", "N": "♘", "P": "♙",
    "k": "♚", "q": "♛", "r": "♜", "b": "♝", "n": "♞", "p": "♟",
}


def glyph(piece_type: int, color: bool) -> str:
    return PIECE_GLYPHS[chess.Piece(piece_type, color).symbol()]


# ── QSS Stylesheet ──────────────────────────────────────────
QSS = """
QMainWindow, QWidget#root { background: #111111; }

QPushButton {
    background: qlineargradient(x1:0,y1:0,x2:0,y2:1,
        stop:0 #E0B85A, stop:1 #C9992F);
    color: #111111; border: none;
    padding: 10px 22px; border-radius: 6px;
    font-size: 13px; font-weight: bold;
}
QPushButton:hover { background: #E8C46A; }
QPushButton:pressed { background: #B8892A; }
QPushButton:disabled { background: #3A3A3A; color: #777777; }

QPushButton#nav_btn {
    background: #242424; color: #D0D0D0;
    padding: 7px 14px; border-radius: 5px;
    font-size: 14px; border: 1px solid #333333;
}
QPushButton#nav_btn:hover { background: #2E2E2E; border-color: #444444; }
QPushButton#danger_btn {
    background: #3A1A1A; color: #E07A5F;
    padding: 7px 14px; border-radius: 5px;
    font-size: 14px; border: 1px solid #5A2A2A;
}

QScrollArea { background: transparent; border: none; }
QScrollBar:vertical {
    background: #1A1A1A; width: 7px; margin: 0; border-radius: 3px;
}
QScrollBar::handle:vertical {
    background: #444444; border-radius: 3px; min-height: 24px;
}
QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical { height: 0; }

QLabel { color: #D0D0D0; }

QFrame#panel {
    background: #1A1A1A; border-radius: 10px;
    border: 1px solid #242424;
}
QFrame#level_card {
    background: #1A1A1A; border-radius: 10px; border: 2px solid #333333;
}
"""


# ── Move record ─────────────────────────────────────────────
@dataclass
class MoveRecord:
    """One move in the game history."""

    san: str
    uci: str
    color: bool
    captured_piece: Optional[int] = None


def window_title(tier_label: str = "") -> str:
    if tier_label:
        return f"{CONFIG.ui.app_name} · vs Computer ({tier_label})"
    return CONFIG.ui.app_name
