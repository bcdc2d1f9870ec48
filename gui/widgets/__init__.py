"""Widget package — re-exports all GUI widgets for convenient importing."""

from gui.widgets.captured import CapturedPiecesWidget
from gui.widgets.board import ChessBoardWidget
from gui.widgets.history import MoveHistoryWidget
from gui.widgets.levels import LevelCard, LevelSelectView
from gui.widgets.game_tab import GameView

__all__ = [
    "CapturedPiecesWidget",
    "ChessBoardWidget",
    "MoveHistoryWidget",
    "LevelCard",
    "LevelSelectView",
    "GameView",
]
