"""Desktop app: level select, then a game against the chosen tier."""

import logging
import sys

import chess
from PySide6.QtWidgets import QApplication, QMainWindow, QStackedWidget

from gui.helpers import QSS, window_title
from gui.widgets import GameView, LevelSelectView
from tierchess.config import CONFIG, setup_logging
from tierchess.main import Engine
from tierchess.progress import ProgressStore

log = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, store: ProgressStore = None, engine: Engine = None):
        super().__init__()
        self.setWindowTitle(window_title())
        self.resize(1100, 760)
        self.store = store or ProgressStore()
        self.engine = engine or Engine()

        self.stack = QStackedWidget()
        self.stack.setObjectName("root")
        self.levels = LevelSelectView(self.store)
        self.game = GameView(self.engine, self.store)
        self.stack.addWidget(self.levels)
        self.stack.addWidget(self.game)
        self.setCentralWidget(self.stack)

        self.levels.tier_chosen.connect(self._play)
        self.game.back_requested.connect(self._show_levels)
        self.game.progress_changed.connect(self.levels.refresh)
        self.game.title_changed.connect(lambda label: self.setWindowTitle(window_title(label)))

    def _play(self, tier_name: str):
        human = chess.WHITE if CONFIG.ui.player_color == "white" else chess.BLACK
        log.info("new game tier=%s", tier_name)
        self.game.start(tier_name, human)
        self.stack.setCurrentWidget(self.game)

    def _show_levels(self):
        self.levels.refresh()
        self.setWindowTitle(window_title())
        self.stack.setCurrentWidget(self.levels)

    def closeEvent(self, ev):
        self.game.dispose()
        super().closeEvent(ev)


def main():
    setup_logging()
    app = QApplication(sys.argv)
    app.setApplicationName(CONFIG.ui.app_name)
    app.setStyleSheet(QSS)
    win = MainWindow()
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
