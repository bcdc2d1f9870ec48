"""GameView: one game against a tier, with board, history, and the end-of-game dialogs."""

import logging
import time
from concurrent.futures import Future
from typing import List, Optional

import chess

from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QFrame,
    QMessageBox,
)
from PySide6.QtCore import Qt, QTimer, Signal

from gui.helpers import MoveRecord, TIER_STYLE
from gui.widgets.board import ChessBoardWidget
from gui.widgets.captured import CapturedPiecesWidget
from gui.widgets.history import MoveHistoryWidget
from tierchess.core.board import Move
from tierchess.difficulty import tier_for
from tierchess.main import Engine
from tierchess.progress import ProgressStore

log = logging.getLogger(__name__)


class GameView(QWidget):
    """Human against the engine at one tier. The engine thinks on a worker thread."""

    back_requested = Signal()
    progress_changed = Signal()
    title_changed = Signal(str)

    def __init__(self, engine: Engine, store: ProgressStore, parent=None):
        super().__init__(parent)
        self.engine = engine
        self.store = store
        self.human_color: bool = chess.WHITE
        self._records: List[MoveRecord] = []
        self.game_over = False
        self.engine_thinking = False
        self._future: Optional[Future] = None

        self._build_ui()

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._poll)
        self._timer.start(50)

        self._dots_timer = QTimer(self)
        self._dots_timer.timeout.connect(self._tick_dots)
        self._dots_timer.start(400)

    # ── UI construction ─────────────────────────────────────

    def _build_ui(self):
        root = QHBoxLayout(self)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        bcol = QVBoxLayout()
        bcol.setSpacing(4)
        self.lbl_top = QLabel()
        self.lbl_top.setStyleSheet("color:#D0D0D0;font-size:14px;font-weight:bold;")
        bcol.addWidget(self.lbl_top)
        self.cap_top = CapturedPiecesWidget(chess.BLACK)
        bcol.addWidget(self.cap_top)

        self.bw = ChessBoardWidget()
        self.bw.move_made.connect(self._human_move)
        bcol.addWidget(self.bw, stretch=1)

        self.cap_bot = CapturedPiecesWidget(chess.WHITE)
        bcol.addWidget(self.cap_bot)
        self.lbl_bot = QLabel()
        self.lbl_bot.setStyleSheet("color:#FFFFFF;font-size:14px;font-weight:bold;")
        bcol.addWidget(self.lbl_bot)
        root.addLayout(bcol, stretch=3)

        self._build_panel(root)

    def _build_panel(self, parent):
        """Right-side panel: tier title, status, move history, action buttons."""
        panel = QFrame()
        panel.setObjectName("panel")
        pl = QVBoxLayout(panel)
        pl.setContentsMargins(16, 14, 16, 14)
        pl.setSpacing(8)

        self.lbl_tier = QLabel()
        self.lbl_tier.setStyleSheet("font-size:18px;font-weight:bold;")
        pl.addWidget(self.lbl_tier)

        status_frame = QFrame()
        status_frame.setStyleSheet("background:#242424;border-radius:8px;")
        sf = QHBoxLayout(status_frame)
        sf.setContentsMargins(12, 8, 12, 8)
        self._status_dot = QLabel("●")
        sf.addWidget(self._status_dot)
        self.lbl_status = QLabel()
        self.lbl_status.setStyleSheet("color:#FFFFFF;font-size:14px;font-weight:bold;")
        sf.addWidget(self.lbl_status)
        sf.addStretch()
        self._thinking_lbl = QLabel()
        self._thinking_lbl.setStyleSheet("color:#D4A843;font-size:12px;")
        self._thinking_lbl.hide()
        sf.addWidget(self._thinking_lbl)
        pl.addWidget(status_frame)

        hdr = QLabel("MOVES")
        hdr.setStyleSheet(
            "color:#7A7A7A;font-size:10px;letter-spacing:2px;font-weight:bold;margin-top:2px;"
        )
        pl.addWidget(hdr)
        self.hist = MoveHistoryWidget()
        pl.addWidget(self.hist, stretch=1)

        self.lbl_result = QLabel("")
        self.lbl_result.setStyleSheet(
            "background:#5C4A1E;color:#FFFFFF;font-size:15px;font-weight:bold;"
            "padding:8px;border-radius:6px;"
        )
        self.lbl_result.setAlignment(Qt.AlignCenter)
        self.lbl_result.hide()
        pl.addWidget(self.lbl_result)

        row1 = QHBoxLayout()
        row1.setSpacing(6)
        self.btn_undo = QPushButton("↩  Undo")
        self.btn_undo.setObjectName("nav_btn")
        self.btn_undo.clicked.connect(self._undo)
        row1.addWidget(self.btn_undo, stretch=1)
        self.btn_resign = QPushButton("⚑  Resign")
        self.btn_resign.setObjectName("danger_btn")
        self.btn_resign.clicked.connect(self._resign)
        row1.addWidget(self.btn_resign, stretch=1)
        pl.addLayout(row1)

        row2 = QHBoxLayout()
        row2.setSpacing(6)
        levels = QPushButton("☰  Levels")
        levels.setObjectName("nav_btn")
        levels.clicked.connect(self._back)
        row2.addWidget(levels, stretch=1)
        retry = QPushButton("▶  Retry")
        retry.clicked.connect(self._retry)
        row2.addWidget(retry, stretch=1)
        pl.addLayout(row2)

        panel.setMinimumWidth(260)
        panel.setMaximumWidth(400)
        parent.addWidget(panel, stretch=1)

    # ── Session ─────────────────────────────────────────────

    def start(self, tier_name: str, human_color: bool = chess.WHITE):
        """Begin a fresh game at `tier_name`."""
        self.engine.set_tier(tier_name)
        self.human_color = human_color
        tier = tier_for(tier_name)
        color, icon = TIER_STYLE.get(tier.name, ("#D4A843", "♟"))
        self.lbl_tier.setText(f"{icon}  {tier.label}")
        self.lbl_tier.setStyleSheet(f"color:{color};font-size:18px;font-weight:bold;")
        you = "White" if human_color == chess.WHITE else "Black"
        them = "Black" if human_color == chess.WHITE else "White"
        self.lbl_bot.setText(f"{you} · You")
        self.lbl_top.setText(f"{them} · {tier.label}")
        self.cap_bot.capturing_color = human_color
        self.cap_top.capturing_color = not human_color
        self.title_changed.emit(tier.label)
        self._new_game()

    def _new_game(self):
        self._drop_pending()
        self.engine.reset()
        self._records.clear()
        self.game_over = False
        self.lbl_result.hide()
        self.bw.set_board(self.engine.board)
        self.bw.human_color = self.human_color
        self.bw.flipped = self.human_color == chess.BLACK
        self._sync()
        if self.engine.board.turn != self.human_color:
            self._start_engine()

    def _drop_pending(self):
        # A running search cannot be interrupted; its result is discarded as stale.
        if self._future is not None:
            self._future.cancel()
        self._future = None
        self.engine_thinking = False

    # ── Game logic ──────────────────────────────────────────

    def _human_move(self, mv: Move):
        if self.game_over or self.engine_thinking:
            return
        if self.engine.board.turn != self.human_color:
            return
        self._push(mv)
        if not self.game_over:
            self._start_engine()

    def _push(self, mv: Move):
        """Play `mv` on the session board and record it."""
        board = self.engine.board
        san = board.san(mv)
        board.apply_move(mv)
        self._records.append(
            MoveRecord(san=san, uci=mv.uci(), color=mv.color, captured_piece=mv.captured)
        )
        if board.is_game_over():
            self._finish()
        self._sync()

    def _start_engine(self):
        if self.engine_thinking or self.game_over:
            return
        self.engine_thinking = True
        self._future = self.engine.think()
        self._sync()

    def _poll(self):
        """Check if the engine future has completed."""
        if self._future is None or not self._future.done():
            return
        future, self._future = self._future, None
        self.engine_thinking = False
        try:
            result = future.result()
        except Exception:
            log.exception("engine search failed")
            self.lbl_status.setText("Engine error")
            self._sync()
            return
        if self.engine.is_stale(result):
            log.debug("dropping stale engine move for %s", result.fen)
        elif result.move is not None and not self.game_over:
            self._push(result.move)
        self._sync()

    def _tick_dots(self):
        if self.engine_thinking:
            self._thinking_lbl.setText("●" * (1 + int(time.time() * 2) % 3))
            self._thinking_lbl.show()
        else:
            self._thinking_lbl.hide()

    def _finish(self):
        """Game ended on the board: record the result and tell the player."""
        board = self.engine.board
        self.game_over = True
        status = board.status()
        self.lbl_result.setText(f"Game Over — {board.result()}")
        self.lbl_result.show()
        if status == "checkmate" and board.turn != self.human_color:
            result = self.store.record_win(self.engine.tier)
            self.progress_changed.emit()
            if result.completed_all:
                text = "You beat the Grandmaster. Every level is complete!"
            elif result.newly_unlocked is not None:
                text = f"Checkmate! {result.newly_unlocked.label} is now unlocked."
            else:
                text = "Checkmate! You won."
            # Deferred so the final position is drawn before the dialog blocks.
            QTimer.singleShot(0, lambda: QMessageBox.information(self, "Victory", text))
        elif status == "checkmate":
            QTimer.singleShot(0, self._show_loss)
        else:
            QTimer.singleShot(
                0, lambda: QMessageBox.information(self, "Draw", f"The game is drawn ({status}).")
            )

    def _show_loss(self, title: str = "Defeat", text: str = "Checkmate. The engine wins."):
        answer = QMessageBox.question(
            self, title, f"{text}\n\nTry again?", QMessageBox.Yes | QMessageBox.No
        )
        if answer == QMessageBox.Yes:
            self._retry()

    # ── State → widgets ─────────────────────────────────────

    def _sync(self):
        board = self.engine.board
        self.bw.game_over = self.game_over
        self.bw.engine_thinking = self.engine_thinking
        self.bw.update()
        self.hist.set_moves(self._records)
        self.cap_top.refresh(self._records, board)
        self.cap_bot.refresh(self._records, board)

        if self.game_over:
            self._status_dot.setStyleSheet("color:#E07A5F;font-size:12px;")
            self.lbl_status.setText("Game Over")
        elif self.engine_thinking:
            self._status_dot.setStyleSheet("color:#D4A843;font-size:12px;")
            self.lbl_status.setText("Engine thinking…")
        else:
            self._status_dot.setStyleSheet("color:#2ECC71;font-size:12px;")
            self.lbl_status.setText("Check! Your move" if board.is_check() else "Your move")

        self.btn_undo.setEnabled(not self.game_over and bool(self._records))
        self.btn_resign.setEnabled(not self.game_over)

    # ── Actions ─────────────────────────────────────────────

    def _undo(self):
        """Take back a full round: the engine's reply and the human move before it."""
        if self.game_over:
            return
        self._drop_pending()
        undone = self.engine.undo_round()
        del self._records[len(self._records) - undone:]
        self.bw.selected_sq = None
        self._sync()
        if self.engine.board.turn != self.human_color:
            self._start_engine()

    def _resign(self):
        if self.game_over:
            return
        self._drop_pending()
        self.game_over = True
        res = "0-1" if self.human_color == chess.WHITE else "1-0"
        self.lbl_result.setText(f"You resigned — {res}")
        self.lbl_result.show()
        self._sync()
        self._show_loss("Resigned", "You resigned.")

    def _retry(self):
        self._new_game()

    def _back(self):
        self._drop_pending()
        self.back_requested.emit()

    def dispose(self):
        """Stop timers and drop pending engine work."""
        self._timer.stop()
        self._dots_timer.stop()
        self._drop_pending()
        self.engine.shutdown()
