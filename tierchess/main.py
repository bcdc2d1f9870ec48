"""Game session wrapper: one board, one tier, and background "thinking"."""

import logging
import random
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from tierchess.config import CONFIG
from tierchess.core.board import ChessBoard, Move
from tierchess.difficulty import profile_for, tier_for
from tierchess.errors import IllegalMove, ParseError
from tierchess.selector import MoveSelector

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThinkResult:
    fen: str  # position the move was chosen for
    move: Optional[Move]


class Engine:
    def __init__(self, tier: str = None, fen: str = None, rng: random.Random = None):
        self.tier = tier_for(tier or CONFIG.engine.default_tier).name
        self.board = ChessBoard(fen)
        self.selector = MoveSelector(rng=rng)
        self._executor: Optional[ThreadPoolExecutor] = None

    def set_tier(self, name: str):
        self.tier = tier_for(name).name

    def get_best_move(self) -> Optional[str]:
        """Engine move for the current position as UCI text, None if there is none."""
        move = self.selector.select_move(self.board.copy(), self.tier)
        return move.uci() if move else None

    def make_move(self, move_uci: str) -> bool:
        """Play a human move. Returns False for malformed or illegal input."""
        try:
            self.board.apply_move(move_uci)
        except (IllegalMove, ParseError) as e:
            log.debug("rejected move %r: %s", move_uci, e)
            return False
        return True

    def play_engine_move(self) -> Optional[Move]:
        move = self.selector.select_move(self.board, self.tier)
        if move is not None:
            self.board.apply_move(move)
        return move

    def undo_round(self) -> int:
        """Take back the engine's reply and the human move before it. Returns moves undone."""
        undone = 0
        for _ in range(2):
            if self.board.undo_last_move() is None:
                break
            undone += 1
        return undone

    def reset(self, fen: str = None):
        self.board = ChessBoard(fen)

    def status(self) -> str:
        return self.board.status()

    # ── Background thinking ─────────────────────────────────

    def think(self, delay_ms: int = None) -> "Future[ThinkResult]":
        """Select a move on a worker thread after a short "thinking" pause.

        The search runs on a copy of the board and the tier is resolved now,
        so later changes to this session cannot affect the running search.
        Callers should drop results for which is_stale() is True.
        """
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=CONFIG.engine.max_workers, thread_name_prefix="tierchess"
            )
        delay = CONFIG.engine.think_delay_ms if delay_ms is None else delay_ms
        snapshot = self.board.copy()
        profile = profile_for(self.tier)
        selector = MoveSelector(rng=random.Random(self.selector.rng.random()))

        def worker() -> ThinkResult:
            if delay > 0:
                time.sleep(delay / 1000.0)
            fen = snapshot.fen()
            start = time.time()
            move = selector.select_with_profile(snapshot, profile)
            log.debug(
                "selected %s in %.2fs (%d nodes)",
                move.uci() if move else None,
                time.time() - start,
                selector.search.nodes,
            )
            return ThinkResult(fen, move)

        return self._executor.submit(worker)

    def is_stale(self, result: ThinkResult) -> bool:
        return result.fen != self.board.fen()

    def shutdown(self):
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None

    def print_board(self):
        self.board.print_board()
