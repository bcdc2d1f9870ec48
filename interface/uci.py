"""UCI front end. Difficulty is chosen with `setoption name Difficulty value <tier>`."""

import logging
import sys
import threading
from typing import List, Optional

from tierchess.config import CONFIG, setup_logging
from tierchess.core.board import ChessBoard
from tierchess.difficulty import profile_for, tier_for, tier_names
from tierchess.errors import IllegalMove, InvalidTier, ParseError
from tierchess.selector import MoveSelector

log = logging.getLogger(__name__)


class UCI:
    def __init__(self, out=None):
        self.out = out or sys.stdout
        self.board = ChessBoard()
        self.tier = CONFIG.engine.default_tier
        self.selector = MoveSelector()
        self._search_thread: Optional[threading.Thread] = None

    def _send(self, msg: str):
        print(msg, file=self.out, flush=True)

    def _parse_position(self, tokens: List[str]):
        """Handle `position [startpos | fen <fen>] [moves m1 m2 ...]`.

        A bad FEN leaves the board unchanged; an illegal move stops the move list.
        """
        if not tokens:
            return
        idx = 0
        if tokens[0] == "startpos":
            board = ChessBoard()
            idx = 1
        elif tokens[0] == "fen":
            idx = 1
            fen_parts = []
            while idx < len(tokens) and tokens[idx] != "moves":
                fen_parts.append(tokens[idx])
                idx += 1
            try:
                board = ChessBoard(" ".join(fen_parts))
            except ParseError as e:
                self._send(f"info string {e}")
                return
        else:
            return

        if idx < len(tokens) and tokens[idx] == "moves":
            for text in tokens[idx + 1:]:
                try:
                    board.apply_move(text)
                except (IllegalMove, ParseError) as e:
                    self._send(f"info string {e}")
                    break
        self.board = board

    def _parse_setoption(self, tokens: List[str]):
        """Handle `setoption name <name> value <value>`; only Difficulty is supported."""
        if "name" not in tokens:
            return
        name_idx = tokens.index("name") + 1
        if "value" in tokens:
            value_idx = tokens.index("value")
            name = " ".join(tokens[name_idx:value_idx])
            value = " ".join(tokens[value_idx + 1:])
        else:
            name = " ".join(tokens[name_idx:])
            value = ""
        if name.lower() != "difficulty":
            return
        try:
            self.tier = tier_for(value.lower()).name
        except InvalidTier as e:
            self._send(f"info string {e}")

    def _parse_go(self, tokens: List[str]) -> threading.Thread:
        """Start a fixed-depth selection for the current tier; prints `bestmove`.

        Time controls are accepted and ignored: the depth comes from the tier.
        """
        board = self.board.copy()
        profile = profile_for(self.tier)
        self.wait()

        def search_and_report():
            move = self.selector.select_with_profile(board, profile)
            self._send(f"info depth {profile.depth} nodes {self.selector.search.nodes}")
            self._send(f"bestmove {move.uci() if move else '0000'}")

        self._search_thread = threading.Thread(target=search_and_report, daemon=True)
        self._search_thread.start()
        return self._search_thread

    def wait(self):
        """Block until a running search has reported."""
        if self._search_thread:
            self._search_thread.join()
            self._search_thread = None

    def handle(self, line: str) -> bool:
        """Process one command line. Returns False on `quit`."""
        tokens = line.strip().split()
        if not tokens:
            return True
        cmd, args = tokens[0], tokens[1:]

        if cmd == "uci":
            self._send(f"id name {CONFIG.ui.app_name}")
            self._send(f"id author {CONFIG.ui.engine_author}")
            names = " ".join(f"var {n}" for n in tier_names())
            self._send(
                f"option name Difficulty type combo default {self.tier} {names}"
            )
            self._send("uciok")
        elif cmd == "isready":
            self._send("readyok")
        elif cmd == "ucinewgame":
            self.wait()
            self.board = ChessBoard()
        elif cmd == "position":
            self._parse_position(args)
        elif cmd == "setoption":
            self._parse_setoption(args)
        elif cmd == "go":
            self._parse_go(args)
        elif cmd == "stop":
            # No cancellation: the fixed-depth search runs to completion.
            self.wait()
        elif cmd == "d":
            self._send(str(self.board.board))
            self._send(f"Fen: {self.board.fen()}")
            self._send(f"Moves: {' '.join(self.board.move_history)}")
        elif cmd == "quit":
            self.wait()
            return False
        else:
            log.debug("unknown command: %s", line.strip())
        return True

    def run(self):
        for line in sys.stdin:
            if not self.handle(line):
                break


def main():
    setup_logging()
    UCI().run()


if __name__ == "__main__":
    main()
