"""Root move selection: tier lookup, optional random pick, then a full search."""

import random
from typing import Optional, Union

import chess

from tierchess.core.board import ChessBoard, Move
from tierchess.core.ordering import order_moves
from tierchess.core.search import INF, SearchEngine
from tierchess.difficulty import DifficultyProfile, profile_for


class MoveSelector:
    """Chooses the engine's move for a position at a given difficulty.

    The selector holds no per-game settings: the tier is passed on every
    call and resolved to an immutable profile for that call only. The board
    is mutated during the search and restored before returning, so a board
    must not be shared with another selection running at the same time.
    """

    def __init__(
        self,
        search: Optional[SearchEngine] = None,
        rng: Optional[random.Random] = None,
    ):
        self.search = search or SearchEngine()
        self.rng = rng or random.Random()

    def select_move(self, board: ChessBoard, tier: str) -> Optional[Move]:
        """Best move for the side to move at difficulty `tier`, or None if there is none."""
        return self.select_with_profile(board, profile_for(tier))

    def select_with_profile(
        self, board: ChessBoard, profile: DifficultyProfile
    ) -> Optional[Move]:
        moves = board.legal_moves()
        if not moves:
            return None

        # The only source of randomness: once, at the root.
        if self.rng.random() < profile.randomness:
            return self.rng.choice(moves)

        self.search.nodes = 0
        maximizing = board.turn == chess.WHITE
        best_move = None
        best_value = -INF if maximizing else INF

        for move in order_moves(moves):
            board.apply_move(move)
            try:
                value = self.search.search(
                    board, profile.depth - 1, -INF, INF, not maximizing
                )
            finally:
                board.undo_last_move()

            if best_move is None or (
                value > best_value if maximizing else value < best_value
            ):
                best_value = value
                best_move = move

        return best_move


def select_move(
    board: ChessBoard,
    tier: Union[str, DifficultyProfile],
    rng: Optional[random.Random] = None,
) -> Optional[Move]:
    """One-shot selection with a fresh selector."""
    selector = MoveSelector(rng=rng)
    if isinstance(tier, DifficultyProfile):
        return selector.select_with_profile(board, tier)
    return selector.select_move(board, tier)
