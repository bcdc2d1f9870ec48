"""Most-valuable-victim move ordering."""

from typing import Iterable, List

from tierchess.core.board import Move
from tierchess.core.tables import PIECE_VALUES


def victim_value(move: Move) -> int:
    """Material value of the captured piece, 0 for quiet moves."""
    if move.captured is None:
        return 0
    return PIECE_VALUES.get(move.captured, 0)


def order_moves(moves: Iterable[Move]) -> List[Move]:
    """Captures of the most valuable pieces first. Ties keep enumeration order."""
    # sorted() is stable, so equal victims stay in generator order.
    return sorted(moves, key=victim_value, reverse=True)
