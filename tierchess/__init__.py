"""Tiered chess opponent: fixed-depth alpha-beta search with seven difficulty levels."""

from tierchess.core import ChessBoard, Evaluator, Move, SearchEngine, order_moves
from tierchess.difficulty import DifficultyProfile, Tier, profile_for, tier_names
from tierchess.errors import IllegalMove, InvalidTier, ParseError, TierChessError
from tierchess.selector import MoveSelector, select_move

__version__ = "1.0.0"
