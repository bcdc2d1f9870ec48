"""Core engine components: rules adapter, evaluator, move ordering and search."""

from .board import ChessBoard, Move
from .evaluator import Evaluator
from .ordering import order_moves
from .search import SearchEngine
