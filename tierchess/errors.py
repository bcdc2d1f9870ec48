"""Exception types raised by the engine and the rules adapter."""


class TierChessError(Exception):
    """Base class for all tierchess errors."""


class InvalidTier(TierChessError, KeyError):
    """Raised when a difficulty name is not one of the known tiers."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown difficulty tier: {name!r}")

    def __str__(self):
        # KeyError would otherwise repr() the message.
        return self.args[0]


class IllegalMove(TierChessError, ValueError):
    """Raised when the rules engine rejects a move for the current position."""

    def __init__(self, move, fen: str = ""):
        self.move = move
        self.fen = fen
        text = move.uci() if hasattr(move, "uci") else str(move)
        detail = f" in {fen}" if fen else ""
        super().__init__(f"Illegal move {text}{detail}")


class ParseError(TierChessError, ValueError):
    """Raised when a FEN string or move text cannot be parsed."""
