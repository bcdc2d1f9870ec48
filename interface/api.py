"""FastAPI REST interface for the engine.

Every request builds its own board from the FEN it carries, so concurrent
searches never share a position.
"""

import logging
from typing import List, Optional

import chess
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from tierchess import __version__
from tierchess.config import CONFIG
from tierchess.core.board import ChessBoard
from tierchess.core.evaluator import Evaluator
from tierchess.difficulty import Tier, tier_for, tier_names
from tierchess.errors import InvalidTier, ParseError
from tierchess.selector import MoveSelector

log = logging.getLogger(__name__)

app = FastAPI(title=CONFIG.ui.app_name, version=__version__)

_evaluator = Evaluator()


class FenRequest(BaseModel):
    fen: str = chess.STARTING_FEN


class SelectRequest(BaseModel):
    fen: str = chess.STARTING_FEN
    tier: str = CONFIG.engine.default_tier


class LegalMovesRequest(BaseModel):
    fen: str = chess.STARTING_FEN
    square: Optional[str] = None


class TierOut(BaseModel):
    name: str
    label: str
    description: str
    depth: int
    randomness: float


def _tier_out(tier: Tier) -> TierOut:
    return TierOut(
        name=tier.name,
        label=tier.label,
        description=tier.description,
        depth=tier.depth,
        randomness=tier.randomness,
    )


def _board(fen: str) -> ChessBoard:
    try:
        return ChessBoard(fen)
    except ParseError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/tiers", response_model=List[TierOut])
def list_tiers():
    return [_tier_out(tier_for(name)) for name in tier_names()]


@app.get("/tiers/{name}", response_model=TierOut)
def get_tier(name: str):
    try:
        return _tier_out(tier_for(name))
    except InvalidTier as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.post("/select")
def select(req: SelectRequest):
    try:
        tier = tier_for(req.tier)
    except InvalidTier as e:
        raise HTTPException(status_code=404, detail=str(e))
    board = _board(req.fen)
    if board.is_game_over():
        raise HTTPException(status_code=409, detail=f"Game is already over ({board.status()})")

    move = MoveSelector().select_move(board, tier.name)
    san = board.san(move)
    board.apply_move(move)
    log.info("tier=%s fen=%s move=%s", tier.name, req.fen, move.uci())
    return {
        "move": move.uci(),
        "san": san,
        "tier": tier.name,
        "fen_after": board.fen(),
        "status": board.status(),
    }


@app.post("/evaluate")
def evaluate(req: FenRequest):
    board = _board(req.fen)
    return {
        "score": _evaluator.evaluate(board),
        "turn": "white" if board.turn == chess.WHITE else "black",
        "status": board.status(),
    }


@app.post("/legal-moves")
def legal_moves(req: LegalMovesRequest):
    board = _board(req.fen)
    try:
        moves = board.legal_moves(req.square)
    except ParseError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"moves": [m.uci() for m in moves]}
