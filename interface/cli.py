"""Play against the engine in the terminal, with level progression."""

import argparse
import logging
import sys

import chess

from tierchess.config import CONFIG, setup_logging
from tierchess.difficulty import tier_for, tier_names
from tierchess.errors import ParseError
from tierchess.main import Engine
from tierchess.progress import ProgressStore

log = logging.getLogger(__name__)

HELP = "Enter a move in UCI format (e2e4, e7e8q) or: moves, history, undo, board, quit"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play chess against a tiered engine")
    parser.add_argument("--tier", default=None, choices=tier_names())
    parser.add_argument("--color", default=CONFIG.ui.player_color, choices=["white", "black"])
    parser.add_argument("--fen", default=None, help="start from this position")
    parser.add_argument("--progress", default=None, help="progress file path")
    parser.add_argument("--reset-progress", action="store_true")
    parser.add_argument("--ignore-locks", action="store_true", help="allow locked tiers")
    return parser


def print_levels(store: ProgressStore):
    for i, name in enumerate(tier_names()):
        tier = tier_for(name)
        if i < store.unlocked_index:
            mark = "done"
        elif i == store.unlocked_index:
            mark = "open"
        else:
            mark = "locked"
        print(f"  {i}) {tier.label:<12} depth {tier.depth}  [{mark}]  {tier.description}")


def play(engine: Engine, human_color: bool, store: ProgressStore) -> str:
    """Game loop. Returns the final status string."""
    board = engine.board
    while not board.is_game_over():
        engine.print_board()
        print("----------------------------")

        if board.turn == human_color:
            try:
                text = input("Your move: ").strip()
            except EOFError:
                return "aborted"
            if text == "quit":
                return "aborted"
            if text == "undo":
                if engine.undo_round() == 0:
                    print("Nothing to undo.")
                continue
            if text == "history":
                print(" ".join(board.move_history) or "No moves yet.")
                continue
            if text == "moves":
                print(" ".join(m.uci() for m in board.legal_moves()))
                continue
            if text in ("board", ""):
                continue
            if not engine.make_move(text):
                print(f"Illegal move, try again. {HELP}")
        else:
            move = engine.play_engine_move()
            if move is None:
                break
            print(f"Engine plays: {move.uci()}")

    engine.print_board()
    status = board.status()
    print(f"Game over: {status} ({board.result()})")
    if status == "checkmate" and board.turn != human_color:
        result = store.record_win(engine.tier)
        if result.completed_all:
            print("You have beaten every level!")
        elif result.newly_unlocked:
            print(f"{result.newly_unlocked.label} is now unlocked!")
    return status


def main(argv=None):
    setup_logging()
    args = build_parser().parse_args(argv)
    store = ProgressStore(path=args.progress)
    if args.reset_progress:
        store.reset()

    print("Levels:")
    print_levels(store)

    tier = args.tier or tier_names()[store.unlocked_index]
    if not args.ignore_locks and not store.is_unlocked(tier):
        print(f"{tier_for(tier).label} is locked. Beat the previous level first.")
        return 1

    try:
        engine = Engine(tier=tier, fen=args.fen)
    except ParseError as e:
        print(e)
        return 1
    human = chess.WHITE if args.color == "white" else chess.BLACK
    print(f"Playing {tier_for(tier).label} as {args.color}. {HELP}")
    log.info("new game tier=%s color=%s", tier, args.color)
    play(engine, human, store)
    return 0


if __name__ == "__main__":
    sys.exit(main())
