"""
Test suite for the tierchess core.

Covers:
- Board operations (parsing, legality, undo, snapshot, move fields)
- Evaluator (terminal scores, draws, symmetry, purity)
- Move ordering (most valuable victim first, stable ties)
- Search (agreement with plain minimax, board restoration, error propagation)
- Difficulty table (values, immutability, unknown tiers)
"""

import dataclasses
from unittest.mock import MagicMock

import chess
import pytest

from tierchess.core.board import ChessBoard, Move
from tierchess.core.evaluator import Evaluator
from tierchess.core.ordering import order_moves, victim_value
from tierchess.core.search import SearchEngine, INF
from tierchess.core.tables import MATE_SCORE, PIECE_VALUES, PST
from tierchess.difficulty import (
    TIERS,
    DifficultyProfile,
    profile_for,
    tier_at,
    tier_for,
    tier_index,
    tier_names,
)
from tierchess.errors import IllegalMove, InvalidTier, ParseError, TierChessError

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 0 1"
BLACK_MATED = "R5k1/5ppp/8/8/8/8/8/6K1 b - - 0 1"
STALEMATE = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"
BARE_KINGS = "8/8/8/4k3/8/8/8/4K3 w - - 0 1"
ITALIAN = "r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3"
KP_ENDGAME = "4k3/8/8/8/8/8/4P3/4K3 w - - 0 1"
HANGING_QUEEN = "4k3/8/8/3q4/8/8/8/3RK3 w - - 0 1"


# ════════════════════════════════════════════════════════════════════════════
#  BOARD TESTS
# ════════════════════════════════════════════════════════════════════════════

class TestChessBoard:
    def test_initial_position(self):
        b = ChessBoard()
        assert b.fen() == chess.STARTING_FEN
        assert b.turn == chess.WHITE

    def test_invalid_fen_raises_parse_error(self):
        with pytest.raises(ParseError):
            ChessBoard("not a fen")

    def test_empty_fen_raises_parse_error(self):
        with pytest.raises(ParseError):
            ChessBoard("")
        with pytest.raises(ParseError):
            ChessBoard("   ")

    def test_none_fen_is_start_position(self):
        assert ChessBoard(None).fen() == chess.STARTING_FEN

    def test_set_fen_keeps_position_on_failure(self):
        b = ChessBoard()
        b.apply_move("e2e4")
        fen = b.fen()
        with pytest.raises(ParseError):
            b.set_fen("8/8/8")
        assert b.fen() == fen

    def test_apply_legal_move(self):
        b = ChessBoard()
        b.apply_move("e2e4")
        assert b.move_history == ["e2e4"]
        assert b.turn == chess.BLACK

    def test_apply_illegal_move(self):
        b = ChessBoard()
        with pytest.raises(IllegalMove):
            b.apply_move("e2e5")
        assert b.fen() == chess.STARTING_FEN

    def test_apply_illegal_move_value(self):
        b = ChessBoard()
        with pytest.raises(IllegalMove) as exc:
            b.apply_move(Move(chess.E2, chess.E5, chess.WHITE))
        assert "e2e5" in str(exc.value)

    def test_garbage_move_text(self):
        b = ChessBoard()
        with pytest.raises(ParseError):
            b.apply_move("zzzz")
        with pytest.raises(ParseError):
            b.apply_move("")

    def test_undo_restores_fen(self):
        b = ChessBoard(ITALIAN)
        for move in b.legal_moves():
            b.apply_move(move)
            undone = b.undo_last_move()
            assert undone == move
            assert b.fen() == ITALIAN

    def test_undo_empty(self):
        b = ChessBoard()
        assert b.undo_last_move() is None
        assert b.fen() == chess.STARTING_FEN

    def test_undo_restores_castling_rights(self):
        fen = "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq - 0 1"
        b = ChessBoard(fen)
        b.apply_move("e1g1")
        assert b.piece_at(chess.G1) == (chess.KING, chess.WHITE)
        assert b.piece_at(chess.F1) == (chess.ROOK, chess.WHITE)
        b.undo_last_move()
        assert b.fen() == fen

    def test_copy_is_independent(self):
        b = ChessBoard()
        c = b.copy()
        c.apply_move("e2e4")
        assert b.fen() == chess.STARTING_FEN
        assert c.move_history == ["e2e4"]

    def test_legal_moves_initial(self):
        assert len(ChessBoard().legal_moves()) == 20
        assert ChessBoard().legal_move_count() == 20

    def test_legal_moves_square_filter(self):
        b = ChessBoard()
        assert sorted(m.uci() for m in b.legal_moves("g1")) == ["g1f3", "g1h3"]
        assert sorted(m.uci() for m in b.legal_moves(chess.E2)) == ["e2e3", "e2e4"]
        assert b.legal_moves("e4") == []

    def test_legal_moves_bad_square(self):
        with pytest.raises(ParseError):
            ChessBoard().legal_moves("z9")
        with pytest.raises(ParseError):
            ChessBoard().legal_moves(64)

    def test_en_passant_counts_as_pawn_capture(self):
        b = ChessBoard("rnbqkbnr/ppp1p1pp/8/3pPp2/8/8/PPPP1PPP/RNBQKBNR w KQkq f6 0 3")
        move = b.parse_move("e5f6")
        assert move.captured == chess.PAWN
        assert move.is_capture

    def test_promotion_fields(self):
        b = ChessBoard("8/P7/8/8/8/8/8/4K2k w - - 0 1")
        promos = {m.promotion for m in b.legal_moves("a7")}
        assert promos == {chess.QUEEN, chess.ROOK, chess.BISHOP, chess.KNIGHT}
        b.apply_move("a7a8q")
        assert b.piece_at(chess.A8) == (chess.QUEEN, chess.WHITE)

    def test_move_text_round_trip(self):
        b = ChessBoard("8/P7/8/8/8/8/8/4K2k w - - 0 1")
        move = b.parse_move("a7a8n")
        assert move.uci() == "a7a8n"
        assert str(move) == "a7a8n"
        assert move.color == chess.WHITE

    def test_snapshot_orientation(self):
        grid = ChessBoard().board_snapshot()
        assert grid[0][0] == (chess.ROOK, chess.BLACK)
        assert grid[0][4] == (chess.KING, chess.BLACK)
        assert grid[7][4] == (chess.KING, chess.WHITE)
        assert grid[6][0] == (chess.PAWN, chess.WHITE)
        assert grid[4] == [None] * 8

    def test_checkmate_status(self):
        b = ChessBoard(FOOLS_MATE)
        assert b.legal_moves() == []
        assert b.is_checkmate()
        assert b.is_game_over()
        assert b.status() == "checkmate"
        assert b.result() == "0-1"

    def test_stalemate_status(self):
        b = ChessBoard(STALEMATE)
        assert b.is_stalemate()
        assert b.status() == "stalemate"
        assert b.result() == "1/2-1/2"

    def test_insufficient_material_is_draw(self):
        b = ChessBoard(BARE_KINGS)
        assert b.is_draw()
        assert b.is_game_over()
        assert b.status() == "draw"

    def test_threefold_repetition_is_draw(self):
        b = ChessBoard()
        for _ in range(2):
            for text in ("g1f3", "g8f6", "f3g1", "f6g8"):
                b.apply_move(text)
        assert b.is_draw()
        assert b.is_game_over()

    def test_check_status(self):
        b = ChessBoard("4k3/8/8/8/8/8/8/4RK2 b - - 0 1")
        assert b.is_check()
        assert b.status() == "check"
        assert b.result() == "*"


# ════════════════════════════════════════════════════════════════════════════
#  EVALUATOR TESTS
# ════════════════════════════════════════════════════════════════════════════

class TestEvaluator:
    def setup_method(self):
        self.ev = Evaluator()

    def test_white_mated_scores_minus_mate(self):
        assert self.ev.evaluate(ChessBoard(FOOLS_MATE)) == -MATE_SCORE

    def test_black_mated_scores_plus_mate(self):
        assert self.ev.evaluate(ChessBoard(BLACK_MATED)) == MATE_SCORE

    def test_mate_score_value(self):
        assert MATE_SCORE == 99999

    def test_stalemate_is_zero(self):
        assert self.ev.evaluate(ChessBoard(STALEMATE)) == 0

    def test_insufficient_material_is_zero(self):
        assert self.ev.evaluate(ChessBoard(BARE_KINGS)) == 0

    def test_repetition_is_zero(self):
        b = ChessBoard()
        for _ in range(2):
            for text in ("g1f3", "g8f6", "f3g1", "f6g8"):
                b.apply_move(text)
        assert self.ev.evaluate(b) == 0

    def test_start_position_is_only_mobility(self):
        # Material and tables cancel; 20 white moves * 0.1.
        assert self.ev.evaluate(ChessBoard()) == pytest.approx(2.0)

    def test_mobility_sign_follows_side_to_move(self):
        b = ChessBoard()
        b.apply_move("g1f3")
        b.apply_move("g8f6")
        white = self.ev.evaluate(b)
        b.apply_move("f3g1")
        black = self.ev.evaluate(b)
        assert white > 0
        assert black < white

    @pytest.mark.parametrize("fen", [ITALIAN, KP_ENDGAME, HANGING_QUEEN])
    def test_color_mirror_negates_score(self, fen):
        mirrored = chess.Board(fen).mirror().fen()
        assert self.ev.evaluate(ChessBoard(mirrored)) == pytest.approx(
            -self.ev.evaluate(ChessBoard(fen))
        )

    def test_extra_queen_favors_owner(self):
        assert self.ev.evaluate(ChessBoard(HANGING_QUEEN)) < -300

    def test_evaluate_does_not_modify_board(self):
        b = ChessBoard(ITALIAN)
        self.ev.evaluate(b)
        assert b.fen() == ITALIAN
        assert b.move_history == []

    def test_material_balance(self):
        assert Evaluator.material(ChessBoard()) == 0
        assert Evaluator.material(ChessBoard(HANGING_QUEEN)) == 500 - 900

    def test_positional_value_mirrors_rows(self):
        # A white pawn on e2 (row 6) and a black pawn on e7 (row 1) read the same entry.
        white = Evaluator.positional_value(chess.PAWN, chess.WHITE, 6, 4)
        black = Evaluator.positional_value(chess.PAWN, chess.BLACK, 1, 4)
        assert white == black == PST[chess.PAWN][12]

    def test_piece_values(self):
        assert PIECE_VALUES[chess.PAWN] == 100
        assert PIECE_VALUES[chess.KNIGHT] == 320
        assert PIECE_VALUES[chess.BISHOP] == 330
        assert PIECE_VALUES[chess.ROOK] == 500
        assert PIECE_VALUES[chess.QUEEN] == 900
        assert PIECE_VALUES[chess.KING] == 20000

    def test_tables_have_64_entries(self):
        for table in PST.values():
            assert len(table) == 64


# ════════════════════════════════════════════════════════════════════════════
#  MOVE ORDERING TESTS
# ════════════════════════════════════════════════════════════════════════════

class TestMoveOrdering:
    def test_most_valuable_victim_first(self):
        quiet = Move(chess.A1, chess.A2, chess.WHITE)
        takes_pawn = Move(chess.B1, chess.B2, chess.WHITE, captured=chess.PAWN)
        takes_queen = Move(chess.C1, chess.C2, chess.WHITE, captured=chess.QUEEN)
        takes_rook = Move(chess.D1, chess.D2, chess.WHITE, captured=chess.ROOK)
        ordered = order_moves([quiet, takes_pawn, takes_queen, takes_rook])
        assert ordered == [takes_queen, takes_rook, takes_pawn, quiet]

    def test_ties_keep_input_order(self):
        a = Move(chess.A1, chess.A2, chess.WHITE, captured=chess.KNIGHT)
        b = Move(chess.B1, chess.B2, chess.WHITE)
        c = Move(chess.C1, chess.C2, chess.WHITE, captured=chess.KNIGHT)
        d = Move(chess.D1, chess.D2, chess.WHITE)
        assert order_moves([b, a, d, c]) == [a, c, b, d]

    def test_quiet_moves_unchanged(self):
        moves = ChessBoard().legal_moves()
        assert order_moves(moves) == moves

    def test_is_permutation(self):
        moves = ChessBoard(ITALIAN).legal_moves()
        ordered = order_moves(moves)
        assert sorted(ordered, key=Move.uci) == sorted(moves, key=Move.uci)

    def test_victim_value(self):
        assert victim_value(Move(chess.A1, chess.A2, chess.WHITE)) == 0
        assert victim_value(Move(chess.A1, chess.A2, chess.WHITE, captured=chess.ROOK)) == 500

    def test_does_not_mutate_input(self):
        moves = [
            Move(chess.A1, chess.A2, chess.WHITE),
            Move(chess.B1, chess.B2, chess.WHITE, captured=chess.QUEEN),
        ]
        snapshot = list(moves)
        order_moves(moves)
        assert moves == snapshot


# ════════════════════════════════════════════════════════════════════════════
#  SEARCH TESTS
# ════════════════════════════════════════════════════════════════════════════

class TestSearch:
    def setup_method(self):
        self.engine = SearchEngine()

    @pytest.mark.parametrize(
        "fen,depth",
        [
            (chess.STARTING_FEN, 2),
            (ITALIAN, 2),
            (KP_ENDGAME, 3),
            (HANGING_QUEEN, 2),
        ],
    )
    def test_pruning_matches_minimax(self, fen, depth):
        b = ChessBoard(fen)
        maximizing = b.turn == chess.WHITE
        pruned = self.engine.search(b, depth, -INF, INF, maximizing)
        pruned_nodes = self.engine.nodes
        self.engine.nodes = 0
        full = self.engine.minimax(b, depth, maximizing)
        assert pruned == pytest.approx(full)
        assert pruned_nodes <= self.engine.nodes

    def test_board_restored_after_search(self):
        b = ChessBoard(ITALIAN)
        self.engine.search(b, 2, -INF, INF, True)
        assert b.fen() == ITALIAN
        assert b.move_history == []

    def test_depth_zero_is_static_eval(self):
        b = ChessBoard(ITALIAN)
        assert self.engine.search(b, 0, -INF, INF, True) == Evaluator().evaluate(b)

    def test_terminal_position_returns_eval(self):
        b = ChessBoard(FOOLS_MATE)
        assert self.engine.search(b, 3, -INF, INF, True) == -MATE_SCORE
        assert self.engine.nodes == 1

    def test_finds_mate_value(self):
        b = ChessBoard("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
        assert self.engine.search(b, 1, -INF, INF, True) == MATE_SCORE

    def test_counts_nodes(self):
        self.engine.search(ChessBoard(), 1, -INF, INF, True)
        assert self.engine.nodes == 21

    def test_illegal_move_propagates(self):
        board = MagicMock()
        board.is_game_over.return_value = False
        board.legal_moves.return_value = [Move(chess.E2, chess.E4, chess.WHITE)]
        board.apply_move.side_effect = IllegalMove("e2e4")
        with pytest.raises(IllegalMove):
            self.engine.search(board, 2, -INF, INF, True)
        board.undo_last_move.assert_not_called()

    def test_failure_below_root_still_unwinds(self):
        board = MagicMock()
        board.is_game_over.return_value = False
        board.legal_moves.return_value = [Move(chess.E2, chess.E4, chess.WHITE)]
        board.apply_move.side_effect = [None, IllegalMove("e7e5")]
        with pytest.raises(IllegalMove):
            self.engine.search(board, 3, -INF, INF, True)
        assert board.undo_last_move.call_count == 1


# ════════════════════════════════════════════════════════════════════════════
#  DIFFICULTY TABLE TESTS
# ════════════════════════════════════════════════════════════════════════════

class TestDifficulty:
    EXPECTED = {
        "beginner": (1, 0.80),
        "easy": (2, 0.40),
        "medium": (3, 0.10),
        "hard": (4, 0.05),
        "expert": (5, 0.0),
        "master": (6, 0.0),
        "grandmaster": (7, 0.0),
    }

    def test_table_values(self):
        for name, (depth, randomness) in self.EXPECTED.items():
            profile = profile_for(name)
            assert profile.depth == depth
            assert profile.randomness == randomness

    def test_exactly_seven_tiers_in_order(self):
        assert tier_names() == tuple(self.EXPECTED)
        assert len(TIERS) == 7

    def test_depth_increases_randomness_never_does(self):
        profiles = [profile_for(n) for n in tier_names()]
        for weaker, stronger in zip(profiles, profiles[1:]):
            assert stronger.depth > weaker.depth
            assert stronger.randomness <= weaker.randomness

    def test_unknown_tier(self):
        with pytest.raises(InvalidTier) as exc:
            profile_for("impossible")
        assert exc.value.name == "impossible"
        assert isinstance(exc.value, KeyError)
        assert isinstance(exc.value, TierChessError)
        assert "impossible" in str(exc.value)

    def test_tier_names_are_case_sensitive(self):
        with pytest.raises(InvalidTier):
            tier_for("Expert")

    def test_non_string_tier(self):
        with pytest.raises(InvalidTier):
            tier_for(None)
        with pytest.raises(InvalidTier):
            tier_for(["expert"])

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            TIERS["cheater"] = TIERS["beginner"]

    def test_profile_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            profile_for("expert").depth = 1

    def test_profile_validation(self):
        with pytest.raises(ValueError):
            DifficultyProfile(0, 0.0)
        with pytest.raises(ValueError):
            DifficultyProfile(2, 1.5)
        with pytest.raises(ValueError):
            DifficultyProfile(2, -0.1)

    def test_labels(self):
        assert tier_for("grandmaster").label == "Grandmaster"
        assert tier_for("beginner").description

    def test_index_lookup(self):
        assert tier_index("beginner") == 0
        assert tier_index("grandmaster") == 6
        assert tier_at(4).name == "expert"
        with pytest.raises(InvalidTier):
            tier_at(7)
