"""Move generation and attack detection tests.

Perft counts below only reach depths where castling, en-passant and
promotion cannot occur, so the reference values apply to this rule subset.
"""

import pytest

from chessmind.core.board import Board
from chessmind.core.enums import Color
from chessmind.core.move_generator import MoveGenerator
from chessmind.core.notation import board_from_placement
from chessmind.core.types import Position


def perft(board: Board, color: Color, depth: int) -> int:
    if depth == 0:
        return 1
    nodes = 0
    for move in MoveGenerator(board).generate_legal_moves(color):
        nodes += perft(board.apply_move(move), color.opposite, depth - 1)
    return nodes


def _targets(placement: str, pos: Position) -> set[Position]:
    board = board_from_placement(placement)
    piece = board[pos]
    assert piece is not None
    return set(MoveGenerator(board).pseudo_legal_targets(piece, pos))


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft(Board.initial(), Color.WHITE, 1) == 20

    def test_depth_2(self) -> None:
        assert perft(Board.initial(), Color.WHITE, 2) == 400

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(Board.initial(), Color.WHITE, 3) == 8_902


# ── Pawns ────────────────────────────────────────────────────────────────────


class TestPawn:
    def test_white_single_and_double_from_start(self) -> None:
        targets = _targets("8/8/8/8/8/8/4P3/8", Position(6, 4))
        assert targets == {Position(5, 4), Position(4, 4)}

    def test_black_moves_down(self) -> None:
        targets = _targets("8/4p3/8/8/8/8/8/8", Position(1, 4))
        assert targets == {Position(2, 4), Position(3, 4)}

    def test_no_double_after_start_row(self) -> None:
        targets = _targets("8/8/8/8/8/4P3/8/8", Position(5, 4))
        assert targets == {Position(4, 4)}

    def test_blocked_in_front(self) -> None:
        targets = _targets("8/8/8/8/8/4n3/4P3/8", Position(6, 4))
        assert targets == set()

    def test_double_blocked_on_landing(self) -> None:
        targets = _targets("8/8/8/8/4n3/8/4P3/8", Position(6, 4))
        assert targets == {Position(5, 4)}

    def test_diagonal_capture_only_enemies(self) -> None:
        targets = _targets("8/8/8/8/8/3n1N2/4P3/8", Position(6, 4))
        assert Position(5, 3) in targets
        assert Position(5, 5) not in targets

    def test_edge_file_capture_stays_on_board(self) -> None:
        targets = _targets("8/8/8/8/8/1n6/P7/8", Position(6, 0))
        assert Position(5, 1) in targets
        assert all(t.is_valid for t in targets)


# ── Pieces ───────────────────────────────────────────────────────────────────


class TestPieces:
    def test_knight_in_corner(self) -> None:
        targets = _targets("8/8/8/8/8/8/8/N7", Position(7, 0))
        assert targets == {Position(5, 1), Position(6, 2)}

    def test_knight_jumps_over_pieces(self) -> None:
        board = Board.initial()
        knight = board[Position(7, 6)]
        assert knight is not None
        targets = MoveGenerator(board).pseudo_legal_targets(knight, Position(7, 6))
        assert set(targets) == {Position(5, 5), Position(5, 7)}

    def test_rook_on_empty_board(self) -> None:
        assert len(_targets("8/8/8/3R4/8/8/8/8", Position(3, 3))) == 14

    def test_bishop_on_empty_board(self) -> None:
        assert len(_targets("8/8/8/3B4/8/8/8/8", Position(3, 3))) == 13

    def test_queen_is_rook_plus_bishop(self) -> None:
        assert len(_targets("8/8/8/3Q4/8/8/8/8", Position(3, 3))) == 27

    def test_king_in_corner(self) -> None:
        targets = _targets("K7/8/8/8/8/8/8/8", Position(0, 0))
        assert targets == {Position(0, 1), Position(1, 0), Position(1, 1)}

    def test_slider_stops_at_capture(self) -> None:
        targets = _targets("8/8/8/8/8/8/8/R2n4", Position(7, 0))
        assert Position(7, 3) in targets
        assert Position(7, 4) not in targets

    def test_slider_stops_before_own_piece(self) -> None:
        targets = _targets("8/8/8/8/8/8/8/R2N4", Position(7, 0))
        assert Position(7, 2) in targets
        assert Position(7, 3) not in targets

    def test_targets_never_hold_own_piece(self) -> None:
        board = Board.initial()
        gen = MoveGenerator(board)
        for move in gen.generate_pseudo_legal_moves(Color.WHITE):
            target = board[move.to_pos]
            assert target is None or target.color == Color.BLACK


# ── Legality ─────────────────────────────────────────────────────────────────


class TestLegality:
    def test_pinned_rook_stays_on_file(self) -> None:
        board = board_from_placement("k3r3/8/8/8/8/8/4R3/4K3")
        gen = MoveGenerator(board)
        rook_moves = [
            m for m in gen.generate_legal_moves(Color.WHITE) if m.from_pos == Position(6, 4)
        ]
        assert len(rook_moves) == 6
        assert all(m.to_pos.col == 4 for m in rook_moves)

    def test_legal_subset_of_pseudo(self) -> None:
        board = board_from_placement("k3r3/8/8/8/8/8/4R3/4K3")
        gen = MoveGenerator(board)
        legal = gen.generate_legal_moves(Color.WHITE)
        pseudo = gen.generate_pseudo_legal_moves(Color.WHITE)
        assert all(m in pseudo for m in legal)
        assert len(legal) < len(pseudo)

    def test_no_legal_move_leaves_king_in_check(self) -> None:
        board = board_from_placement("4k3/8/8/8/1b6/8/3P4/4K3")
        legal = MoveGenerator(board).generate_legal_moves(Color.WHITE)
        assert all(m.from_pos != Position(6, 3) for m in legal)
        for move in legal:
            assert not MoveGenerator(board.apply_move(move)).is_in_check(Color.WHITE)

    def test_missing_king_never_in_check(self) -> None:
        board = board_from_placement("3q4/8/8/8/8/8/8/3R4")
        gen = MoveGenerator(board)
        assert not gen.is_in_check(Color.WHITE)
        assert len(gen.generate_legal_moves(Color.WHITE)) == len(
            gen.generate_pseudo_legal_moves(Color.WHITE)
        )

    def test_legal_targets_for_square(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert set(gen.legal_targets(Position(6, 4))) == {Position(5, 4), Position(4, 4)}
        assert gen.legal_targets(Position(4, 4)) == []

    def test_generation_order_row_major(self) -> None:
        moves = MoveGenerator(Board.initial()).generate_legal_moves(Color.WHITE)
        rows = [m.from_pos.row for m in moves]
        assert rows == sorted(rows)


# ── Attacks ──────────────────────────────────────────────────────────────────


class TestAttacks:
    def test_rook_attacks_file(self) -> None:
        board = board_from_placement("8/8/8/8/8/8/8/R7")
        gen = MoveGenerator(board)
        assert gen.is_square_attacked(Position(0, 0), Color.WHITE)
        assert not gen.is_square_attacked(Position(0, 1), Color.WHITE)

    def test_pawn_forward_square_counts_as_attacked(self) -> None:
        board = board_from_placement("8/8/8/8/8/8/4P3/8")
        gen = MoveGenerator(board)
        assert gen.is_square_attacked(Position(5, 4), Color.WHITE)
        # Empty diagonals are not pawn targets.
        assert not gen.is_square_attacked(Position(5, 3), Color.WHITE)

    def test_initial_board_not_in_check(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert not gen.is_in_check(Color.WHITE)
        assert not gen.is_in_check(Color.BLACK)
