"""Tests for attack detection."""

import pytest

from chessbox.core.attacks import (
    KING_TARGETS,
    KNIGHT_TARGETS,
    ROOK_RAYS,
    attackers_of,
    is_in_check,
    is_square_attacked,
)
from chessbox.core.board import Board
from chessbox.core.enums import Color
from chessbox.core.errors import SquareError
from chessbox.core.notation import STARTING_FEN, position_from_fen
from chessbox.core.types import A1, A8, E4, H1, H8, parse_square


def _squares(*names: str) -> set[int]:
    return {parse_square(name) for name in names}


class TestTables:
    def test_knight_corner(self) -> None:
        assert sorted(KNIGHT_TARGETS[A1]) == sorted(_squares("b3", "c2"))

    def test_king_center(self) -> None:
        assert len(KING_TARGETS[E4]) == 8

    def test_rays_stop_at_edge(self) -> None:
        # From h1 going right there is no ray at all; going up it ends on h8.
        rays = ROOK_RAYS[H1]
        assert () in rays
        assert any(ray and ray[-1] == H8 for ray in rays)
        assert all(A8 not in ray for ray in rays)


ATTACK_VECTORS = [
    (
        "8/5Q2/6nb/3Np3/4K2r/6P1/8/2B2R2 w - - 0 1",
        "f4",
        ["c1", "f1", "g3", "e4", "h4", "d5", "e5", "g6", "h6", "f7"],
    ),
    ("8/5P2/1QN1k3/8/1b1q2R1/2np3B/2r5/4K3 w - - 5 6", "e6", []),
    ("8/5P2/1QN1k3/8/1b1q2R1/2np3B/2r5/4K3 w - - 5 6", "e1", []),
    ("8/5P2/1QN1k3/8/1b1q4/3p3B/2r5/4K3 w - - 5 6", "e6", ["h3"]),
    ("8/5P2/1QN1k3/8/1b1q4/3p3B/2r5/4K3 w - - 5 6", "e1", ["b4"]),
    ("8/5P2/1Q2k3/8/1b1q2R1/2np3B/8/2r1K3 w - - 5 6", "e6", ["b6"]),
    ("8/5P2/1Q2k3/8/1b1q2R1/2np3B/8/2r1K3 w - - 5 6", "e1", ["c1"]),
    ("8/2N5/4k3/8/3K4/8/2n5/8 w - - 5 6", "e6", ["c7"]),
    ("8/2N5/4k3/8/3K4/8/2n5/8 w - - 5 6", "d4", ["c2"]),
    ("2B5/1P6/k7/8/6p1/7K/8/8 w - - 5 6", "h3", ["g4"]),
    ("2B5/1P6/k7/8/6p1/7K/8/8 w - - 5 6", "a6", []),
    ("8/8/8/8/8/4k3/8/K7 w - - 5 6", "a1", []),
    ("8/8/8/8/8/4k3/8/K7 w - - 5 6", "e2", ["e3"]),
    ("8/8/8/8/8/4k3/8/K7 w - - 5 6", "f3", ["e3"]),
    ("8/8/8/8/8/4k3/8/K7 w - - 5 6", "d4", ["e3"]),
    ("8/8/8/8/2b5/1k6/3K4/1r3N2 w - - 5 6", "d2", []),
    ("k7/8/1NK5/8/8/8/8/8 b - - 5 6", "a8", ["b6"]),
    ("3q4/8/8/8/8/8/3K4/8 w - - 5 6", "d2", ["d8"]),
    ("3q4/8/3p4/3r4/3b4/8/3K4/8 w - - 5 6", "d2", []),
    ("8/8/8/8/8/8/3K1RQq/8 w - - 5 6", "d2", []),
    ("8/8/8/8/8/1q1Q2k1/8/7K b - - 5 6", "g3", ["d3"]),
    ("8/8/8/8/8/6kR/8/7K b - - 5 6", "g3", ["h3"]),
    ("6k1/8/8/6N1/8/8/8/6R1 b - - 5 6", "g8", []),
    ("7q/8/8/8/8/8/8/K7 w - - 5 6", "a1", ["h8"]),
    ("8/1N6/8/3K4/8/1b6/8/7Q w - - 5 6", "d5", ["b3"]),
    ("8/8/3K4/2p1p3/8/8/8/8 w - - 5 6", "d6", []),
    ("8/8/8/3r3q/8/5k2/4P3/8 b - - 5 6", "f3", ["e2"]),
    ("8/1B6/2P5/5P2/4k3/5b2/2R5/1Q6 b - - 5 6", "e4", []),
    ("8/5P2/1QN1k3/8/1b1q4/3p3B/2r5/4K3 b - - 5 6", "e6", ["h3"]),
]


class TestAttackersOf:
    @pytest.mark.parametrize("fen, square, expected", ATTACK_VECTORS)
    def test_vectors(self, fen: str, square: str, expected: list[str]) -> None:
        board = position_from_fen(fen).board
        assert attackers_of(board, parse_square(square)) == _squares(*expected)

    def test_by_color_filter(self) -> None:
        board = position_from_fen("8/5Q2/6nb/3Np3/4K2r/6P1/8/2B2R2 w - - 0 1").board
        f4 = parse_square("f4")
        assert attackers_of(board, f4, Color.BLACK) == _squares("h4", "e5", "g6", "h6")
        assert attackers_of(board, f4, Color.WHITE) == _squares(
            "c1", "f1", "g3", "e4", "d5", "f7"
        )

    def test_idempotent(self) -> None:
        board = position_from_fen(ATTACK_VECTORS[0][0]).board
        f4 = parse_square("f4")
        assert attackers_of(board, f4) == attackers_of(board, f4)

    @pytest.mark.parametrize("sq", [-1, 64])
    def test_off_board(self, sq: int) -> None:
        with pytest.raises(SquareError):
            attackers_of(Board(), sq)


class TestCheck:
    def test_start_not_in_check(self) -> None:
        board = position_from_fen(STARTING_FEN).board
        assert not is_in_check(board, Color.WHITE)
        assert not is_in_check(board, Color.BLACK)

    def test_queen_check(self) -> None:
        board = position_from_fen(
            "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
        ).board
        assert is_in_check(board, Color.WHITE)
        assert not is_in_check(board, Color.BLACK)

    def test_missing_king_is_not_in_check(self) -> None:
        assert not is_in_check(Board(), Color.WHITE)

    def test_is_square_attacked(self) -> None:
        board = position_from_fen(STARTING_FEN).board
        assert is_square_attacked(board, parse_square("f3"), Color.WHITE)
        assert not is_square_attacked(board, parse_square("e4"), Color.WHITE)
        assert is_square_attacked(board, parse_square("f6"), Color.BLACK)
