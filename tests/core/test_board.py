"""Tests for Board placement and queries."""

import pytest

from chessbox.core.board import Board
from chessbox.core.enums import Color, PieceType
from chessbox.core.errors import FormatError
from chessbox.core.piece import Piece
from chessbox.core.types import (
    A1, B1, C1, D1, E1, F1, G1, H1,
    E2, E4,
    A8, B8, C8, D8, E8, F8, G8, H8,
)


class TestBoardInitial:
    def test_white_king_position(self) -> None:
        board = Board.initial()
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)

    def test_black_king_position(self) -> None:
        board = Board.initial()
        assert board[E8] == Piece(Color.BLACK, PieceType.KING)

    def test_back_ranks(self) -> None:
        board = Board.initial()
        expected = [
            (A1, A8, PieceType.ROOK),
            (B1, B8, PieceType.KNIGHT),
            (C1, C8, PieceType.BISHOP),
            (D1, D8, PieceType.QUEEN),
            (E1, E8, PieceType.KING),
            (F1, F8, PieceType.BISHOP),
            (G1, G8, PieceType.KNIGHT),
            (H1, H8, PieceType.ROOK),
        ]
        for white_sq, black_sq, pt in expected:
            assert board[white_sq] == Piece(Color.WHITE, pt), f"Mismatch at {white_sq}"
            assert board[black_sq] == Piece(Color.BLACK, pt), f"Mismatch at {black_sq}"

    def test_pawns(self) -> None:
        board = Board.initial()
        assert board.pieces(Color.WHITE, PieceType.PAWN) == list(range(8, 16))
        assert board.pieces(Color.BLACK, PieceType.PAWN) == list(range(48, 56))

    def test_empty_middle(self) -> None:
        board = Board.initial()
        for sq in range(16, 48):
            assert board[sq] is None


class TestBoardOperations:
    def test_set_and_get(self) -> None:
        board = Board()
        piece = Piece(Color.WHITE, PieceType.PAWN)
        board[E4] = piece
        assert board[E4] == piece
        assert board.is_empty(E2)

    def test_copy_independence(self) -> None:
        board = Board.initial()
        copy = board.copy()
        assert board == copy
        copy[E1] = None
        assert board != copy
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)

    def test_king_square(self) -> None:
        board = Board.initial()
        assert board.king_square(Color.WHITE) == E1
        assert board.king_square(Color.BLACK) == E8

    def test_missing_king(self) -> None:
        assert Board().king_square(Color.WHITE) is None

    def test_all_pieces_count(self) -> None:
        board = Board.initial()
        assert len(board.all_pieces(Color.WHITE)) == 16
        assert len(board.all_pieces(Color.BLACK)) == 16

    def test_items_skip_empty_squares(self) -> None:
        board = Board()
        board[E4] = Piece(Color.BLACK, PieceType.QUEEN)
        assert list(board.items()) == [(E4, Piece(Color.BLACK, PieceType.QUEEN))]

    def test_clear(self) -> None:
        board = Board.initial()
        board.clear()
        assert list(board.items()) == []

    def test_repr(self) -> None:
        text = repr(Board.initial())
        assert text.splitlines()[0] == "8 r n b q k b n r"
        assert text.splitlines()[-1] == "  a b c d e f g h"


class TestPiece:
    def test_from_char(self) -> None:
        assert Piece.from_char("n") == Piece(Color.BLACK, PieceType.KNIGHT)
        assert str(Piece(Color.WHITE, PieceType.QUEEN)) == "Q"

    def test_bad_char(self) -> None:
        with pytest.raises(FormatError):
            Piece.from_char("x")

    def test_promotion_targets(self) -> None:
        assert Piece(Color.WHITE, PieceType.ROOK).is_promotion_target
        assert not Piece(Color.WHITE, PieceType.KING).is_promotion_target
        assert not Piece(Color.BLACK, PieceType.PAWN).is_promotion_target
