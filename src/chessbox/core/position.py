"""Position: complete board state with raw, unvalidated mutators.

The mutators here only keep the bookkeeping straight (side to move, clocks,
castling rights, en-passant target).  They do not ask whether a move is
legal; that is :mod:`chessbox.core.legality`'s job, which always applies
them to a private copy.
"""

from __future__ import annotations

from chessbox.core.board import Board
from chessbox.core.enums import SINGLE_CASTLING_RIGHTS, CastlingRights, Color, PieceType
from chessbox.core.errors import CastlingError, PlacementError, PromotionError
from chessbox.core.piece import Piece
from chessbox.core.types import (
    Square,
    ensure_square,
    file_of,
    make_square,
    rank_of,
    square_name,
)

# Rook home squares and the right each one guards.
ROOK_CORNERS: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}

_COLOR_RIGHTS: dict[Color, CastlingRights] = {
    Color.WHITE: CastlingRights.WHITE_BOTH,
    Color.BLACK: CastlingRights.BLACK_BOTH,
}


class CastlingGeometry:
    """Fixed squares involved in one castling right."""

    __slots__ = ("color", "king_from", "king_to", "rook_from", "rook_to")

    def __init__(self, right: CastlingRights) -> None:
        if right not in SINGLE_CASTLING_RIGHTS:
            raise CastlingError(f"Not a single castling right: {right!r}")
        kingside = right in (CastlingRights.WHITE_KINGSIDE, CastlingRights.BLACK_KINGSIDE)
        self.color = (
            Color.WHITE
            if right in (CastlingRights.WHITE_KINGSIDE, CastlingRights.WHITE_QUEENSIDE)
            else Color.BLACK
        )
        rank = 0 if self.color == Color.WHITE else 7
        self.king_from = make_square(4, rank)
        self.king_to = make_square(6 if kingside else 2, rank)
        self.rook_from = make_square(7 if kingside else 0, rank)
        self.rook_to = make_square(5 if kingside else 3, rank)

    @property
    def between(self) -> tuple[Square, ...]:
        """Squares strictly between king and rook."""
        lo, hi = sorted((self.king_from, self.rook_from))
        return tuple(range(lo + 1, hi))

    @property
    def king_path(self) -> tuple[Square, Square, Square]:
        """King start, the square it crosses, and its destination."""
        return (self.king_from, (self.king_from + self.king_to) // 2, self.king_to)


def castling_right_for(color: Color, king_to: Square) -> CastlingRights | None:
    """The castling right whose king lands on *king_to*, if any."""
    for right in SINGLE_CASTLING_RIGHTS:
        geometry = CASTLING_GEOMETRY[right]
        if geometry.color == color and geometry.king_to == king_to:
            return right
    return None


CASTLING_GEOMETRY: dict[CastlingRights, CastlingGeometry] = {
    right: CastlingGeometry(right) for right in SINGLE_CASTLING_RIGHTS
}


def pawn_direction(color: Color) -> int:
    """Rank delta of a forward pawn step."""
    return 1 if color == Color.WHITE else -1


def pawn_start_rank(color: Color) -> int:
    return 1 if color == Color.WHITE else 6


def promotion_rank(color: Color) -> int:
    return 7 if color == Color.WHITE else 0


class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    Carries no move history: only what is needed to judge the next move.
    Two positions are equal iff their diagrams are equal.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number

    # ── Queries ──────────────────────────────────────────────────────────

    def piece_at(self, sq: Square) -> Piece | None:
        """Piece on *sq*; raises :class:`SquareError` off the board."""
        return self.board[ensure_square(sq)]

    def king_square(self, color: Color) -> Square | None:
        return self.board.king_square(color)

    def has_castling(self, right: CastlingRights) -> bool:
        return bool(self.castling & right)

    # ── Raw mutators ─────────────────────────────────────────────────────

    def move_piece(self, from_sq: Square, to_sq: Square) -> None:
        """Relocate the piece on *from_sq* to *to_sq* and finish the ply.

        Handles the en-passant capture when a pawn lands on the target
        square, sets the new target after a double step, and drops castling
        rights when a king moves or a rook corner is vacated or captured on.
        Turn order and geometry are not checked.
        """
        ensure_square(from_sq)
        ensure_square(to_sq)
        board = self.board
        piece = board[from_sq]
        if piece is None:
            raise PlacementError(f"No piece on {square_name(from_sq)}")

        captured = board[to_sq]
        if (
            piece.piece_type == PieceType.PAWN
            and captured is None
            and to_sq == self.en_passant
        ):
            victim_sq = make_square(file_of(to_sq), rank_of(from_sq))
            victim = board[victim_sq]
            if victim == Piece(piece.color.opposite, PieceType.PAWN):
                board[victim_sq] = None
                captured = victim

        next_castling = self.castling
        if piece.piece_type == PieceType.KING:
            next_castling &= ~_COLOR_RIGHTS[piece.color]
        for sq in (from_sq, to_sq):
            if sq in ROOK_CORNERS:
                next_castling &= ~ROOK_CORNERS[sq]
        self.castling = next_castling

        next_en_passant: Square | None = None
        if (
            piece.piece_type == PieceType.PAWN
            and file_of(from_sq) == file_of(to_sq)
            and abs(rank_of(to_sq) - rank_of(from_sq)) == 2
        ):
            next_en_passant = (from_sq + to_sq) // 2

        board[from_sq] = None
        board[to_sq] = piece
        self._finish_ply(
            resets_clock=piece.piece_type == PieceType.PAWN or captured is not None,
            en_passant=next_en_passant,
        )

    def remove(self, sq: Square) -> Piece:
        """Take the piece off *sq* and return it."""
        piece = self.board[ensure_square(sq)]
        if piece is None:
            raise PlacementError(f"{square_name(sq)} is empty")
        self.board[sq] = None
        return piece

    def place(self, sq: Square, piece: Piece) -> None:
        """Put *piece* on the empty square *sq*."""
        if self.board[ensure_square(sq)] is not None:
            raise PlacementError(f"{square_name(sq)} is not empty")
        self.board[sq] = piece

    def castle(self, right: CastlingRights) -> None:
        """Perform the king and rook relocation for *right* in one step.

        Only availability of the right and emptiness of the squares between
        king and rook are checked here; attacked squares are the legality
        pipeline's concern.
        """
        geometry = CASTLING_GEOMETRY.get(right)
        if geometry is None:
            raise CastlingError(f"Not a single castling right: {right!r}")
        if not self.has_castling(right):
            raise CastlingError(f"Castling right {right.name} is not available")
        board = self.board
        king = Piece(geometry.color, PieceType.KING)
        rook = Piece(geometry.color, PieceType.ROOK)
        if board[geometry.king_from] != king or board[geometry.rook_from] != rook:
            raise CastlingError(f"King or rook is not home for {right.name}")
        if any(not board.is_empty(sq) for sq in geometry.between):
            raise CastlingError(f"Squares between king and rook are occupied for {right.name}")

        board[geometry.king_from] = None
        board[geometry.rook_from] = None
        board[geometry.king_to] = king
        board[geometry.rook_to] = rook
        self.castling &= ~_COLOR_RIGHTS[geometry.color]
        self._finish_ply(resets_clock=False, en_passant=None)

    def promote(self, from_sq: Square, to_sq: Square, piece: Piece) -> None:
        """Move the pawn on *from_sq* to *to_sq* and replace it with *piece*."""
        ensure_square(from_sq)
        ensure_square(to_sq)
        if not piece.is_promotion_target:
            raise PromotionError(f"Cannot promote to {piece.piece_type.name.lower()}")
        pawn = self.board[from_sq]
        if (
            pawn is None
            or pawn.piece_type != PieceType.PAWN
            or rank_of(from_sq) != promotion_rank(pawn.color) - pawn_direction(pawn.color)
        ):
            raise PromotionError(f"No pawn ready to promote on {square_name(from_sq)}")
        if pawn.color != piece.color:
            raise PromotionError("Cannot promote to a piece of the wrong color")
        self.move_piece(from_sq, to_sq)
        self.board[to_sq] = piece

    def _finish_ply(self, *, resets_clock: bool, en_passant: Square | None) -> None:
        self.en_passant = en_passant
        if resets_clock:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1
        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1
        self.side_to_move = self.side_to_move.opposite

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
        )

    def __repr__(self) -> str:
        from chessbox.core.notation import position_to_fen

        return f"Position({position_to_fen(self)!r})"
