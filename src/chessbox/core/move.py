"""Move value objects and long-algebraic move notation.

A move is one of three self-describing variants.  Castling and promotion
moves know their own from/to squares, so no board is needed to interpret
them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from chessbox.core.enums import CastlingRights, Color, PieceType
from chessbox.core.errors import FormatError, SquareError
from chessbox.core.piece import Piece
from chessbox.core.position import CASTLING_GEOMETRY
from chessbox.core.types import Square, parse_square, rank_of, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}
_PROMO_TYPES: dict[str, PieceType] = {v: k for k, v in _PROMO_CHARS.items()}

_CASTLING_NOTATION: dict[str, CastlingRights] = {
    "e1g1": CastlingRights.WHITE_KINGSIDE,
    "e1c1": CastlingRights.WHITE_QUEENSIDE,
    "e8g8": CastlingRights.BLACK_KINGSIDE,
    "e8c8": CastlingRights.BLACK_QUEENSIDE,
}


@dataclass(frozen=True, slots=True)
class SimpleMove:
    """Relocate whatever stands on *from_sq* to *to_sq*."""

    from_sq: Square
    to_sq: Square

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"


@dataclass(frozen=True, slots=True)
class PromotionMove:
    """Pawn advance to the last rank, replaced by *promote_to*."""

    from_sq: Square
    to_sq: Square
    promote_to: Piece

    def __str__(self) -> str:
        return (
            f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
            f"{_PROMO_CHARS.get(self.promote_to.piece_type, '')}"
        )


@dataclass(frozen=True, slots=True)
class CastlingMove:
    """King-and-rook move for one castling right."""

    right: CastlingRights

    def __post_init__(self) -> None:
        if self.right not in CASTLING_GEOMETRY:
            raise ValueError(f"Not a single castling right: {self.right!r}")

    @property
    def from_sq(self) -> Square:
        return CASTLING_GEOMETRY[self.right].king_from

    @property
    def to_sq(self) -> Square:
        return CASTLING_GEOMETRY[self.right].king_to

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"


Move: TypeAlias = SimpleMove | PromotionMove | CastlingMove


def parse_move(text: str) -> Move:
    """Parse long algebraic notation, e.g. ``e2e4``, ``e7e8q`` or ``e1g1``.

    The four king moves ``e1g1``, ``e1c1``, ``e8g8`` and ``e8c8`` always
    parse as castling.  The promotion piece takes its color from the
    destination rank.
    """
    if len(text) not in (4, 5):
        raise FormatError(f"Invalid move notation: {text!r}")

    right = _CASTLING_NOTATION.get(text)
    if right is not None:
        return CastlingMove(right)

    try:
        from_sq = parse_square(text[:2])
        to_sq = parse_square(text[2:4])
    except SquareError:
        raise FormatError(f"Invalid move notation: {text!r}") from None

    if len(text) == 4:
        return SimpleMove(from_sq, to_sq)

    promo_type = _PROMO_TYPES.get(text[4])
    if promo_type is None:
        raise FormatError(f"Invalid promotion piece in move: {text!r}")
    if rank_of(to_sq) == 7:
        color = Color.WHITE
    elif rank_of(to_sq) == 0:
        color = Color.BLACK
    else:
        raise FormatError(f"Promotion away from the last rank: {text!r}")
    return PromotionMove(from_sq, to_sq, Piece(color, promo_type))
