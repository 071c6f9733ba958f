"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessbox.core.enums import Color, PieceType
from chessbox.core.errors import FormatError

# Diagram letter ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

PROMOTION_TYPES: frozenset[PieceType] = frozenset(
    (PieceType.KNIGHT, PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN)
)


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a colored chess piece.

    Pieces have no identity beyond their square: they are copied into and
    out of the board, never referenced.
    """

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """Diagram letter (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from diagram letter, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise FormatError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    @property
    def is_promotion_target(self) -> bool:
        """Whether a pawn may promote into this piece type."""
        return self.piece_type in PROMOTION_TYPES
