"""Core enumerations and flags for the rules engine."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH


# Single rights, in FEN order.
SINGLE_CASTLING_RIGHTS: tuple[CastlingRights, ...] = (
    CastlingRights.WHITE_KINGSIDE,
    CastlingRights.WHITE_QUEENSIDE,
    CastlingRights.BLACK_KINGSIDE,
    CastlingRights.BLACK_QUEENSIDE,
)


class GameState(IntEnum):
    """Outcome of a game."""

    ONGOING = 0
    WHITE_WON = 1
    BLACK_WON = 2
    DRAWN = 3

    @property
    def result_token(self) -> str:
        """PGN-style result token; empty while the game is running."""
        return _RESULT_TOKENS[self]


_RESULT_TOKENS: dict[GameState, str] = {
    GameState.ONGOING: "",
    GameState.WHITE_WON: "1-0",
    GameState.BLACK_WON: "0-1",
    GameState.DRAWN: "1/2-1/2",
}
