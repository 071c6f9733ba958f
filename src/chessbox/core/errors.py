"""Exception hierarchy for the rules engine.

Every failure is local and recoverable: bad input yields one of these
exceptions, never a corrupted position.
"""

from __future__ import annotations

from enum import Enum


class ChessError(Exception):
    """Base class for all engine errors."""


class FormatError(ChessError, ValueError):
    """Malformed board diagram or move notation."""


class SquareError(ChessError, ValueError):
    """A square index outside 0–63."""


class PlacementError(ChessError, ValueError):
    """Raw board edit on an occupied or empty square."""


class PromotionError(ChessError, ValueError):
    """Raw promotion that cannot be carried out."""


class CastlingError(ChessError):
    """Raw castle with the right unavailable or the path occupied."""


# ── Move pipeline ────────────────────────────────────────────────────────────


class MoveError(ChessError):
    """Base class for move legality pipeline failures."""


class BoardNotValidError(MoveError):
    """The input position could not have arisen in a legal game."""

    def __init__(self, message: str = "board has no valid position") -> None:
        super().__init__(message)


class SquareNotExistError(MoveError, SquareError):
    """From or to square is outside the board."""


class SameSquareError(MoveError):
    """From and to squares are identical."""


class NoPieceError(MoveError):
    """Nothing stands on the from square."""


class WrongColorError(MoveError):
    """The piece on the from square does not belong to the side to move."""


class PromotionNotValidError(MoveError):
    """Promotion piece missing, superfluous, or of the wrong kind or color."""


class RejectReason(Enum):
    """Why an otherwise well-formed move was rejected."""

    WRONG_SHAPE = "piece cannot move that way"
    PATH_BLOCKED = "piece or pieces stay in the way"
    OWN_PIECE = "clash with piece of the same color"
    KING_CAPTURE = "clash with king"
    PAWN_CLASH = "pawn cannot capture when moving straight"
    NO_EN_PASSANT = "pawn cannot move diagonally onto an empty square"
    CASTLING_UNAVAILABLE = "castling right is not available"
    CASTLING_BLOCKED = "castling through occupied square"
    CASTLING_THROUGH_CHECK = "castling through square under attack"
    SELF_CHECK = "move leaves own king under attack"
    KINGS_ADJACENT = "kings would stand next to each other"


class IllegalMoveError(MoveError):
    """The move is well-formed but illegal in the position."""

    def __init__(self, reason: RejectReason) -> None:
        super().__init__(reason.value)
        self.reason = reason
