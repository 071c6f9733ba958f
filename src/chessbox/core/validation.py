"""Position plausibility: could this diagram have arisen in a legal game?

The checks are deliberately one-sided.  Some unreachable positions slip
through, but a reachable position is never rejected (short of exotic
promotion tricks such as a double check delivered by two bishops).
"""

from __future__ import annotations

import logging
from collections import Counter

from chessbox.core.attacks import attackers_of
from chessbox.core.enums import SINGLE_CASTLING_RIGHTS, Color, PieceType
from chessbox.core.piece import Piece
from chessbox.core.position import CASTLING_GEOMETRY, Position, pawn_direction
from chessbox.core.types import Square, is_dark_square, rank_of, square_name

_LOGGER = logging.getLogger(__name__)

# Pieces a side starts with; anything beyond must come from a promotion.
_STARTING_SUPPLY: dict[PieceType, int] = {
    PieceType.KNIGHT: 2,
    PieceType.ROOK: 2,
    PieceType.QUEEN: 1,
}
_MAX_PAWNS = 8

# Checkers that can never be uncovered together with a second checker of
# the same kind.
_SHORT_RANGE = (PieceType.PAWN, PieceType.KNIGHT, PieceType.BISHOP)


def is_legal_position(position: Position) -> bool:
    """Whether *position* could have arisen from a sequence of legal moves."""
    problem = position_problem(position)
    if problem is not None:
        _LOGGER.debug("Implausible position: %s", problem)
        return False
    return True


def position_problem(position: Position) -> str | None:
    """Human-readable reason why *position* is implausible, or ``None``."""
    board = position.board
    kings: dict[Color, Square] = {}
    counts: Counter[tuple[Color, PieceType]] = Counter()
    # Bishops are bounded per square color: one of each in the starting set.
    bishops: Counter[tuple[Color, bool]] = Counter()

    for sq, piece in board.items():
        counts[(piece.color, piece.piece_type)] += 1
        if piece.piece_type == PieceType.KING:
            if piece.color in kings:
                return f"two {piece.color} kings"
            kings[piece.color] = sq
        elif piece.piece_type == PieceType.PAWN:
            if rank_of(sq) in (0, 7):
                return f"{piece.color} pawn on {square_name(sq)}"
        elif piece.piece_type == PieceType.BISHOP:
            bishops[(piece.color, is_dark_square(sq))] += 1

    for color in Color:
        if color not in kings:
            return f"no {color} king"

    mover = position.side_to_move
    if attackers_of(board, kings[mover.opposite]):
        return f"{mover.opposite} king is in check with {mover} to move"

    checkers = attackers_of(board, kings[mover])
    if not _check_combination_possible(position, checkers):
        return f"impossible check combination on {square_name(kings[mover])}"

    ep = position.en_passant
    if ep is not None and not _en_passant_consistent(position, ep):
        return f"en-passant target {square_name(ep)} is inconsistent"

    for color in Color:
        pawns = counts[(color, PieceType.PAWN)]
        if pawns > _MAX_PAWNS:
            return f"{color} has {pawns} pawns"
        promoted = sum(
            max(0, counts[(color, pt)] - limit) for pt, limit in _STARTING_SUPPLY.items()
        )
        promoted += sum(max(0, bishops[(color, dark)] - 1) for dark in (False, True))
        if promoted + pawns > _MAX_PAWNS:
            return f"{color} has more pieces than promotions allow"

    for right in SINGLE_CASTLING_RIGHTS:
        if not position.has_castling(right):
            continue
        geometry = CASTLING_GEOMETRY[right]
        if (
            board[geometry.king_from] != Piece(geometry.color, PieceType.KING)
            or board[geometry.rook_from] != Piece(geometry.color, PieceType.ROOK)
        ):
            return f"castling right {right.name} without king and rook at home"

    return None


def _check_combination_possible(position: Position, checkers: set[Square]) -> bool:
    """Can a single move have produced these simultaneous checks?"""
    if len(checkers) > 2:
        return False
    if len(checkers) < 2:
        return True
    first, second = (position.board[sq] for sq in checkers)
    assert first is not None and second is not None
    a, b = first.piece_type, second.piece_type
    if a == b and a in _SHORT_RANGE:
        return False
    if (a == PieceType.PAWN and b in _SHORT_RANGE) or (
        b == PieceType.PAWN and a in _SHORT_RANGE
    ):
        return False
    return True


def _en_passant_consistent(position: Position, ep: Square) -> bool:
    """The target needs the pawn that just double-stepped past it."""
    # The pawn that skipped *ep* belongs to the side that just moved.
    mover = position.side_to_move.opposite
    step = 8 * pawn_direction(mover)
    if rank_of(ep) != (2 if mover == Color.WHITE else 5):
        return False
    board = position.board
    pawn_sq = ep + step
    origin_sq = ep - step
    return (
        board[pawn_sq] == Piece(mover, PieceType.PAWN)
        and board[ep] is None
        and board[origin_sq] is None
    )
