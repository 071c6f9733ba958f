"""Attack detection: which pieces currently attack a square.

:func:`attackers_of` is the single routine behind check detection,
castling-through-check validation and position plausibility.  All
geometry comes from tables precomputed at import time, so ray casts stop at
the board edge instead of wrapping to the next rank.
"""

from __future__ import annotations

from chessbox.core.board import Board
from chessbox.core.enums import Color, PieceType
from chessbox.core.types import Square, ensure_square, make_square

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


def _build_pawn_sources() -> tuple[tuple[tuple[Square, ...], ...], ...]:
    """[color][sq] -> squares from which a pawn of *color* attacks *sq*."""
    white: list[tuple[Square, ...]] = []
    black: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        files = [f for f in (file_idx - 1, file_idx + 1) if 0 <= f < 8]
        white.append(
            tuple(make_square(f, rank_idx - 1) for f in files) if rank_idx > 0 else ()
        )
        black.append(
            tuple(make_square(f, rank_idx + 1) for f in files) if rank_idx < 7 else ()
        )
    return (tuple(white), tuple(black))


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)
_PAWN_SOURCES = _build_pawn_sources()

_DIAGONAL_SLIDERS = (PieceType.BISHOP, PieceType.QUEEN)
_ORTHOGONAL_SLIDERS = (PieceType.ROOK, PieceType.QUEEN)


def attackers_of(board: Board, sq: Square, by_color: Color | None = None) -> set[Square]:
    """Squares of the pieces attacking *sq*.

    With *by_color* given, only that side's attackers count.  Otherwise an
    occupied square counts the occupant's opponents, and an empty square
    counts attackers of either color.
    """
    ensure_square(sq)
    if by_color is not None:
        colors: tuple[Color, ...] = (by_color,)
    else:
        occupant = board[sq]
        colors = (
            (occupant.color.opposite,)
            if occupant is not None
            else (Color.WHITE, Color.BLACK)
        )

    found: set[Square] = set()

    for rays, sliders in (
        (ROOK_RAYS[sq], _ORTHOGONAL_SLIDERS),
        (BISHOP_RAYS[sq], _DIAGONAL_SLIDERS),
    ):
        for ray in rays:
            for to_sq in ray:
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.color in colors and piece.piece_type in sliders:
                    found.add(to_sq)
                break

    for to_sq in KNIGHT_TARGETS[sq]:
        piece = board[to_sq]
        if piece is not None and piece.color in colors and piece.piece_type == PieceType.KNIGHT:
            found.add(to_sq)

    for color in colors:
        for to_sq in _PAWN_SOURCES[int(color)][sq]:
            piece = board[to_sq]
            if piece is not None and piece.color == color and piece.piece_type == PieceType.PAWN:
                found.add(to_sq)

    for to_sq in KING_TARGETS[sq]:
        piece = board[to_sq]
        if piece is not None and piece.color in colors and piece.piece_type == PieceType.KING:
            found.add(to_sq)

    return found


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?"""
    return bool(attackers_of(board, sq, by_color))


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked?  A missing king is never in check."""
    king_sq = board.king_square(color)
    if king_sq is None:
        return False
    return bool(attackers_of(board, king_sq, color.opposite))
