"""Move legality pipeline.

Every entry point judges a move against a position through the same ordered
gates and never touches the caller's position: the resulting position is
always built on a private copy.

    1. input position is plausible
    2. from/to squares exist and differ
    3. a piece of the side to move stands on the from square
    4. promotion piece supplied exactly when a pawn reaches the last rank
    5. the piece can make that shape of move on an empty board
    6. nothing stands in the way of a sliding move
    7. the destination may be entered (own piece, king, pawn clash, en passant)
    8. castling right, empty castling path and unattacked king path
    9. the resulting position is materialized
   10. the mover's king is not left under attack
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace

from chessbox.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
    attackers_of,
)
from chessbox.core.config import DEFAULT_CONFIG, RulesConfig
from chessbox.core.enums import Color, PieceType
from chessbox.core.errors import (
    BoardNotValidError,
    CastlingError,
    IllegalMoveError,
    NoPieceError,
    PromotionNotValidError,
    RejectReason,
    SameSquareError,
    SquareNotExistError,
    WrongColorError,
)
from chessbox.core.move import CastlingMove, Move, PromotionMove, SimpleMove
from chessbox.core.piece import PROMOTION_TYPES, Piece
from chessbox.core.position import (
    CASTLING_GEOMETRY,
    Position,
    castling_right_for,
    pawn_direction,
    pawn_start_rank,
    promotion_rank,
)
from chessbox.core.types import (
    Square,
    file_of,
    is_valid_square,
    make_square,
    rank_of,
    square_name,
)
from chessbox.core.validation import is_legal_position

_LOGGER = logging.getLogger(__name__)

_KING_HOME: dict[Color, Square] = {
    Color.WHITE: make_square(4, 0),
    Color.BLACK: make_square(4, 7),
}

# Order in which promotion moves are listed by legal_moves().
_PROMOTION_ORDER: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


# -- Shape checks (step 5) -------------------------------------------------

ShapeCheck = Callable[[Color, Square, int, int], bool]


def _pawn_shape(color: Color, from_sq: Square, df: int, dr: int) -> bool:
    forward = pawn_direction(color)
    if dr == forward:
        return abs(df) <= 1
    return df == 0 and dr == 2 * forward and rank_of(from_sq) == pawn_start_rank(color)


def _knight_shape(color: Color, from_sq: Square, df: int, dr: int) -> bool:
    return {abs(df), abs(dr)} == {1, 2}


def _bishop_shape(color: Color, from_sq: Square, df: int, dr: int) -> bool:
    return abs(df) == abs(dr) != 0


def _rook_shape(color: Color, from_sq: Square, df: int, dr: int) -> bool:
    return (df == 0) != (dr == 0)


def _queen_shape(color: Color, from_sq: Square, df: int, dr: int) -> bool:
    return _bishop_shape(color, from_sq, df, dr) or _rook_shape(color, from_sq, df, dr)


def _king_shape(color: Color, from_sq: Square, df: int, dr: int) -> bool:
    if max(abs(df), abs(dr)) == 1:
        return True
    return dr == 0 and abs(df) == 2 and from_sq == _KING_HOME[color]


_SHAPES: dict[PieceType, ShapeCheck] = {
    PieceType.PAWN: _pawn_shape,
    PieceType.KNIGHT: _knight_shape,
    PieceType.BISHOP: _bishop_shape,
    PieceType.ROOK: _rook_shape,
    PieceType.QUEEN: _queen_shape,
    PieceType.KING: _king_shape,
}


def squares_between(from_sq: Square, to_sq: Square) -> list[Square]:
    """Squares strictly between two squares on a common line; else empty."""
    df = file_of(to_sq) - file_of(from_sq)
    dr = rank_of(to_sq) - rank_of(from_sq)
    if not (df == 0 or dr == 0 or abs(df) == abs(dr)):
        return []
    rank_step = (dr > 0) - (dr < 0)
    file_step = (df > 0) - (df < 0)
    delta = 8 * rank_step + file_step
    return [from_sq + delta * i for i in range(1, max(abs(df), abs(dr)))]


# -- Public API ------------------------------------------------------------


def validate_move(
    position: Position,
    from_sq: Square,
    to_sq: Square,
    promote_to: Piece | None = None,
    *,
    config: RulesConfig = DEFAULT_CONFIG,
) -> Position:
    """Judge a move and return the position it produces.

    Raises a :class:`~chessbox.core.errors.MoveError` subclass describing the
    first gate the move fails.  *position* is never modified.
    """
    piece = _check_request(position, from_sq, to_sq, promote_to, config)
    return _judge(position, piece, from_sq, to_sq, promote_to, config)


def is_legal_move(
    position: Position,
    from_sq: Square,
    to_sq: Square,
    promote_to: Piece | None = None,
    *,
    config: RulesConfig = DEFAULT_CONFIG,
) -> bool:
    """Whether the move is legal.

    Malformed requests (bad squares, missing piece, wrong color, bad
    promotion piece, implausible position) still raise; only a rejected move
    yields ``False``.
    """
    try:
        validate_move(position, from_sq, to_sq, promote_to, config=config)
    except IllegalMoveError:
        return False
    return True


def apply_move(
    position: Position, move: Move, *, config: RulesConfig = DEFAULT_CONFIG
) -> Position:
    """Validate *move* in *position* and return the resulting position."""
    promote_to = move.promote_to if isinstance(move, PromotionMove) else None
    return validate_move(position, move.from_sq, move.to_sq, promote_to, config=config)


def legal_destinations(
    position: Position, from_sq: Square, *, config: RulesConfig = DEFAULT_CONFIG
) -> set[Square]:
    """Every square the piece on *from_sq* may legally move to.

    An empty square or a piece of the side not to move yields an empty set.
    Pawn moves to the last rank are tried as queen promotions.
    """
    if config.validate_position and not is_legal_position(position):
        raise BoardNotValidError()
    if not is_valid_square(from_sq):
        raise SquareNotExistError(f"square does not exist: {from_sq}")

    piece = position.board[from_sq]
    if piece is None or piece.color != position.side_to_move:
        return set()

    # Already validated once; no need to repeat it for every candidate.
    inner = replace(config, validate_position=False)
    destinations: set[Square] = set()
    for to_sq in _candidate_squares(position, piece, from_sq):
        promote_to = None
        if piece.piece_type == PieceType.PAWN and rank_of(to_sq) == promotion_rank(piece.color):
            promote_to = Piece(piece.color, PieceType.QUEEN)
        try:
            _judge(position, piece, from_sq, to_sq, promote_to, inner)
        except IllegalMoveError:
            continue
        destinations.add(to_sq)
    return destinations


def legal_moves(position: Position, *, config: RulesConfig = DEFAULT_CONFIG) -> list[Move]:
    """All legal moves for the side to move, as :data:`Move` values."""
    if config.validate_position and not is_legal_position(position):
        raise BoardNotValidError()
    inner = replace(config, validate_position=False)

    moves: list[Move] = []
    color = position.side_to_move
    for from_sq in position.board.all_pieces(color):
        piece = position.board[from_sq]
        assert piece is not None
        for to_sq in sorted(legal_destinations(position, from_sq, config=inner)):
            if piece.piece_type == PieceType.PAWN and rank_of(to_sq) == promotion_rank(color):
                moves.extend(
                    PromotionMove(from_sq, to_sq, Piece(color, pt)) for pt in _PROMOTION_ORDER
                )
            elif piece.piece_type == PieceType.KING and abs(file_of(to_sq) - file_of(from_sq)) == 2:
                right = castling_right_for(color, to_sq)
                assert right is not None
                moves.append(CastlingMove(right))
            else:
                moves.append(SimpleMove(from_sq, to_sq))
    return moves


# -- Pipeline --------------------------------------------------------------


def _check_request(
    position: Position,
    from_sq: Square,
    to_sq: Square,
    promote_to: Piece | None,
    config: RulesConfig,
) -> Piece:
    """Steps 1–4: everything that makes the request itself malformed."""
    if config.validate_position and not is_legal_position(position):
        raise BoardNotValidError()
    for sq in (from_sq, to_sq):
        if not is_valid_square(sq):
            raise SquareNotExistError(f"square does not exist: {sq}")
    if from_sq == to_sq:
        raise SameSquareError("from and to squares are not different")

    piece = position.board[from_sq]
    if piece is None:
        raise NoPieceError(f"no piece on {square_name(from_sq)}")
    if piece.color != position.side_to_move:
        raise WrongColorError(f"{piece.color} piece on {square_name(from_sq)} is not to move")

    reaches_last_rank = (
        piece.piece_type == PieceType.PAWN and rank_of(to_sq) == promotion_rank(piece.color)
    )
    if reaches_last_rank:
        if (
            promote_to is None
            or promote_to.color != piece.color
            or promote_to.piece_type not in PROMOTION_TYPES
        ):
            raise PromotionNotValidError(f"promoteTo is not valid: {promote_to}")
    elif promote_to is not None:
        raise PromotionNotValidError(
            f"promotion not possible on {square_name(from_sq)}{square_name(to_sq)}"
        )
    return piece


def _reject(reason: RejectReason, from_sq: Square, to_sq: Square) -> IllegalMoveError:
    _LOGGER.debug("Rejected %s%s: %s", square_name(from_sq), square_name(to_sq), reason.value)
    return IllegalMoveError(reason)


def _judge(
    position: Position,
    piece: Piece,
    from_sq: Square,
    to_sq: Square,
    promote_to: Piece | None,
    config: RulesConfig,
) -> Position:
    """Steps 5–10 for a request that passed :func:`_check_request`."""
    board = position.board
    color = piece.color
    ptype = piece.piece_type
    df = file_of(to_sq) - file_of(from_sq)
    dr = rank_of(to_sq) - rank_of(from_sq)

    # 5. Shape
    if not _SHAPES[ptype](color, from_sq, df, dr):
        raise _reject(RejectReason.WRONG_SHAPE, from_sq, to_sq)

    # 6. Path
    if ptype != PieceType.KNIGHT:
        if any(not board.is_empty(sq) for sq in squares_between(from_sq, to_sq)):
            raise _reject(RejectReason.PATH_BLOCKED, from_sq, to_sq)

    # 7. Destination
    target = board[to_sq]
    if target is None:
        if ptype == PieceType.PAWN and df != 0 and to_sq != position.en_passant:
            raise _reject(RejectReason.NO_EN_PASSANT, from_sq, to_sq)
    elif target.color == color:
        raise _reject(RejectReason.OWN_PIECE, from_sq, to_sq)
    elif target.piece_type == PieceType.KING:
        raise _reject(RejectReason.KING_CAPTURE, from_sq, to_sq)
    elif ptype == PieceType.PAWN and df == 0:
        raise _reject(RejectReason.PAWN_CLASH, from_sq, to_sq)

    # 8. Castling
    castling_right = None
    if ptype == PieceType.KING and abs(df) == 2:
        castling_right = castling_right_for(color, to_sq)
        if castling_right is None or not position.has_castling(castling_right):
            raise _reject(RejectReason.CASTLING_UNAVAILABLE, from_sq, to_sq)
        geometry = CASTLING_GEOMETRY[castling_right]
        if any(not board.is_empty(sq) for sq in geometry.between):
            raise _reject(RejectReason.CASTLING_BLOCKED, from_sq, to_sq)
        if any(attackers_of(board, sq, color.opposite) for sq in geometry.king_path):
            raise _reject(RejectReason.CASTLING_THROUGH_CHECK, from_sq, to_sq)

    # 9. Resulting position
    result = position.copy()
    if castling_right is not None:
        try:
            result.castle(castling_right)
        except CastlingError:
            raise _reject(RejectReason.CASTLING_UNAVAILABLE, from_sq, to_sq) from None
    elif promote_to is not None:
        result.promote(from_sq, to_sq, promote_to)
    else:
        result.move_piece(from_sq, to_sq)

    # 10. Self-check
    king_sq = result.king_square(color)
    if king_sq is not None:
        if config.forbid_adjacent_kings:
            enemy_king = result.king_square(color.opposite)
            if enemy_king is not None and enemy_king in KING_TARGETS[king_sq]:
                raise _reject(RejectReason.KINGS_ADJACENT, from_sq, to_sq)
        if attackers_of(result.board, king_sq):
            raise _reject(RejectReason.SELF_CHECK, from_sq, to_sq)
    return result


def _candidate_squares(position: Position, piece: Piece, from_sq: Square) -> list[Square]:
    """Geometrically reachable squares, cut at the first blocker of each ray."""
    board = position.board
    ptype = piece.piece_type
    if ptype == PieceType.KNIGHT:
        return list(KNIGHT_TARGETS[from_sq])
    if ptype == PieceType.KING:
        targets = list(KING_TARGETS[from_sq])
        if from_sq == _KING_HOME[piece.color]:
            targets.extend((from_sq - 2, from_sq + 2))
        return targets
    if ptype == PieceType.PAWN:
        forward = pawn_direction(piece.color)
        rank = rank_of(from_sq) + forward
        if not 0 <= rank < 8:
            return []
        targets = [
            make_square(f, rank)
            for f in (file_of(from_sq) - 1, file_of(from_sq), file_of(from_sq) + 1)
            if 0 <= f < 8
        ]
        if rank_of(from_sq) == pawn_start_rank(piece.color):
            targets.append(make_square(file_of(from_sq), rank + forward))
        return targets

    rays = {
        PieceType.BISHOP: BISHOP_RAYS,
        PieceType.ROOK: ROOK_RAYS,
        PieceType.QUEEN: QUEEN_RAYS,
    }[ptype][from_sq]
    targets = []
    for ray in rays:
        for to_sq in ray:
            targets.append(to_sq)
            if not board.is_empty(to_sq):
                break
    return targets
