"""Board diagram (FEN) parsing and serialization.

Parsing is purely syntactic: a diagram with two white kings or pawns on the
back rank parses fine.  Use :func:`chessbox.core.validation.is_legal_position`
to decide whether a parsed position is believable.
"""

from __future__ import annotations

import re

from chessbox.core.board import Board
from chessbox.core.enums import CastlingRights, Color
from chessbox.core.errors import FormatError, SquareError
from chessbox.core.piece import Piece
from chessbox.core.position import Position
from chessbox.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)

_COUNTER_RE = re.compile(r"0|[1-9][0-9]*")


def position_from_fen(fen: str) -> Position:
    """Parse a six-field diagram into a :class:`Position`."""
    parts = fen.split()
    if len(parts) != 6:
        raise FormatError(f"Invalid FEN (need 6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part, half_part, full_part = parts

    board = _parse_placement(placement, fen)

    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise FormatError(f"Invalid FEN side-to-move field: {side_part!r}")

    castling = _parse_castling(castling_part)

    ep: Square | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except SquareError:
            raise FormatError(f"Invalid FEN en-passant square: {ep_part!r}") from None
        if rank_of(ep) not in (2, 5):
            raise FormatError(f"Invalid FEN en-passant square: {ep_part!r}")

    halfmove = _parse_counter(half_part, "halfmove clock", minimum=0)
    fullmove = _parse_counter(full_part, "fullmove number", minimum=1)

    return Position(board, side, castling, ep, halfmove, fullmove)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    # 1. Board
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[make_square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if pos.castling & right)
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str} {pos.halfmove_clock} {pos.fullmove_number}"


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FormatError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        prev_digit = False
        for ch in rank_text:
            if ch in "0123456789":
                step = int(ch)
                if not (1 <= step <= 8) or prev_digit:
                    raise FormatError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
                prev_digit = True
            else:
                if file >= 8:
                    raise FormatError(f"Invalid FEN rank width: {fen!r}")
                board[make_square(file, rank)] = Piece.from_char(ch)
                file += 1
                prev_digit = False
            if file > 8:
                raise FormatError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise FormatError(f"Invalid FEN rank width: {fen!r}")
    return board


def _parse_castling(text: str) -> CastlingRights:
    if text == "-":
        return CastlingRights.NONE
    castling = CastlingRights.NONE
    canonical = ""
    for ch, right in _CASTLING_CHARS:
        if ch in text:
            castling |= right
            canonical += ch
    # Rejects unknown letters, duplicates and non-canonical order in one go.
    if canonical != text:
        raise FormatError(f"Invalid FEN castling field: {text!r}")
    return castling


def _parse_counter(text: str, name: str, *, minimum: int) -> int:
    if not _COUNTER_RE.fullmatch(text):
        raise FormatError(f"Invalid FEN {name}: {text!r}")
    value = int(text)
    if value < minimum:
        raise FormatError(f"Invalid FEN {name}: {text!r}")
    return value
