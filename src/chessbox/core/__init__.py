"""Core domain layer: a chess legality oracle with zero external dependencies.

Quick start::

    from chessbox.core import (
        STARTING_FEN,
        apply_move,
        parse_move,
        position_from_fen,
        position_to_fen,
    )

    pos = position_from_fen(STARTING_FEN)
    pos = apply_move(pos, parse_move("e2e4"))
    print(position_to_fen(pos))
"""

from chessbox.core.attacks import attackers_of, is_in_check, is_square_attacked
from chessbox.core.board import Board
from chessbox.core.config import DEFAULT_CONFIG, RulesConfig
from chessbox.core.enums import CastlingRights, Color, GameState, PieceType
from chessbox.core.errors import (
    BoardNotValidError,
    CastlingError,
    ChessError,
    FormatError,
    IllegalMoveError,
    MoveError,
    NoPieceError,
    PlacementError,
    PromotionError,
    PromotionNotValidError,
    RejectReason,
    SameSquareError,
    SquareError,
    SquareNotExistError,
    WrongColorError,
)
from chessbox.core.legality import (
    apply_move,
    is_legal_move,
    legal_destinations,
    legal_moves,
    validate_move,
)
from chessbox.core.move import CastlingMove, Move, PromotionMove, SimpleMove, parse_move
from chessbox.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chessbox.core.piece import Piece
from chessbox.core.position import Position
from chessbox.core.rules import Rules
from chessbox.core.types import (
    NO_SQUARE,
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)
from chessbox.core.validation import is_legal_position

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameState",
    "PieceType",
    # Types / helpers
    "NO_SQUARE",
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "CastlingMove",
    "Move",
    "Piece",
    "Position",
    "PromotionMove",
    "Rules",
    "RulesConfig",
    "DEFAULT_CONFIG",
    "SimpleMove",
    # Engine operations
    "apply_move",
    "attackers_of",
    "is_in_check",
    "is_legal_move",
    "is_legal_position",
    "is_square_attacked",
    "legal_destinations",
    "legal_moves",
    "validate_move",
    # Notation
    "STARTING_FEN",
    "parse_move",
    "position_from_fen",
    "position_to_fen",
    # Errors
    "BoardNotValidError",
    "CastlingError",
    "ChessError",
    "FormatError",
    "IllegalMoveError",
    "MoveError",
    "NoPieceError",
    "PlacementError",
    "PromotionError",
    "PromotionNotValidError",
    "RejectReason",
    "SameSquareError",
    "SquareError",
    "SquareNotExistError",
    "WrongColorError",
]
