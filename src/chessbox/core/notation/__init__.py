"""Notation package: board diagram parsing and serialization."""

from chessbox.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen

__all__ = [
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
]
