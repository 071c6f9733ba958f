"""Shared fixtures for the test suite."""

from __future__ import annotations

import pytest

from chessbox.core.notation import STARTING_FEN, position_from_fen
from chessbox.core.position import Position

# Busy middlegame with promotions, castling and pins on both sides.
MIDGAME_WHITE_FEN = "rnbq1bnr/ppP5/3p4/4pBBp/3PPPp1/QP2k1P1/P6P/R3K1NR w KQ - 5 6"
MIDGAME_BLACK_FEN = "rnbq1bnr/ppP5/3p4/4pB1p/3PPPp1/QP2k1P1/P6P/R3K1NR b KQ f3 5 6"


@pytest.fixture
def start_position() -> Position:
    return position_from_fen(STARTING_FEN)


@pytest.fixture
def midgame_white() -> Position:
    return position_from_fen(MIDGAME_WHITE_FEN)


@pytest.fixture
def midgame_black() -> Position:
    """Black to move right after white's f2-f4."""
    return position_from_fen(MIDGAME_BLACK_FEN)
