"""Game layer: one game's starting position, main line and result.

Quick start::

    from chessbox.core import Color
    from chessbox.game import Game

    game = Game()
    game.make_move("e2e4", Color.WHITE)
"""

from chessbox.game.record import Game, GameOverError, MoveRecord, WrongTurnError

__all__ = [
    "Game",
    "GameOverError",
    "MoveRecord",
    "WrongTurnError",
]
