"""High-level rules queries: check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessbox.core.attacks import is_in_check
from chessbox.core.config import DEFAULT_CONFIG, RulesConfig
from chessbox.core.enums import Color, GameState
from chessbox.core.legality import legal_moves

if TYPE_CHECKING:
    from chessbox.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return is_in_check(position.board, position.side_to_move)

    @staticmethod
    def has_legal_move(position: Position, config: RulesConfig = DEFAULT_CONFIG) -> bool:
        return bool(legal_moves(position, config=config))

    @staticmethod
    def is_checkmate(position: Position, config: RulesConfig = DEFAULT_CONFIG) -> bool:
        if not Rules.is_in_check(position):
            return False
        return not Rules.has_legal_move(position, config)

    @staticmethod
    def is_stalemate(position: Position, config: RulesConfig = DEFAULT_CONFIG) -> bool:
        if Rules.is_in_check(position):
            return False
        return not Rules.has_legal_move(position, config)

    @staticmethod
    def game_state(position: Position, config: RulesConfig = DEFAULT_CONFIG) -> GameState:
        """Result implied by the position alone."""
        if Rules.has_legal_move(position, config):
            return GameState.ONGOING
        if not Rules.is_in_check(position):
            return GameState.DRAWN  # stalemate
        return (
            GameState.BLACK_WON
            if position.side_to_move == Color.WHITE
            else GameState.WHITE_WON
        )
