"""Game record: starting position, applied moves and the game's state.

This is a pure data/logic class with no threading and no I/O.  Whoever serves
several players concurrently must funnel each game's requests through a
single owner; the record itself does no locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from chessbox.core.config import DEFAULT_CONFIG, RulesConfig
from chessbox.core.enums import Color, GameState
from chessbox.core.errors import BoardNotValidError, ChessError
from chessbox.core.legality import apply_move
from chessbox.core.move import Move, parse_move
from chessbox.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chessbox.core.position import Position
from chessbox.core.rules import Rules
from chessbox.core.validation import is_legal_position

_LOGGER = logging.getLogger(__name__)


class GameOverError(ChessError):
    """The game already has a result."""

    def __init__(self, message: str = "game is already over") -> None:
        super().__init__(message)


class WrongTurnError(ChessError):
    """A player tried to move out of turn."""


@dataclass(slots=True)
class MoveRecord:
    """A single entry in the main line."""

    move: Move
    fen_after: str
    was_check: bool = False


@dataclass
class Game:
    """A game in progress or finished.

    The starting position is validated once on construction; every later
    position is produced by the legality pipeline.
    """

    starting_position: Position = field(default_factory=Position)
    config: RulesConfig = DEFAULT_CONFIG
    history: list[MoveRecord] = field(default_factory=list, init=False)
    state: GameState = field(default=GameState.ONGOING, init=False)
    _current: Position = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not is_legal_position(self.starting_position):
            raise BoardNotValidError()
        self.starting_position = self.starting_position.copy()
        self._current = self.starting_position.copy()
        self.state = Rules.game_state(self._current, self.config)

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def from_fen(cls, fen: str = STARTING_FEN, config: RulesConfig = DEFAULT_CONFIG) -> Game:
        return cls(position_from_fen(fen), config)

    @classmethod
    def from_moves(
        cls,
        moves: Iterable[Move | str],
        starting_position: Position | None = None,
        config: RulesConfig = DEFAULT_CONFIG,
    ) -> Game:
        """Replay *moves* from *starting_position*, alternating sides."""
        if starting_position is None:
            starting_position = Position()
        game = cls(starting_position, config)
        for ply, move in enumerate(moves, start=1):
            try:
                game.make_move(move, game.side_to_move)
            except ChessError:
                _LOGGER.debug("Replay failed on ply %d (%s)", ply, move)
                raise
        return game

    # ── Moves ────────────────────────────────────────────────────────────

    def make_move(self, move: Move | str, player: Color) -> MoveRecord:
        """Apply *move* on behalf of *player* and return the history record.

        Raises :class:`GameOverError`, :class:`WrongTurnError`, or the
        pipeline's :class:`~chessbox.core.errors.MoveError` subclasses.  On
        any error the game is left exactly as it was.
        """
        if self.state != GameState.ONGOING:
            raise GameOverError()
        if player != self._current.side_to_move:
            raise WrongTurnError(f"wrong turn to move: {player}")
        if isinstance(move, str):
            move = parse_move(move)

        after = apply_move(self._current, move, config=self.config)

        record = MoveRecord(
            move=move,
            fen_after=position_to_fen(after),
            was_check=Rules.is_in_check(after),
        )
        self.history.append(record)
        self._current = after
        self.state = Rules.game_state(after, self.config)
        _LOGGER.debug("%s played %s; state %s", player, move, self.state.name)
        return record

    def forfeit(self, player: Color) -> None:
        """*player* resigns; the opponent wins."""
        if self.state != GameState.ONGOING:
            raise GameOverError()
        self.state = GameState.BLACK_WON if player == Color.WHITE else GameState.WHITE_WON
        _LOGGER.debug("%s forfeited", player)

    # ── Query helpers ────────────────────────────────────────────────────

    def current_position(self) -> Position:
        """A copy of the position after the last move."""
        return self._current.copy()

    @property
    def moves(self) -> list[Move]:
        return [record.move for record in self.history]

    @property
    def side_to_move(self) -> Color:
        return self._current.side_to_move

    @property
    def is_over(self) -> bool:
        return self.state != GameState.ONGOING

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.history)
