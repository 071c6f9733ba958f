"""Tests for Rules: check, checkmate, stalemate and game state."""

from chessbox.core.config import RulesConfig
from chessbox.core.enums import GameState
from chessbox.core.notation import STARTING_FEN, position_from_fen
from chessbox.core.rules import Rules

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        assert not Rules.is_in_check(position_from_fen(STARTING_FEN))

    def test_fools_mate_in_check(self) -> None:
        # After 1.f3 e5 2.g4 Qh4# white is in check
        assert Rules.is_in_check(position_from_fen(FOOLS_MATE))


class TestCheckmate:
    def test_fools_mate(self) -> None:
        pos = position_from_fen(FOOLS_MATE)
        assert Rules.is_checkmate(pos)
        assert not Rules.is_stalemate(pos)
        assert Rules.game_state(pos) == GameState.BLACK_WON

    def test_back_rank_mate(self) -> None:
        # R on a8 checks black king d8; white king d6 covers all escapes
        pos = position_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 0 1")
        assert Rules.is_checkmate(pos)
        assert Rules.game_state(pos) == GameState.WHITE_WON

    def test_not_checkmate_when_can_escape(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)

    def test_not_checkmate_when_checker_can_be_answered(self) -> None:
        # The b3 knight can take the rook or block on c1.
        pos = position_from_fen("4k3/8/8/8/8/1N6/3PPP2/r3KB2 w - - 0 1")
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)


class TestStalemate:
    def test_king_trapped(self) -> None:
        # Black king on h8, white K on f6, white Q on g6
        pos = position_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert Rules.is_stalemate(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.game_state(pos) == GameState.DRAWN

    def test_not_stalemate_when_has_moves(self) -> None:
        pos = position_from_fen("7k/8/5K2/8/8/8/8/8 b - - 0 1")
        assert not Rules.is_stalemate(pos)
        assert Rules.game_state(pos) == GameState.ONGOING


class TestGameState:
    def test_start_is_ongoing(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert Rules.has_legal_move(pos)
        assert Rules.game_state(pos) == GameState.ONGOING

    def test_result_tokens(self) -> None:
        assert GameState.ONGOING.result_token == ""
        assert GameState.WHITE_WON.result_token == "1-0"
        assert GameState.BLACK_WON.result_token == "0-1"
        assert GameState.DRAWN.result_token == "1/2-1/2"

    def test_config_is_passed_through(self) -> None:
        # Black keeps g8 and h7 either way.
        pos = position_from_fen("7k/8/5K2/8/8/8/8/8 b - - 0 1")
        config = RulesConfig(forbid_adjacent_kings=True)
        assert Rules.game_state(pos, config) == GameState.ONGOING
