"""Tests for GameController: the orchestrator."""

import time

import pytest

from chessmind.config import GameConfig
from chessmind.core.board import Board
from chessmind.core.enums import Color
from chessmind.core.move import Move
from chessmind.core.notation import board_from_placement, parse_move
from chessmind.core.types import Position
from chessmind.engine.search import Difficulty
from chessmind.game.controller import GameController
from chessmind.game.interfaces import (
    GameEndReason,
    GameMode,
    GamePhase,
    IGameController,
    TimeControl,
)
from chessmind.game.player import HumanPlayer
from chessmind.game.state import GameState

E2 = Position(6, 4)
E4 = Position(4, 4)


def _make_hh_controller(
    time_control: TimeControl | None = None,
    board: Board | None = None,
) -> GameController:
    """Helper: human vs human game."""
    ctrl = GameController()
    ctrl.new_game(
        HumanPlayer(Color.WHITE, "W"),
        HumanPlayer(Color.BLACK, "B"),
        time_control=time_control,
        board=board,
    )
    return ctrl


def _make_vs_engine() -> GameController:
    """Helper: human white against an easy engine playing black."""
    ctrl = GameController(Difficulty.EASY)
    ctrl.new_game(HumanPlayer(Color.WHITE), ctrl.engine_player(Color.BLACK))
    return ctrl


def _submit(ctrl: GameController, text: str) -> bool:
    state = ctrl.state
    return ctrl.submit_move(parse_move(text, state.board, state.side_to_move))


class _CannedAdvisor:
    def __init__(self, reply: str) -> None:
        self.reply = reply

    def request_advice(self, prompt: str) -> str:
        return self.reply


class TestNewGame:
    def test_phase_awaiting(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.state.phase == GamePhase.AWAITING_MOVE

    def test_players_assigned(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.player(Color.WHITE) is not None
        assert ctrl.player(Color.BLACK) is not None

    def test_current_player_is_white(self) -> None:
        ctrl = _make_hh_controller()
        cp = ctrl.current_player
        assert cp is not None and cp.color == Color.WHITE

    def test_black_to_move_start(self) -> None:
        ctrl = GameController()
        assert isinstance(ctrl, IGameController)
        ctrl.new_game(
            HumanPlayer(Color.WHITE),
            HumanPlayer(Color.BLACK),
            board=board_from_placement("4k3/8/8/8/8/8/8/R3K3"),
            side_to_move=Color.BLACK,
        )
        assert ctrl.state.side_to_move == Color.BLACK
        cp = ctrl.current_player
        assert cp is not None and cp.color == Color.BLACK

    def test_terminal_start_board(self) -> None:
        ctrl = GameController()
        over: list[GameState] = []
        ctrl.events.on_game_over.append(over.append)
        ctrl.new_game(
            HumanPlayer(Color.WHITE),
            HumanPlayer(Color.BLACK),
            board=board_from_placement("K7/1q6/1k6/8/8/8/8/8"),
        )
        assert len(over) == 1
        assert ctrl.state.winner == Color.BLACK


class TestSubmitMove:
    def test_legal_move_accepted(self) -> None:
        ctrl = _make_hh_controller()
        assert _submit(ctrl, "e2-e4")
        assert ctrl.state.side_to_move == Color.BLACK

    def test_illegal_move_rejected(self) -> None:
        ctrl = _make_hh_controller()
        pawn = ctrl.state.board[E2]
        assert pawn is not None
        ok = ctrl.submit_move(Move(E2, Position(3, 4), pawn))  # can't jump 3 ranks
        assert not ok
        assert ctrl.state.side_to_move == Color.WHITE
        assert ctrl.state.ply_count == 0

    def test_wrong_side_rejected(self) -> None:
        ctrl = _make_hh_controller()
        assert not ctrl.make_move(Position(1, 4), Position(3, 4))

    def test_make_move_by_squares(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.make_move(E2, E4)
        assert ctrl.state.board[E4] is not None

    def test_move_event_fires(self) -> None:
        ctrl = _make_hh_controller()
        events: list[str] = []
        ctrl.events.on_move.append(lambda m, notation, st: events.append(notation))
        _submit(ctrl, "e2-e4")
        assert events == ["e4"]

    def test_game_over_event_on_checkmate(self) -> None:
        ctrl = _make_hh_controller()
        over: list[GameState] = []
        ctrl.events.on_game_over.append(over.append)
        for text in ("f2-f3", "e7-e5", "g2-g4", "d8-h4"):
            assert _submit(ctrl, text)
        assert len(over) == 1
        assert over[0].winner == Color.BLACK
        assert over[0].end_reason == GameEndReason.CHECKMATE

    def test_cannot_submit_after_game_over(self) -> None:
        ctrl = _make_hh_controller()
        for text in ("f2-f3", "e7-e5", "g2-g4", "d8-h4"):
            _submit(ctrl, text)
        assert not ctrl.make_move(E2, E4)

    def test_legal_targets(self) -> None:
        ctrl = _make_hh_controller()
        assert set(ctrl.legal_targets(E2)) == {Position(5, 4), E4}
        assert ctrl.legal_targets(Position(1, 4)) == []


class TestUndoMove:
    def test_undo_reverts(self) -> None:
        ctrl = _make_hh_controller()
        _submit(ctrl, "e2-e4")
        assert ctrl.undo_move()
        assert ctrl.state.side_to_move == Color.WHITE
        assert ctrl.state.ply_count == 0

    def test_undo_empty_fails(self) -> None:
        ctrl = _make_hh_controller()
        assert not ctrl.undo_move()

    def test_undo_against_engine_takes_back_pair(self) -> None:
        ctrl = _make_vs_engine()
        ctrl.make_move(E2, E4)
        assert ctrl.state.ply_count == 2
        assert ctrl.undo_move()
        assert ctrl.state.ply_count == 0
        assert ctrl.state.board == Board.initial()
        assert ctrl.state.side_to_move == Color.WHITE


class TestAgainstEngine:
    def test_engine_replies(self) -> None:
        ctrl = _make_vs_engine()
        assert ctrl.make_move(E2, E4)
        assert ctrl.state.ply_count == 2
        assert ctrl.state.side_to_move == Color.WHITE
        assert ctrl.state.phase == GamePhase.AWAITING_MOVE

    def test_phase_events(self) -> None:
        ctrl = _make_vs_engine()
        phases: list[GamePhase] = []
        ctrl.events.on_phase_changed.append(phases.append)
        ctrl.make_move(E2, E4)
        assert phases == [GamePhase.THINKING, GamePhase.AWAITING_MOVE]

    def test_engine_plays_white_immediately(self) -> None:
        ctrl = GameController.from_config(
            GameConfig(difficulty=Difficulty.EASY, engine_color=Color.WHITE)
        )
        assert ctrl.state.ply_count == 1
        assert ctrl.state.side_to_move == Color.BLACK

    def test_advisor_move_used(self) -> None:
        ctrl = GameController.from_config(
            GameConfig(difficulty=Difficulty.EASY),
            advisor=_CannedAdvisor('{"move": "e7-e5"}'),
        )
        ctrl.make_move(E2, E4)
        last = ctrl.state.moves[-1]
        assert last.same_squares(Position(1, 4), Position(3, 4))

    def test_set_difficulty(self) -> None:
        ctrl = GameController()
        ctrl.set_difficulty(Difficulty.HARD)
        assert ctrl.difficulty == Difficulty.HARD


class TestFromConfig:
    def test_single_player_defaults(self) -> None:
        ctrl = GameController.from_config(GameConfig())
        white = ctrl.player(Color.WHITE)
        black = ctrl.player(Color.BLACK)
        assert white is not None and white.is_human
        assert black is not None and not black.is_human
        assert ctrl.clock is not None

    def test_multi_player(self) -> None:
        ctrl = GameController.from_config(GameConfig(mode=GameMode.MULTI))
        assert all(ctrl.player(c).is_human for c in Color)  # type: ignore[union-attr]


class TestWithClock:
    def test_clock_created(self) -> None:
        ctrl = _make_hh_controller(TimeControl(300, 0))
        assert ctrl.clock is not None
        assert ctrl.clock.remaining(Color.WHITE) == pytest.approx(300.0, abs=1.0)

    def test_no_clock_by_default(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.clock is None

    def test_clock_switches_after_move(self) -> None:
        ctrl = _make_hh_controller(TimeControl(300, 0))
        _submit(ctrl, "e2-e4")
        assert ctrl.clock is not None
        assert ctrl.clock.active_color == Color.BLACK

    def test_undo_restores_clock_snapshot(self) -> None:
        ctrl = _make_hh_controller(TimeControl(300, 0))
        clock = ctrl.clock
        assert clock is not None
        _submit(ctrl, "e2-e4")
        time.sleep(0.05)  # Black clock runs before undo.
        ctrl.undo_move()
        assert clock.active_color == Color.WHITE
        assert clock.is_running
        assert clock.remaining(Color.BLACK) == pytest.approx(300.0, abs=0.01)

    def test_check_time_ends_game(self) -> None:
        ctrl = _make_hh_controller(TimeControl(0.05, 0))
        over: list[GameState] = []
        ctrl.events.on_game_over.append(over.append)
        time.sleep(0.1)
        assert ctrl.check_time()
        assert ctrl.state.end_reason == GameEndReason.TIMEOUT
        assert ctrl.state.winner == Color.BLACK
        assert len(over) == 1

    def test_move_after_flag_fall_rejected(self) -> None:
        ctrl = _make_hh_controller(TimeControl(0.05, 0))
        time.sleep(0.1)
        assert not _submit(ctrl, "e2-e4")
        assert ctrl.state.is_game_over
        assert ctrl.state.ply_count == 0

    def test_check_time_with_time_left(self) -> None:
        ctrl = _make_hh_controller(TimeControl(300, 0))
        assert not ctrl.check_time()
        assert not ctrl.state.is_game_over
