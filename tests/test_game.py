# tests/test_game.py
from __future__ import annotations

from dataclasses import replace

import pytest

from tetris_board import EMPTY_ROW, empty_board
from tetris_config import COLS
from tetris_game import Action, Game, GameState, Notification, Phase
from tetris_piece import SHAPES, Piece
from tetris_rng import SequenceRandom, UniformRandom


def drop_at(game: Game, x: int) -> None:
    while game.state.current.x > x:
        assert game.move_left()
    while game.state.current.x < x:
        assert game.move_right()
    game.hard_drop()
    assert game.soft_drop()


def clear_bottom_row_with_i(game: Game, board_with) -> None:
    """Fill columns 0-5 of row 19 and lock a flat I into columns 6-9."""
    game.state = replace(game.state, board=board_with({19: range(6)}), current=Piece.spawn("I"))
    drop_at(game, 6)


# ---------- lifecycle ----------

def test_new_game_is_not_started_and_inert(make_game, timer) -> None:
    game = make_game(start=False)
    assert game.phase is Phase.NOT_STARTED
    before = game.state
    assert not game.move_left()
    assert not game.rotate()
    assert not game.hard_drop()
    assert not game.tick()
    assert not game.toggle_pause()
    assert game.state is before
    assert timer.calls == []


def test_start_resets_everything_and_schedules_timer(timer, notes) -> None:
    game = Game(randomizer=SequenceRandom(["T", "L", "S"]), timer=timer, sink=notes.append)
    assert game.start()
    s = game.state
    assert game.phase is Phase.RUNNING
    assert s.board == empty_board()
    assert (s.score, s.level, s.lines, s.drop_ms) == (0, 1, 0, 1000)
    assert s.current == Piece.spawn("T")
    assert s.next == Piece.spawn("L")
    assert timer.calls == [("start", 1000)]
    assert notes[-1].title == "Game Started"

    # a restart draws two new pieces
    game.start()
    assert game.state.current == Piece.spawn("S")
    assert game.state.next == Piece.spawn("T")


def test_seeded_game_follows_the_randomizer_sequence(timer) -> None:
    expected = UniformRandom(seed=99)
    game = Game(randomizer=UniformRandom(seed=99), timer=timer)
    game.start()
    assert game.state.current.t == expected.next_type()
    assert game.state.next.t == expected.next_type()
    game.hard_drop()
    game.soft_drop()
    assert game.state.next.t == expected.next_type()


def test_restart_replaces_state_wholesale(make_game, timer, board_with) -> None:
    game = make_game(["I"])
    game.state = replace(game.state, score=500, lines=12, level=2, drop_ms=900, board=board_with({19: [0]}))
    game.start()
    s = game.state
    assert (s.score, s.level, s.lines, s.drop_ms) == (0, 1, 0, 1000)
    assert s.board == empty_board()
    assert timer.calls == [("start", 1000)]


def test_restart_after_game_over(make_game) -> None:
    game = make_game()
    game.state = replace(game.state, game_over=True)
    assert game.phase is Phase.GAME_OVER
    game.start()
    assert game.phase is Phase.RUNNING


def test_pause_blocks_input_and_suspends_timer(make_game, timer, notes) -> None:
    game = make_game()
    assert game.toggle_pause()
    assert game.phase is Phase.PAUSED
    assert timer.calls == [("stop",)]
    before = game.state
    assert not game.move_right()
    assert not game.soft_drop()
    assert not game.hard_drop()
    assert not game.rotate()
    assert not game.tick()
    assert game.state is before

    assert game.toggle_pause()
    assert game.phase is Phase.RUNNING
    assert timer.calls == [("stop",), ("start", 1000)]
    assert [n.title for n in notes] == ["Paused", "Resumed"]


def test_resume_uses_current_drop_interval(make_game, timer) -> None:
    game = make_game()
    game.state = replace(game.state, level=4, drop_ms=700)
    game.toggle_pause()
    game.toggle_pause()
    assert timer.calls[-1] == ("start", 700)


def test_pause_not_allowed_after_game_over(make_game) -> None:
    game = make_game()
    game.state = replace(game.state, game_over=True)
    assert not game.toggle_pause()
    assert not game.state.paused


def test_close_cancels_timer(make_game, timer) -> None:
    game = make_game()
    game.close()
    assert timer.calls == [("stop",)]


# ---------- dispatch ----------

def test_dispatch_routes_actions(make_game) -> None:
    game = make_game()
    assert game.dispatch(Action.MOVE_LEFT)
    assert game.state.current.x == 3
    assert game.dispatch(Action.MOVE_RIGHT)
    assert game.dispatch(Action.SOFT_DROP)
    assert game.state.current.y == 1
    assert game.dispatch(Action.HARD_DROP)
    assert game.state.current.y == 18
    assert game.dispatch(Action.PAUSE)
    assert game.phase is Phase.PAUSED
    assert game.dispatch(Action.START)
    assert game.phase is Phase.RUNNING


def test_dispatch_rejects_unknown_action(make_game) -> None:
    with pytest.raises(ValueError, match="unknown action"):
        make_game().dispatch("jump")


# ---------- transforms ----------

def test_move_stops_at_walls(make_game) -> None:
    game = make_game(["I"])
    assert game.move_right()
    assert game.move_right()
    assert game.state.current.x == 6
    assert not game.move_right()
    assert game.state.current.x == 6
    for _ in range(6):
        assert game.move_left()
    assert not game.move_left()
    assert game.state.current.x == 0


def test_move_rejects_bad_direction(make_game) -> None:
    with pytest.raises(ValueError, match="direction"):
        make_game().move(2)


def test_move_blocked_by_settled_cells(make_game, board_with) -> None:
    game = make_game()
    game.state = replace(game.state, board=board_with({1: [3]}))
    before = game.state
    assert not game.move_left()
    assert game.state is before


def test_rotate_without_wall_kicks(make_game, board_with) -> None:
    game = make_game(["I"])
    # vertical I would occupy column 6, rows 0-3
    game.state = replace(game.state, board=board_with({3: [6]}))
    assert not game.rotate()
    assert game.state.current.shape == SHAPES["I"]

    game.state = replace(game.state, board=empty_board())
    assert game.rotate()
    assert game.state.current.shape == ((0, 0, 1, 0),) * 4
    assert (game.state.current.x, game.state.current.y) == (4, 0)


def test_rotate_at_wall_is_rejected_not_kicked(make_game) -> None:
    game = make_game(["I"])
    game.rotate()
    for _ in range(6):
        game.move_left()
    # vertical I sits in column 0 at x=-2; flat I would need column -2
    assert game.state.current.x == -2
    assert not game.rotate()
    assert game.state.current.x == -2


def test_hard_drop_relocates_without_locking(make_game) -> None:
    game = make_game()
    assert game.hard_drop()
    assert game.state.current.y == 18
    assert game.state.board == empty_board()
    assert game.snapshot().ghost_y == 18
    # already resting: nothing to relocate
    assert not game.hard_drop()

    assert game.soft_drop()
    board = game.state.board
    assert sum(1 for row in board for cell in row if cell) == 4
    assert board[19][4] and board[19][5] and board[18][4] and board[18][5]
    assert game.state.current == Piece.spawn("O")


def test_tick_is_a_soft_drop(make_game) -> None:
    game = make_game()
    assert game.tick()
    assert game.state.current.y == 1


# ---------- placement, scoring, levels ----------

def test_single_line_clear_shifts_rows(make_game, board_with, notes) -> None:
    game = make_game(["I"])
    game.state = replace(game.state, board=board_with({19: range(6), 18: [0]}), current=Piece.spawn("I"))
    drop_at(game, 6)
    s = game.state
    assert s.score == 40
    assert s.lines == 1
    assert s.level == 1
    assert s.board[19] == board_with({18: [0]})[18]
    assert s.board[0] == EMPTY_ROW
    assert notes == [Notification("Single!", "+40 points", 1500)]


def test_o_pieces_fill_bottom_row(make_game, board_with) -> None:
    game = make_game(["O"])
    game.state = replace(game.state, board=board_with({19: [8, 9]}))
    for x in (0, 2, 4, 6):
        drop_at(game, x)
    s = game.state
    assert (s.score, s.lines, s.level) == (40, 1, 1)
    # the upper halves of the O pieces slid down into row 19
    assert [bool(c) for c in s.board[19]] == [True] * 8 + [False, False]
    assert s.board[18] == EMPTY_ROW


def test_five_o_pieces_clear_two_rows(make_game, notes) -> None:
    game = make_game(["O"])
    for x in (0, 2, 4, 6, 8):
        drop_at(game, x)
    s = game.state
    assert (s.score, s.lines) == (100, 2)
    assert s.board == empty_board()
    assert notes == [Notification("Double!", "+100 points", 1500)]


def test_triple_clear_with_level_up(make_game, board_with, timer, notes) -> None:
    game = make_game(["I"])
    game.state = replace(
        game.state,
        board=board_with({y: range(COLS - 1) for y in range(17, 20)}),
        current=Piece.spawn("I"),
        lines=8,
    )
    assert game.rotate()
    drop_at(game, 7)
    s = game.state
    assert (s.lines, s.level, s.drop_ms) == (11, 2, 900)
    assert s.score == 300
    # the top cell of the vertical I is all that remains
    assert s.board[19][9] and sum(1 for row in s.board for cell in row if cell) == 1
    assert Notification("Triple!", "+300 points", 1500) in notes
    assert timer.calls == [("start", 900)]


def test_tetris_scores_double(make_game, board_with, notes) -> None:
    game = make_game(["I"])
    game.state = replace(
        game.state,
        board=board_with({y: range(COLS - 1) for y in range(16, 20)}),
        current=Piece.spawn("I"),
    )
    assert game.rotate()
    drop_at(game, 7)
    s = game.state
    assert s.lines == 4
    assert s.score == 1200 * 1 * 2
    assert s.board == empty_board()
    assert Notification("Tetris!", "+2400 points", 1500) in notes


def test_tetris_at_higher_level(make_game, board_with) -> None:
    game = make_game(["I"])
    game.state = replace(
        game.state,
        board=board_with({y: range(COLS - 1) for y in range(16, 20)}),
        current=Piece.spawn("I"),
        level=3,
        lines=20,
        drop_ms=800,
    )
    game.rotate()
    drop_at(game, 7)
    assert game.state.score == 1200 * 3 * 2


def test_level_up_at_ten_lines_reschedules_timer(make_game, board_with, timer, notes) -> None:
    game = make_game(["I"])
    game.state = replace(game.state, lines=9)
    clear_bottom_row_with_i(game, board_with)
    s = game.state
    assert (s.lines, s.level, s.drop_ms) == (10, 2, 900)
    assert timer.calls == [("start", 900)]
    assert Notification("Level Up!", "You've reached level 2!", 2000) in notes


def test_level_up_at_twenty_lines(make_game, board_with, timer) -> None:
    game = make_game(["I"])
    game.state = replace(game.state, lines=19, level=2, drop_ms=900)
    clear_bottom_row_with_i(game, board_with)
    s = game.state
    assert (s.lines, s.level, s.drop_ms) == (20, 3, 800)
    assert s.score == 80
    assert timer.calls == [("start", 800)]


def test_no_reschedule_without_level_change(make_game, board_with, timer) -> None:
    game = make_game(["I"])
    clear_bottom_row_with_i(game, board_with)
    assert game.state.level == 1
    assert timer.calls == []


def test_blocked_spawn_ends_game(make_game, board_with, timer, notes) -> None:
    game = make_game(["O"])
    while game.state.current.x > 0:
        game.move_left()
    game.hard_drop()
    # something sits where the next piece will spawn
    game.state = replace(game.state, board=board_with({1: [4]}))
    assert game.soft_drop()
    s = game.state
    assert game.phase is Phase.GAME_OVER
    assert s.board[18][0] and s.board[19][1]
    assert timer.calls == [("stop",)]
    assert notes[-1] == Notification("You Lose!", "Your score: 0", 5000)

    frozen = game.state
    assert not game.move_right()
    assert not game.tick()
    assert not game.hard_drop()
    assert game.state is frozen


def test_lock_above_the_top_ends_game_without_stamping(make_game, board_with, timer, notes) -> None:
    game = make_game(["O"])
    blocked = board_with({1: [4, 5]})
    game.state = replace(game.state, board=blocked, current=Piece.spawn("O").at(-1), score=120)
    assert game.soft_drop()
    s = game.state
    assert s.game_over
    assert s.board is blocked
    assert s.score == 120
    assert s.current.y == -1
    assert timer.calls == [("stop",)]
    assert [n.title for n in notes] == ["You Lose!"]


def test_snapshot_is_read_only_view(make_game) -> None:
    game = make_game(["T"])
    snap = game.snapshot()
    assert snap.board is game.state.board
    assert snap.current is game.state.current
    assert snap.ghost_y == 18
    assert snap.phase is Phase.RUNNING
    assert not snap.game_over and not snap.paused
    with pytest.raises(AttributeError):
        snap.score = 10  # type: ignore[misc]


def test_sink_sees_committed_state(timer) -> None:
    seen = []
    game = Game(randomizer=SequenceRandom(["O"]), timer=timer)
    game.sink = lambda note: seen.append((note.title, game.phase))
    game.start()
    game.toggle_pause()
    assert seen == [("Game Started", Phase.RUNNING), ("Paused", Phase.PAUSED)]


def test_game_state_phase_precedence() -> None:
    rng = SequenceRandom(["O"])
    s = GameState.fresh(rng)
    assert s.phase is Phase.NOT_STARTED
    assert replace(s, started=True).phase is Phase.RUNNING
    assert replace(s, started=True, paused=True).phase is Phase.PAUSED
    assert replace(s, started=True, paused=True, game_over=True).phase is Phase.GAME_OVER
