from math import inf

import pytest

from underflow.core.scoring import (
    AnchorLocks,
    anchor_locks,
    balance_score,
    evaluate,
    moves_to_edge,
    player_strengths,
)

from boards import parse_board

LONE_CENTER = [
    "N N N N N",
    "N N N N N",
    "N N O0 N N",
    "N N N N N",
    "N N N N N",
]


class TestMovesToEdge:
    def test_center_of_open_board(self):
        assert moves_to_edge(3, 3, 7, AnchorLocks()) == 3.0

    def test_takes_the_shorter_axis(self):
        assert moves_to_edge(1, 4, 7, AnchorLocks()) == 1.0
        assert moves_to_edge(0, 3, 7, AnchorLocks()) == 0.0

    def test_locked_row_counts_as_center(self):
        locks = AnchorLocks(rows={1}, cols={3})
        assert moves_to_edge(1, 1, 7, locks) == 1.0
        assert moves_to_edge(3, 1, 7, locks) == 3.5

    def test_boxed_cell(self):
        board = parse_board([
            ". . . . . . .",
            ". A0 . . . . .",
            ". . . . . . .",
            ". . . . . . .",
            ". . . . A1 . .",
            ". . . . . . .",
            ". . . . . . .",
        ])
        locks = anchor_locks(board)
        assert locks.cells == {(1, 1), (4, 1), (1, 4), (4, 4)}
        for (x, y) in locks.cells:
            assert moves_to_edge(x, y, 7, locks) == 3.5

    def test_aligned_anchors_box_nothing(self):
        board = parse_board([
            "A0 . A1",
            ". . .",
            ". . .",
        ])
        locks = anchor_locks(board)
        assert locks.cells == set()
        assert locks.rows == {0}
        assert locks.cols == {0, 2}


class TestBalance:
    def test_even_opponents_get_full_weight(self):
        assert balance_score({0: 1.0, 1: 2.0, 2: 2.0}, 0) == pytest.approx(15.0)

    def test_spread_opponents(self):
        assert balance_score({0: 1.0, 1: 1.0, 2: 3.0}, 0) == pytest.approx(7.5)

    def test_single_opponent(self):
        assert balance_score({0: 4.0, 1: 1.0}, 0) == 0.0


class TestEvaluate:
    def test_lone_piece(self):
        board = parse_board(LONE_CENTER)
        assert evaluate(board, 0) == 2.0
        assert evaluate(board, 1) == -inf

    def test_anchor_counts_double(self):
        rows = [r.replace("O0", "A0") for r in LONE_CENTER]
        board = parse_board(rows)
        assert player_strengths(board) == {0: 5.0}
        assert evaluate(board, 0) == 5.0

    def test_three_players(self):
        board = parse_board([
            "N N N N N",
            "N O1 N N N",
            "N N O0 N N",
            "N O2 N N N",
            "N N N N N",
        ], player_count=3)
        assert player_strengths(board) == {0: 2.0, 1: 1.0, 2: 1.0}
        assert evaluate(board, 0) == pytest.approx(47.0)
