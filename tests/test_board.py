import pytest

from underflow.core.board import Board
from underflow.types import EMPTY, NEUTRAL, anchored, occupied

from boards import parse_board


class TestInit:
    def test_two_players_odd_size_has_center_hole(self):
        b = Board.init(2, 7)
        assert b.get(3, 3) == NEUTRAL
        empties = [(x, y) for (x, y) in b.coords() if b.get(x, y) == EMPTY]
        assert len(empties) == 48

    def test_two_players_even_size_has_no_hole(self):
        b = Board.init(2, 6)
        assert all(b.get(x, y) == EMPTY for (x, y) in b.coords())

    def test_four_players_odd_size(self):
        b = Board.init(4, 5)
        assert b.get(2, 2) == NEUTRAL
        assert b.get(0, 0) == EMPTY

    def test_three_players_corners(self):
        b = Board.init(3, 7)
        for (x, y) in [(0, 0), (0, 6), (6, 0), (6, 6)]:
            assert b.get(x, y) == NEUTRAL
        assert b.get(3, 3) == EMPTY

    def test_three_players_multiple_of_three(self):
        b = Board.init(3, 6)
        assert all(b.get(x, y) == EMPTY for (x, y) in b.coords())

    def test_unsupported_player_count(self):
        with pytest.raises(ValueError):
            Board.init(5, 7)


def test_flow_and_anchor_walkthrough():
    board = Board.init(3, 7)
    assert board.size == 7
    board.set(3, 3, occupied(1))
    assert board.can_flow_x(3)
    assert board.can_flow_y(3)

    assert board.flow_x(3, True)
    assert board.get(3, 3) == EMPTY
    assert board.get(4, 3) == occupied(1)
    assert board.get(0, 3) == NEUTRAL

    assert board.flow_y(4, True)
    assert board.flow_y(4, False)
    assert board.get(4, 3) == occupied(1)

    board.set(4, 3, anchored(1))
    assert not board.can_flow_x(3)
    assert not board.can_flow_y(4)
    assert not board.is_ready()

    expected = "\n".join([
        "N  █  █  █  █  █  N",
        "█  █  █  █  █  █  █",
        "█  █  █  █  █  █  █",
        "N  █  █  █  A1 █  █",
        "█  █  █  █  █  █  █",
        "█  █  █  █  █  █  █",
        "N  █  █  █  N  █  N",
    ])
    assert str(board) == expected


class TestFlow:
    def test_positive_x_pushes_last_cell_off(self):
        b = parse_board(["O0 O1 O0", "N N N", "O1 O1 O0"])
        assert b.flow_x(0, True)
        assert [b.get(x, 0) for x in range(3)] == [NEUTRAL, occupied(0), occupied(1)]

    def test_negative_x(self):
        b = parse_board(["O0 O1 O0", "N N N", "O1 O1 O0"])
        assert b.flow_x(0, False)
        assert [b.get(x, 0) for x in range(3)] == [occupied(1), occupied(0), NEUTRAL]

    def test_positive_y(self):
        b = parse_board(["O0 N N", "O1 N N", "O0 N N"])
        assert b.flow_y(0, True)
        assert [b.get(0, y) for y in range(3)] == [NEUTRAL, occupied(0), occupied(1)]

    def test_negative_y(self):
        b = parse_board(["O0 N N", "O1 N N", "O0 N N"])
        assert b.flow_y(0, False)
        assert [b.get(0, y) for y in range(3)] == [occupied(1), occupied(0), NEUTRAL]

    def test_anchored_row_is_noop(self):
        b = parse_board(["O0 A1 O0", "N N N", "O1 O1 O0"])
        before = b.snapshot()
        assert not b.flow_x(0, True)
        assert not b.flow_y(1, False)
        assert b.snapshot() == before

    def test_anchor_blocks_its_row_and_column_only(self):
        b = parse_board(["O0 O0 O0", "O0 A0 O0", "O0 O0 O0"])
        assert not b.can_flow_x(1)
        assert not b.can_flow_y(1)
        assert b.can_flow_x(0) and b.can_flow_x(2)
        assert b.can_flow_y(0) and b.can_flow_y(2)

    @pytest.mark.parametrize("axis", ["x", "y"])
    @pytest.mark.parametrize("positive", [True, False])
    @pytest.mark.parametrize("index", [0, 1, 2, 3])
    def test_flow_only_loses_the_cell_pushed_off(self, axis, positive, index):
        b = parse_board([
            "O0 O1 N O1",
            "O1 O0 O0 N",
            "N O1 O0 O1",
            "O0 O0 O1 O1",
        ])
        before = b.stat().total_occupied
        if axis == "x":
            leaving = b.get(3 if positive else 0, index)
            assert b.flow_x(index, positive)
        else:
            leaving = b.get(index, 3 if positive else 0)
            assert b.flow_y(index, positive)
        assert b.stat().total_occupied == before - (1 if leaving.is_occupied else 0)


class TestStat:
    def test_not_ready_has_no_stat(self):
        b = Board.init(2, 3)
        assert not b.is_ready()
        assert b.stat() is None

    def test_ready_stat(self):
        b = parse_board(["O0 O1 O0", "O1 N O1", "O0 A1 N"])
        stat = b.stat()
        assert stat.player_stat == {0: 3, 1: 3}
        assert stat.total_occupied == 6
        assert stat.total_unoccupied == 3

    def test_anchor_queries(self):
        b = parse_board(["O0 O1 O0", "O1 N O1", "O0 A1 N"])
        assert b.anchor_of(1) == (1, 2)
        assert b.anchor_of(0) is None
        assert b.anchors() == [(1, 2)]
        assert b.occupied_count(0) == 3
        assert b.occupants() == {0, 1}


def test_copy_is_independent():
    b = parse_board(["O0 O1", "O1 O0"])
    c = b.copy()
    c.flow_x(0, True)
    assert b.get(0, 0) == occupied(0)
    assert c != b
    assert b.copy() == b
