import csv

import pytest

from underflow.ai.greedy_agent import GreedyAgent
from underflow.ai.maxn_agent import MaxNAgent
from underflow.ai.random_agent import RandomAgent
from underflow.game.controller import DRAW
from underflow.scripts.league_core import CSV_COLUMNS, round_robin, run_league
from underflow.scripts.league_format import Column, render_table
from underflow.scripts.league_main import build_argparser
from underflow.scripts.league_play import add_result, batched, result_for_seat
from underflow.scripts.league_roster import build_roster
from underflow.scripts.league_scoring import SpeedModel, pareto_frontier, wilson_lcb
from underflow.scripts.league_types import Result, TeamStats

SEAT = {"moves": 10, "time_ms": 20, "nodes": 30, "depth": 10}
IDLE = {"moves": 0, "time_ms": 0, "nodes": 0, "depth": 0}


class TestResults:
    def test_result_for_seat(self):
        assert result_for_seat(DRAW, 0) is Result.DRAW
        assert result_for_seat(1, 1) is Result.WIN
        assert result_for_seat(1, 0) is Result.LOSS

    def test_draw_splits_points(self):
        a, b = TeamStats(), TeamStats()
        add_result(a, b, DRAW, True, {0: SEAT, 1: IDLE})
        assert (a.points, b.points) == (0.5, 0.5)
        assert a.draws == b.draws == 1
        assert (a.moves, b.moves) == (10, 0)

    def test_seat_maps_to_team(self):
        a, b = TeamStats(), TeamStats()
        add_result(a, b, 0, True, {0: SEAT, 1: SEAT})
        add_result(a, b, 0, False, {0: SEAT, 1: IDLE})
        assert (a.wins, a.losses) == (1, 1)
        assert (b.wins, b.losses) == (1, 1)
        assert a.games == b.games == 2
        assert a.points == b.points == 1.0
        assert a.moves == 10
        assert b.moves == 20

    def test_derived_rates(self):
        t = TeamStats()
        assert t.ppg == t.ms_per_move == t.avg_depth == 0.0
        t.record(Result.WIN, SEAT)
        assert t.ppg == 1.0
        assert t.ms_per_move == 2.0
        assert t.avg_depth == 1.0


class TestScoring:
    def test_wilson_lcb_bounds(self):
        assert wilson_lcb(0.5, 0, 1.28) == 0.0
        lcb = wilson_lcb(0.8, 50, 1.28)
        assert 0.0 < lcb < 0.8
        assert wilson_lcb(0.8, 500, 1.28) > lcb
        assert wilson_lcb(1.0, 4, 1.28) < 1.0

    def test_speed_factor_floor(self):
        model = SpeedModel(ms_target=50.0, alpha=0.35, floor=0.75)
        assert model.factor(1e6) == 0.75
        assert model.factor(1.0) > 0.9

    def test_pareto_frontier(self):
        strong_slow = TeamStats(games=10, points=9.0, moves=10, time_ms=1000)
        weak_fast = TeamStats(games=10, points=2.0, moves=10, time_ms=10)
        dominated = TeamStats(games=10, points=1.0, moves=10, time_ms=500)
        rows = [("meh", dominated), ("fast", weak_fast), ("slow", strong_slow)]
        names = [name for name, _ in pareto_frontier(rows, 1.28)]
        assert names == ["slow", "fast"]


def test_batched():
    assert list(batched([1, 2, 3, 4, 5], 2)) == [[1, 2], [3, 4], [5]]
    assert list(batched([], 3)) == []


def test_round_robin_pairs_each_team_once():
    teams = build_roster(max_depth=2)
    pairings = round_robin(teams, seed=1)
    assert len(pairings) == 6
    assert len({(p.a.name, p.b.name) for p in pairings}) == 6
    assert len({p.seed for p in pairings}) == 6


def test_render_table_without_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    lines = render_table("T", [Column("a", 3), Column("b", 4, right=True)], [["xyzzy", 7]], width=20)
    assert lines[0] == "T"
    assert lines[1] == "a  " + "  " + "   b"
    assert lines[3] == "xy…" + "  " + "   7"


def test_build_roster():
    teams = build_roster(max_depth=2)
    assert [t.name for t in teams] == ["Easy", "Medium", "Hard d1", "Hard d2"]
    agents = [t.make() for t in teams]
    assert isinstance(agents[0], RandomAgent)
    assert isinstance(agents[1], GreedyAgent)
    assert isinstance(agents[3], MaxNAgent)
    assert agents[3].depth == 2
    assert agents[3].workers == 1
    assert agents[3].name == "Hard d2"


def test_run_league_in_process(tmp_path):
    teams = build_roster(max_depth=0)
    stats = run_league(
        teams,
        games_per_pair=2,
        size=3,
        seed=7,
        max_workers=1,
        max_moves=150,
        out_dir=tmp_path,
        quiet=True,
    )
    assert set(stats) == {"Easy", "Medium"}
    assert stats["Easy"].games == stats["Medium"].games == 2
    assert stats["Easy"].points + stats["Medium"].points == pytest.approx(2.0)
    assert all(0.0 <= t.ppg <= 1.0 for t in stats.values())

    files = list(tmp_path.glob("league_results_*.csv"))
    assert len(files) == 1
    with open(files[0], newline="") as f:
        rows = list(csv.DictReader(f))
    assert list(rows[0]) == CSV_COLUMNS
    assert {r["name"] for r in rows} == {"Easy", "Medium"}


def test_league_parser():
    args = build_argparser().parse_args(["--size", "4", "--max-workers", "1"])
    assert args.size == 4
    assert args.max_workers == 1
    assert args.games_per_pair == 2
