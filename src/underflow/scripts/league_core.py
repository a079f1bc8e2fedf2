from __future__ import annotations

import csv
import logging
import os
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from underflow.config import LEAGUE_BOARD_SIZE, LEAGUE_GAMES_PER_PAIR, MAX_GAME_MOVES

from .league_format import Column, print_table, rule, style, term_width
from .league_play import GameRecord, Pairing, add_result, batched, run_batch
from .league_scoring import Row, SpeedModel, efficiency, pareto_frontier, strength
from .league_types import Team, TeamStats

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "name",
    "games", "wins", "draws", "losses",
    "points", "ppg",
    "strength_wilson_lcb",
    "avg_ms_per_move",
    "efficiency_score",
    "moves", "time_ms", "nodes", "avg_depth",
]


def round_robin(teams: List[Team], seed: int) -> List[Pairing]:
    """Every unordered pair once, each with its own deterministic seed."""
    return [
        Pairing(a, b, seed + i * 10_000 + j * 100)
        for i, a in enumerate(teams)
        for j, b in enumerate(teams)
        if i < j
    ]


def _table_rows(ranking: Iterable[Row], z: float, speed: SpeedModel, top_n: int) -> List[List[str]]:
    rows: List[List[str]] = []
    for rank, (name, t) in enumerate(ranking, start=1):
        if rank > top_n:
            break
        rows.append([
            str(rank),
            name,
            f"{strength(t, z):0.4f}",
            f"{efficiency(t, z, speed):0.4f}",
            f"{t.ppg:0.3f}",
            str(t.games),
            f"{t.ms_per_move:0.1f}",
            f"{t.wins}-{t.draws}-{t.losses}",
        ])
    return rows


def print_standings(title: str, stats: Dict[str, TeamStats], *, z: float, speed: SpeedModel, top_n: int = 20) -> None:
    width = term_width(120)
    columns = [
        Column("rk", 3, right=True),
        Column("team", max(18, min(40, width - 60))),
        Column("strength", 10, right=True),
        Column("eff", 10, right=True),
        Column("ppg", 5, right=True),
        Column("g", 4, right=True),
        Column("ms/mv", 8, right=True),
        Column("W-D-L", 9, right=True),
    ]
    rows = list(stats.items())

    print("\n" + style(f"=== {title} ===", "bold"))
    print(style(rule("═", width), "dim"))
    rankings = [
        ("Top by Strength", sorted(rows, key=lambda r: strength(r[1], z), reverse=True)),
        ("Top by Efficiency", sorted(rows, key=lambda r: efficiency(r[1], z, speed), reverse=True)),
        ("Pareto Frontier (strength vs time per move)", pareto_frontier(rows, z)),
    ]
    for heading, ranking in rankings:
        print_table(heading, columns, _table_rows(ranking, z, speed, top_n), width=width)


def export_csv(stats: Dict[str, TeamStats], out_dir: Path, *, z: float, speed: SpeedModel) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"league_results_{time.strftime('%Y%m%d_%H%M%S')}.csv"

    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for name, t in stats.items():
            writer.writerow({
                "name": name,
                "games": t.games, "wins": t.wins, "draws": t.draws, "losses": t.losses,
                "points": t.points,
                "ppg": round(t.ppg, 6),
                "strength_wilson_lcb": round(strength(t, z), 6),
                "avg_ms_per_move": round(t.ms_per_move, 3),
                "efficiency_score": round(efficiency(t, z, speed), 6),
                "moves": t.moves, "time_ms": t.time_ms, "nodes": t.nodes,
                "avg_depth": round(t.avg_depth, 3),
            })
    logger.info("Wrote %d league rows to %s", len(stats), path)
    return path


def run_league(
    teams: List[Team],
    games_per_pair: int = LEAGUE_GAMES_PER_PAIR,
    size: int = LEAGUE_BOARD_SIZE,
    seed: int = 1234,
    max_workers: Optional[int] = None,
    batch_pairings: int = 4,
    max_moves: int = MAX_GAME_MOVES,
    z: float = 1.28,
    speed: SpeedModel = SpeedModel(),
    out_dir: Optional[Path] = Path("data/results"),
    quiet: bool = False,
) -> Dict[str, TeamStats]:
    """
    Round-robin of 2-player games between all teams, seats alternating.

    Pairings are grouped into batches; each batch is one task for a worker
    process. max_workers <= 1 plays everything in this process.
    """
    stats: Dict[str, TeamStats] = {t.name: TeamStats() for t in teams}

    def apply(record: GameRecord) -> None:
        a_name, b_name, a_first, outcome, seat_stats = record
        add_result(stats[a_name], stats[b_name], outcome, a_first, seat_stats)

    jobs = [
        (chunk, games_per_pair, size, max_moves)
        for chunk in batched(round_robin(teams, seed), batch_pairings)
    ]
    if max_workers is None:
        max_workers = min(os.cpu_count() or 2, 6)
    logger.info("League: %d teams, %d batches, %d workers", len(teams), len(jobs), max_workers)

    if max_workers <= 1:
        for job in jobs:
            for record in run_batch(job):
                apply(record)
    else:
        with ProcessPoolExecutor(max_workers=max_workers) as ex:
            futures = [ex.submit(run_batch, job) for job in jobs]
            for fut in as_completed(futures):
                for record in fut.result():
                    apply(record)

    if not quiet:
        print_standings(f"League results ({size}x{size})", stats, z=z, speed=speed)

    if out_dir is not None:
        path = export_csv(stats, Path(out_dir), z=z, speed=speed)
        if not quiet:
            print("\n" + style("Export", "bold"))
            print(f"Wrote CSV: {path}")

    return stats
