from __future__ import annotations

from dataclasses import dataclass
from itertools import islice
from typing import Iterable, Iterator, List, Tuple

from underflow.config import ServerConfig
from underflow.game.controller import DRAW, Outcome, SeatStats, play_headless

from .league_types import Result, Team, TeamStats

GameRecord = Tuple[str, str, bool, Outcome, SeatStats]   # (A, B, a_first, outcome, stats)
BatchJob = Tuple[List["Pairing"], int, int, int]         # (pairings, games, size, max_moves)


@dataclass(frozen=True)
class Pairing:
    a: Team
    b: Team
    seed: int


def result_for_seat(outcome: Outcome, seat: int) -> Result:
    if outcome == DRAW:
        return Result.DRAW
    return Result.WIN if outcome == seat else Result.LOSS


def add_result(a: TeamStats, b: TeamStats, outcome: Outcome, a_first: bool, stats: SeatStats) -> None:
    a_seat, b_seat = (0, 1) if a_first else (1, 0)
    a.record(result_for_seat(outcome, a_seat), stats[a_seat])
    b.record(result_for_seat(outcome, b_seat), stats[b_seat])


def play_pairing(pairing: Pairing, games: int, config: ServerConfig, max_moves: int) -> Iterator[GameRecord]:
    # seats swap every game so neither team always fills first
    for g in range(games):
        a_first = g % 2 == 0
        seats = (pairing.a, pairing.b) if a_first else (pairing.b, pairing.a)
        agents = [team.make() for team in seats]
        outcome, stats = play_headless(agents, config, seed_base=pairing.seed + g, max_moves=max_moves)
        yield pairing.a.name, pairing.b.name, a_first, outcome, stats


def run_batch(job: BatchJob) -> List[GameRecord]:
    """Worker entry point: every game of a handful of pairings, in order."""
    pairings, games, size, max_moves = job
    config = ServerConfig(player_count=2, size=size)
    return [rec for p in pairings for rec in play_pairing(p, games, config, max_moves)]


def batched(items: Iterable, size: int) -> Iterator[list]:
    it = iter(items)
    while True:
        chunk = list(islice(it, max(1, size)))
        if not chunk:
            return
        yield chunk
