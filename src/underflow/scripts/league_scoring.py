from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

from .league_types import TeamStats

Row = Tuple[str, TeamStats]


def wilson_lcb(p: float, n: int, z: float) -> float:
    """
    Lower end of the Wilson score interval for a points-per-game p over n
    games. Few games pull the bound down, so lucky short runs rank low.
    """
    if n <= 0:
        return 0.0
    p = min(1.0, max(0.0, p))
    spread = z * math.sqrt(p * (1.0 - p) / n + z * z / (4.0 * n * n))
    lower = (p + z * z / (2.0 * n) - spread) / (1.0 + z * z / n)
    return max(0.0, lower)


def strength(t: TeamStats, z: float) -> float:
    return wilson_lcb(t.ppg, t.games, z)


@dataclass(frozen=True)
class SpeedModel:
    """Discount applied to strength for slow agents, never below floor."""
    ms_target: float = 50.0
    alpha: float = 0.35
    floor: float = 0.75

    def factor(self, ms_per_move: float) -> float:
        ratio = max(1e-9, ms_per_move) / max(1e-9, self.ms_target)
        return max(self.floor, 1.0 / (1.0 + self.alpha * math.sqrt(ratio)))


def efficiency(t: TeamStats, z: float, speed: SpeedModel) -> float:
    return strength(t, z) * speed.factor(t.ms_per_move)


def _dominates(a: TeamStats, b: TeamStats, z: float) -> bool:
    sa, sb = strength(a, z), strength(b, z)
    no_worse = sa >= sb and a.ms_per_move <= b.ms_per_move
    better = sa > sb or a.ms_per_move < b.ms_per_move
    return no_worse and better


def pareto_frontier(rows: List[Row], z: float) -> List[Row]:
    """Teams that no other team matches on strength while also being faster."""
    front = [r for r in rows if not any(_dominates(o, r[1], z) for _, o in rows)]
    return sorted(front, key=lambda r: strength(r[1], z), reverse=True)
