from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict


class Result(Enum):
    """Game result from one team's point of view; the value is league points."""
    WIN = 1.0
    DRAW = 0.5
    LOSS = 0.0


@dataclass(frozen=True)
class Team:
    name: str
    make: Callable[[], object]  # must pickle for worker processes: functools.partial, not a lambda


@dataclass
class TeamStats:
    """Running totals for one team over every league game it played."""
    games: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    points: float = 0.0

    # summed over the seat the team held in each game
    moves: int = 0
    time_ms: int = 0
    nodes: int = 0
    depth_sum: int = 0

    def record(self, result: Result, seat: Dict[str, int]) -> None:
        self.games += 1
        self.points += result.value
        if result is Result.WIN:
            self.wins += 1
        elif result is Result.DRAW:
            self.draws += 1
        else:
            self.losses += 1

        self.moves += seat["moves"]
        self.time_ms += seat["time_ms"]
        self.nodes += seat["nodes"]
        self.depth_sum += seat["depth"]

    @property
    def ppg(self) -> float:
        return self.points / self.games if self.games else 0.0

    @property
    def ms_per_move(self) -> float:
        return self.time_ms / self.moves if self.moves else 0.0

    @property
    def avg_depth(self) -> float:
        return self.depth_sum / self.moves if self.moves else 0.0
