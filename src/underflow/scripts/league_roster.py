from __future__ import annotations

from functools import partial
from typing import List

from underflow.ai.pick import Difficulty, make_agent

from .league_types import Team


def _team(difficulty: Difficulty, *, name: str, **kwargs) -> Team:
    # workers=1: league games already run one per process
    return Team(name, partial(make_agent, difficulty, name=name, workers=1, **kwargs))


def build_roster(max_depth: int = 2) -> List[Team]:
    teams: List[Team] = [
        _team(Difficulty.EASY, name="Easy"),
        _team(Difficulty.MEDIUM, name="Medium"),
    ]
    for d in range(1, max_depth + 1):
        teams.append(_team(Difficulty.HARD, name=f"Hard d{d}", depth=d))
    return teams
