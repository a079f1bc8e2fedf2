from __future__ import annotations

from enum import Enum
import random
from typing import Optional

from underflow.ai.base import Agent
from underflow.ai.greedy_agent import GreedyAgent
from underflow.ai.maxn_agent import MaxNAgent
from underflow.ai.random_agent import RandomAgent
from underflow.config import SEARCH_WORKERS
from underflow.game.actions import Command
from underflow.game.server import GameServer
from underflow.types import PlayerId


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def make_agent(
    difficulty: Difficulty,
    *,
    rng: Optional[random.Random] = None,
    depth: Optional[int] = None,
    workers: int = SEARCH_WORKERS,
    name: Optional[str] = None,
) -> Agent:
    """Build the strategy for a difficulty tier."""
    rng = rng or random.Random()

    if difficulty is Difficulty.EASY:
        return RandomAgent(name=name or "Easy (random)", rng=rng)
    if difficulty is Difficulty.MEDIUM:
        return GreedyAgent(name=name or "Medium (greedy)", rng=rng)
    if difficulty is Difficulty.HARD:
        return MaxNAgent(name=name or "Hard (maxN)", depth=depth, workers=workers, rng=rng)
    raise ValueError(f"Unknown difficulty: {difficulty!r}")


def choose_command(
    player: PlayerId,
    difficulty: Difficulty,
    server: GameServer,
    rng: Optional[random.Random] = None,
) -> Command:
    """
    AI entry point: a ready-to-apply command for player.
    Raises NoValidMove when the player has nothing legal to do.
    The server is not modified.
    """
    return make_agent(difficulty, rng=rng).choose_command(server, player)


def parse_difficulty(raw: str) -> Difficulty:
    s = raw.strip().lower()
    for d in Difficulty:
        if s in {d.value, d.name.lower(), d.value[0]}:
            return d
    raise ValueError(f"Unknown difficulty '{raw}'. Use easy, medium or hard.")
