from __future__ import annotations

from dataclasses import dataclass, field
from math import inf
import logging
import random
import time
from typing import List, Sequence

from underflow.ai.random_agent import RandomAgent
from underflow.core.scoring import evaluate
from underflow.game.actions import Command, SetOccupied, describe
from underflow.game.errors import NoValidMove
from underflow.game.moves import filling_score, try_handle, valid_commands
from underflow.game.server import GameServer
from underflow.types import Phase, PlayerId

logger = logging.getLogger(__name__)


def filling_choice(server: GameServer, commands: Sequence[Command], rng: random.Random) -> Command:
    """Most central empty cell, ties broken at random."""
    size = server.size
    best_score = -1
    best: List[Command] = []
    for cmd in commands:
        if not isinstance(cmd, SetOccupied):
            continue
        s = filling_score(size, cmd.x, cmd.y)
        if s > best_score:
            best_score = s
            best = [cmd]
        elif s == best_score:
            best.append(cmd)

    if not best:
        raise NoValidMove()
    return rng.choice(best)


@dataclass(slots=True)
class GreedyAgent:
    """
    1-ply heuristic search.

    Filling: take the most central cell.
    Flowing: simulate every legal command and keep the ones with the best
    evaluation for us; pick among ties at random.
    """
    name: str = "Greedy (1-ply)"
    rng: random.Random = field(default_factory=random.Random)

    last_info: dict = field(default_factory=dict)

    def choose_command(self, server: GameServer, player: PlayerId) -> Command:
        start = time.perf_counter()
        self.last_info = {}
        commands = valid_commands(server, player)

        if server.phase is Phase.FILLING:
            choice = filling_choice(server, commands, self.rng)
            self._record(start, choice, depth=0, nodes=0, score=None)
            return choice

        best_score = -inf
        best: List[Command] = []
        nodes = 0

        for cmd in commands:
            child = try_handle(server, cmd)
            if child is None:
                continue
            nodes += 1
            s = evaluate(child.board, player)
            if s > best_score:
                best_score = s
                best = [cmd]
            elif s == best_score:
                best.append(cmd)

        if not best:
            choice = RandomAgent(rng=self.rng).choose_command(server, player)
            self._record(start, choice, depth=0, nodes=nodes, score=None)
            return choice

        choice = self.rng.choice(best)
        self._record(start, choice, depth=1, nodes=nodes, score=best_score)
        return choice

    def _record(self, start: float, choice: Command, depth: int, nodes: int, score) -> None:
        elapsed = time.perf_counter() - start
        self.last_info = {
            "depth": depth,
            "nodes": nodes,
            "eval": score,
            "command": choice,
            "time_ms": max(1, int(elapsed * 1000)),
        }
        logger.debug("%s chose %s (eval=%s, nodes=%d)", self.name, describe(choice), score, nodes)
