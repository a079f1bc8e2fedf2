from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from math import inf
import logging
import random
import time
from typing import List, Optional, Sequence, Tuple

from underflow.ai.greedy_agent import GreedyAgent, filling_choice
from underflow.config import SEARCH_WORKERS, search_depth_for
from underflow.core.scoring import evaluate
from underflow.game.actions import Command, describe
from underflow.game.moves import try_handle, valid_commands
from underflow.game.server import GameServer
from underflow.types import Phase, PlayerId

logger = logging.getLogger(__name__)

Child = Tuple[Command, GameServer]


def _expand(server: GameServer) -> List[Child]:
    """Legal commands for the player to move, each paired with its resulting server."""
    children: List[Child] = []
    for cmd in valid_commands(server, server.current_player):
        child = try_handle(server, cmd)
        if child is not None:
            children.append((cmd, child))
    return children


def fold_scores(scores: Sequence[float], maximizing: bool, alpha: float, beta: float) -> Tuple[float, int]:
    """
    Left-to-right alpha-beta fold over sibling scores that were all computed
    up front. Returns (value, index of the sibling that set it).
    """
    best_idx = 0
    if maximizing:
        v = -inf
        for i, s in enumerate(scores):
            if i == 0 or s > v:
                v, best_idx = s, i
            if v >= beta:
                break
            alpha = max(alpha, v)
    else:
        v = inf
        for i, s in enumerate(scores):
            if i == 0 or s < v:
                v, best_idx = s, i
            if v <= alpha:
                break
            beta = min(beta, v)
    return v, best_idx


def _value(server: GameServer, root: PlayerId, depth: int, alpha: float, beta: float) -> Tuple[float, int]:
    """
    Paranoid backup: the root player maximizes its own evaluation, every
    other player minimizes it. Returns (score, nodes visited).
    """
    if depth <= 0 or server.game_over():
        return evaluate(server.board, root), 1

    children = _expand(server)
    if not children:
        return evaluate(server.board, root), 1

    # siblings are independent: score them all, then fold with the bounds
    results = [_value(child, root, depth - 1, alpha, beta) for _, child in children]
    nodes = 1 + sum(n for _, n in results)
    v, _ = fold_scores([s for s, _ in results], server.current_player == root, alpha, beta)
    return v, nodes


@dataclass(slots=True)
class MaxNAgent:
    """
    Depth-limited multi-player search.

    Root siblings are scored in parallel on a thread pool (each on its own
    cloned server), deeper plies run inside the worker. Falls back to the
    greedy agent when the search produces no command.
    """
    name: str = "MaxN AI"
    depth: Optional[int] = None     # None: pick from config by player count
    workers: int = SEARCH_WORKERS
    rng: random.Random = field(default_factory=random.Random)

    # Stats
    last_info: dict = field(default_factory=dict)

    def choose_command(self, server: GameServer, player: PlayerId) -> Command:
        start = time.perf_counter()
        self.last_info = {}

        if server.phase is Phase.FILLING:
            choice = filling_choice(server, valid_commands(server, player), self.rng)
            self._record(start, choice, depth=0, nodes=0, score=None)
            return choice

        depth = self.depth if self.depth is not None else search_depth_for(server.player_count)
        score, choice, nodes = self._search_root(server, player, depth)

        if choice is None:
            logger.debug("%s found nothing at depth %d, falling back to greedy", self.name, depth)
            fallback = GreedyAgent(rng=self.rng)
            choice = fallback.choose_command(server, player)
            info = fallback.last_info
            self._record(start, choice, depth=info["depth"], nodes=nodes + info["nodes"], score=info["eval"])
            return choice

        self._record(start, choice, depth=depth, nodes=nodes, score=score)
        return choice

    def search(self, server: GameServer, depth: int) -> Tuple[float, Optional[Command]]:
        """Score and best command for the player to move, searching depth plies."""
        score, choice, _ = self._search_root(server, server.current_player, depth)
        return score, choice

    def _search_root(self, server: GameServer, root: PlayerId, depth: int) -> Tuple[float, Optional[Command], int]:
        if depth <= 0 or server.game_over():
            return evaluate(server.board, root), None, 1

        children = _expand(server) if server.current_player == root else []
        if not children:
            return evaluate(server.board, root), None, 1

        def score_child(item: Child) -> Tuple[float, int]:
            _, child = item
            return _value(child, root, depth - 1, -inf, inf)

        if self.workers > 1 and len(children) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                results = list(pool.map(score_child, children))
        else:
            results = [score_child(c) for c in children]

        nodes = 1 + sum(n for _, n in results)

        best_score = -inf
        best: List[Command] = []
        for (cmd, _), (s, _) in zip(children, results):
            if not best or s > best_score:
                best_score = s
                best = [cmd]
            elif s == best_score:
                best.append(cmd)

        return best_score, self.rng.choice(best), nodes

    def _record(self, start: float, choice: Command, depth: int, nodes: int, score) -> None:
        elapsed = time.perf_counter() - start
        self.last_info = {
            "depth": depth,
            "nodes": nodes,
            "eval": score,
            "command": choice,
            "time_ms": max(1, int(elapsed * 1000)),
        }
        logger.debug(
            "%s chose %s (d=%d, nodes=%d, eval=%s, %dms)",
            self.name, describe(choice), depth, nodes, score, self.last_info["time_ms"],
        )
