from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence, Tuple, Union

from underflow.ai.base import Agent
from underflow.config import MAX_GAME_MOVES, ServerConfig
from underflow.game.actions import describe
from underflow.game.errors import NoValidMove
from underflow.game.server import GameServer
from underflow.types import PlayerId

logger = logging.getLogger(__name__)

DRAW = "D"
Outcome = Union[PlayerId, str]   # winning seat, or DRAW
SeatStats = Dict[PlayerId, Dict[str, int]]


def seed_agent(agent, seed: int) -> None:
    rng = getattr(agent, "rng", None)
    if rng is not None:
        rng.seed(seed)


def play_game(
    agents: Sequence[Agent],
    server: GameServer,
    max_moves: int = MAX_GAME_MOVES,
) -> Tuple[Outcome, SeatStats]:
    """
    Drive server to the end with one agent per seat.
    A draw is declared at the move cap, or when the player to move has no
    legal command left.
    """
    if len(agents) != server.player_count:
        raise ValueError(f"Need {server.player_count} agents, got {len(agents)}.")

    stats: SeatStats = {
        seat: {"moves": 0, "time_ms": 0, "nodes": 0, "depth": 0}
        for seat in range(server.player_count)
    }

    moves = 0
    while True:
        if server.game_over():
            winner = server.winning()
            logger.info("Game over after %d moves: player %s wins", moves, winner)
            return winner, stats

        if moves >= max_moves:
            logger.info("Move cap (%d) reached, draw", max_moves)
            return DRAW, stats

        seat = server.current_player
        agent = agents[seat]
        try:
            cmd = agent.choose_command(server, seat)
        except NoValidMove:
            logger.info("Player %d has no legal command after %d moves, draw", seat, moves)
            return DRAW, stats

        server.handle(cmd)
        moves += 1
        logger.debug("#%d %s", moves, describe(cmd))

        info = getattr(agent, "last_info", None) or {}
        seat_stats = stats[seat]
        seat_stats["moves"] += 1
        seat_stats["time_ms"] += max(1, int(info.get("time_ms", 0)))
        seat_stats["nodes"] += int(info.get("nodes", 0))
        seat_stats["depth"] += int(info.get("depth", 0))


def play_headless(
    agents: Sequence[Agent],
    config: Optional[ServerConfig] = None,
    seed_base: int = 0,
    max_moves: int = MAX_GAME_MOVES,
) -> Tuple[Outcome, SeatStats]:
    config = config or ServerConfig(player_count=len(agents))
    for seat, agent in enumerate(agents):
        seed_agent(agent, seed_base + 101 * (seat + 1))
    return play_game(agents, GameServer.new(config), max_moves=max_moves)
