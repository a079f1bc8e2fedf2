from __future__ import annotations
from typing import List, Optional

from underflow.core.board import Board
from underflow.game.actions import Command, FlowX, FlowY, SetAnchor, SetOccupied
from underflow.game.errors import GameError
from underflow.game.server import GameServer
from underflow.types import Coord, Phase, PlayerId


def try_handle(server: GameServer, command: Command) -> Optional[GameServer]:
    """Apply command to a clone. Returns the clone, or None if rejected."""
    clone = server.copy()
    try:
        clone.handle(command)
    except GameError:
        return None
    return clone


def valid_commands(server: GameServer, player: PlayerId) -> List[Command]:
    if server.phase is Phase.FILLING:
        return filling_commands(server, player)
    return flowing_commands(server, player)


def filling_commands(server: GameServer, player: PlayerId) -> List[Command]:
    if player != server.current_player:
        return []
    board = server.board
    return [
        SetOccupied(player, x, y)
        for (x, y) in board.coords()
        if board.get(x, y).is_empty
    ]


def flowing_commands(server: GameServer, player: PlayerId) -> List[Command]:
    """
    Flows on every unanchored row/column plus an anchor on every neutral
    cell, keeping only the ones the server would accept right now.
    """
    board = server.board
    candidates: List[Command] = []

    for i in range(board.size):
        if board.can_flow_x(i):
            candidates.append(FlowX(player, i, True))
            candidates.append(FlowX(player, i, False))
        if board.can_flow_y(i):
            candidates.append(FlowY(player, i, True))
            candidates.append(FlowY(player, i, False))

    for (x, y) in anchor_positions(board):
        candidates.append(SetAnchor(player, x, y))

    return [cmd for cmd in candidates if try_handle(server, cmd) is not None]


def anchor_positions(board: Board) -> List[Coord]:
    return [(x, y) for (x, y) in board.coords() if board.get(x, y).is_neutral]


def filling_score(size: int, x: int, y: int) -> int:
    """Distance to the nearest edge; bigger is more central."""
    dx = min(x, size - 1 - x)
    dy = min(y, size - 1 - y)
    return min(dx, dy)
