from __future__ import annotations
from dataclasses import dataclass, field
from math import inf, sqrt
from typing import Dict, List, Set

from underflow.config import BALANCE_WEIGHT
from underflow.core.board import Board
from underflow.types import Coord, PlayerId


@dataclass(slots=True)
class AnchorLocks:
    rows: Set[int] = field(default_factory=set)
    cols: Set[int] = field(default_factory=set)
    cells: Set[Coord] = field(default_factory=set)   # rectangle corners of two anchors


def anchor_locks(board: Board) -> AnchorLocks:
    locks = AnchorLocks()
    anchors = board.anchors()
    for (ax, ay) in anchors:
        locks.rows.add(ay)
        locks.cols.add(ax)
        for (bx, by) in anchors:
            if ax != bx and ay != by:
                locks.cells.update({(ax, ay), (bx, ay), (ax, by), (bx, by)})
    return locks


def moves_to_edge(x: int, y: int, size: int, locks: AnchorLocks) -> float:
    """
    Fewest flows needed to push (x, y) off the board. A locked axis, or a
    cell boxed in by two anchors, counts as a center cell.
    """
    center = size / 2.0
    if (x, y) in locks.cells:
        return center

    row_moves = center if y in locks.rows else float(min(x, size - 1 - x))
    col_moves = center if x in locks.cols else float(min(y, size - 1 - y))
    return min(row_moves, col_moves)


def balance_score(strengths: Dict[PlayerId, float], player: PlayerId) -> float:
    """Rewards evenly matched opponents; 0 with fewer than two of them."""
    others: List[float] = [s for pid, s in strengths.items() if pid != player]
    if len(others) < 2:
        return 0.0
    mean = sum(others) / len(others)
    var = sum((s - mean) ** 2 for s in others) / len(others)
    return BALANCE_WEIGHT / (1.0 + sqrt(var))


def player_strengths(board: Board) -> Dict[PlayerId, float]:
    locks = anchor_locks(board)
    strengths: Dict[PlayerId, float] = {}
    for (x, y) in board.coords():
        cell = board.get(x, y)
        if not (cell.is_occupied or cell.is_anchor):
            continue
        safety = moves_to_edge(x, y, board.size, locks)
        if cell.is_anchor:
            safety *= 2.0
        strengths[cell.player] = strengths.get(cell.player, 0.0) + safety
    return strengths


def evaluate(board: Board, player: PlayerId) -> float:
    strengths = player_strengths(board)
    mine = strengths.get(player, 0.0)
    if mine == 0.0:
        return -inf

    diversity = max(1, len(strengths))
    return mine + balance_score(strengths, player) * diversity
