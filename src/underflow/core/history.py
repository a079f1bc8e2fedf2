from __future__ import annotations
from typing import List, Set

from underflow.core.board import Board, Snapshot


class History:
    """
    Boards seen during the flowing phase, bucketed by unoccupied cell count.

    Flows and anchor moves never bring a piece back, so a board can only
    repeat one with the same unoccupied count.
    """

    def __init__(self) -> None:
        self._buckets: List[Set[Snapshot]] = []

    def __len__(self) -> int:
        return sum(len(b) for b in self._buckets)

    def copy(self) -> "History":
        h = History()
        h._buckets = [set(b) for b in self._buckets]
        return h

    def is_recurrence(self, board: Board) -> bool:
        stat = board.stat()
        if stat is None:
            return False
        if stat.total_unoccupied >= len(self._buckets):
            return False
        return board.snapshot() in self._buckets[stat.total_unoccupied]

    def push(self, board: Board) -> None:
        """Record a ready board. Not re-validated: call is_recurrence first."""
        stat = board.stat()
        if stat is None:
            raise ValueError("Cannot record a board that is still filling.")
        while len(self._buckets) <= stat.total_unoccupied:
            self._buckets.append(set())
        self._buckets[stat.total_unoccupied].add(board.snapshot())
