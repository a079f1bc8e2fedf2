# src/underflow/types.py

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

PlayerId = int
Coord = Tuple[int, int]   # (x, y), origin top-left, +x right, +y down


class CellKind(Enum):
    EMPTY = "empty"        # never played
    NEUTRAL = "neutral"    # vacated by a flow, or a symmetry hole
    OCCUPIED = "occupied"
    ANCHORED = "anchored"


@dataclass(frozen=True, slots=True)
class Cell:
    kind: CellKind
    player: Optional[PlayerId] = None

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    @property
    def is_neutral(self) -> bool:
        return self.kind is CellKind.NEUTRAL

    @property
    def is_occupied(self) -> bool:
        return self.kind is CellKind.OCCUPIED

    @property
    def is_anchor(self) -> bool:
        return self.kind is CellKind.ANCHORED

    def __str__(self) -> str:
        if self.kind is CellKind.EMPTY:
            return "█"
        if self.kind is CellKind.NEUTRAL:
            return "N"
        if self.kind is CellKind.OCCUPIED:
            return f"O{self.player}"
        return f"A{self.player}"


EMPTY = Cell(CellKind.EMPTY)
NEUTRAL = Cell(CellKind.NEUTRAL)


def occupied(player: PlayerId) -> Cell:
    return Cell(CellKind.OCCUPIED, player)


def anchored(player: PlayerId) -> Cell:
    return Cell(CellKind.ANCHORED, player)


class Phase(Enum):
    FILLING = "filling"
    FLOWING = "flowing"
