# src/underflow/core/board.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from underflow.types import Cell, Coord, PlayerId, EMPTY, NEUTRAL

Snapshot = Tuple[Tuple[Cell, ...], ...]


@dataclass(frozen=True, slots=True)
class BoardStat:
    player_stat: Dict[PlayerId, int]   # player id -> occupied cell count
    total_occupied: int
    total_unoccupied: int              # only grows once the board is ready


@dataclass(slots=True)
class Board:
    """
    Square grid of cells, stored row-major (cells[y][x]).

    Axis: +x right, +y down, origin top-left, 0-based.
    get/set are unchecked; callers bounds-check user input first.
    """
    size: int
    player_count: int
    cells: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[EMPTY for _ in range(self.size)] for _ in range(self.size)]

    @classmethod
    def init(cls, player_count: int, size: int) -> "Board":
        """
        New board with neutral holes seeded so that the empty cell count
        splits evenly between the players.
        """
        board = cls(size, player_count)
        if player_count in (2, 4):
            if size % 2 == 1:
                center = size // 2
                board.set(center, center, NEUTRAL)
        elif player_count == 3:
            if size % 3 != 0:
                last = size - 1
                for x, y in ((0, 0), (0, last), (last, 0), (last, last)):
                    board.set(x, y, NEUTRAL)
        else:
            raise ValueError(f"Unsupported player count: {player_count}")
        return board

    def copy(self) -> "Board":
        return Board(self.size, self.player_count, [row[:] for row in self.cells])

    def snapshot(self) -> Snapshot:
        return tuple(tuple(row) for row in self.cells)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def get(self, x: int, y: int) -> Cell:
        return self.cells[y][x]

    def set(self, x: int, y: int, cell: Cell) -> None:
        self.cells[y][x] = cell

    def coords(self) -> Iterator[Coord]:
        for x in range(self.size):
            for y in range(self.size):
                yield x, y

    def can_flow_x(self, y: int) -> bool:
        return not any(cell.is_anchor for cell in self.cells[y])

    def can_flow_y(self, x: int) -> bool:
        return not any(row[x].is_anchor for row in self.cells)

    def flow_x(self, y: int, positive: bool) -> bool:
        """Slide row y one step along x. Returns False (no-op) if anchored."""
        if not self.can_flow_x(y):
            return False
        row = self.cells[y]
        if positive:
            self.cells[y] = [NEUTRAL] + row[:-1]
        else:
            self.cells[y] = row[1:] + [NEUTRAL]
        return True

    def flow_y(self, x: int, positive: bool) -> bool:
        """Slide column x one step along y. Returns False (no-op) if anchored."""
        if not self.can_flow_y(x):
            return False
        column = [row[x] for row in self.cells]
        if positive:
            column = [NEUTRAL] + column[:-1]
        else:
            column = column[1:] + [NEUTRAL]
        for y, cell in enumerate(column):
            self.cells[y][x] = cell
        return True

    def anchor_of(self, player: PlayerId) -> Optional[Coord]:
        for y, row in enumerate(self.cells):
            for x, cell in enumerate(row):
                if cell.is_anchor and cell.player == player:
                    return x, y
        return None

    def anchors(self) -> List[Coord]:
        return [(x, y) for (x, y) in self.coords() if self.get(x, y).is_anchor]

    def occupied_count(self, player: PlayerId) -> int:
        return sum(
            1 for row in self.cells for cell in row
            if cell.is_occupied and cell.player == player
        )

    def occupants(self) -> Set[PlayerId]:
        return {cell.player for row in self.cells for cell in row if cell.is_occupied}

    def is_ready(self) -> bool:
        return all(not cell.is_empty for row in self.cells for cell in row)

    def stat(self) -> Optional[BoardStat]:
        if not self.is_ready():
            return None
        player_stat: Dict[PlayerId, int] = {}
        total_occupied = 0
        for row in self.cells:
            for cell in row:
                if cell.is_occupied:
                    player_stat[cell.player] = player_stat.get(cell.player, 0) + 1
                    total_occupied += 1
        return BoardStat(
            player_stat=player_stat,
            total_occupied=total_occupied,
            total_unoccupied=self.size * self.size - total_occupied,
        )

    def __str__(self) -> str:
        lines = []
        for row in self.cells:
            lines.append("".join(str(cell).ljust(3) for cell in row).rstrip())
        return "\n".join(lines)
