# src/underflow/config.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict

BOARD_SIZE = 7
PLAYER_COUNT = 2
SUPPORTED_PLAYER_COUNTS = (2, 3, 4)
MIN_BOARD_SIZE = 2

# Heuristic
BALANCE_WEIGHT = 15.0

# Deep search depth per player count (more players => wider tree => shallower)
SEARCH_DEPTH: Dict[int, int] = {2: 2, 3: 2, 4: 1}
SEARCH_WORKERS = 4  # root fork-join pool size; 1 disables the pool

# Headless games stop as a draw after this many commands
MAX_GAME_MOVES = 400

# League defaults
LEAGUE_BOARD_SIZE = 5
LEAGUE_GAMES_PER_PAIR = 2


@dataclass(frozen=True, slots=True)
class ServerConfig:
    player_count: int = PLAYER_COUNT
    size: int = BOARD_SIZE

    def __post_init__(self) -> None:
        if self.player_count not in SUPPORTED_PLAYER_COUNTS:
            raise ValueError(
                f"Unsupported player count {self.player_count}; "
                f"expected one of {SUPPORTED_PLAYER_COUNTS}."
            )
        if self.size < MIN_BOARD_SIZE:
            raise ValueError(f"Board size must be at least {MIN_BOARD_SIZE}.")
        # a 2x2 board for three players is nothing but neutral corners
        if self.player_count == 3 and self.size < 3:
            raise ValueError("Three players need a board of size 3 or more.")


def search_depth_for(player_count: int) -> int:
    return SEARCH_DEPTH.get(player_count, min(SEARCH_DEPTH.values()))
