# src/underflow/game/server.py

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from underflow.config import ServerConfig
from underflow.core.board import Board
from underflow.core.history import History
from underflow.game.actions import Command, FlowX, FlowY, SetAnchor, SetOccupied
from underflow.game.errors import (
    AlreadyOccupied,
    BlockedByAnchor,
    GameError,
    IndexOutOfRange,
    InvalidPhase,
    NotYourTurn,
    PlayerEliminated,
    Recurrence,
)
from underflow.types import Cell, Phase, PlayerId, NEUTRAL, anchored, occupied

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GameServer:
    """
    Owns the board, the flowing-phase history and the turn pointer.

    handle() is the only mutating entry point. A rejected command raises a
    GameError and leaves every field untouched.
    """
    board: Board
    player_count: int
    current_player: PlayerId = 0
    phase: Phase = Phase.FILLING
    history: History = field(default_factory=History)

    @classmethod
    def new(cls, config: ServerConfig) -> "GameServer":
        return cls(
            board=Board.init(config.player_count, config.size),
            player_count=config.player_count,
        )

    def copy(self) -> "GameServer":
        return GameServer(
            board=self.board.copy(),
            player_count=self.player_count,
            current_player=self.current_player,
            phase=self.phase,
            history=self.history.copy(),
        )

    # -----------------------------
    # Queries
    # -----------------------------
    @property
    def size(self) -> int:
        return self.board.size

    def cell(self, x: int, y: int) -> Cell:
        if not self.board.in_bounds(x, y):
            raise IndexOutOfRange()
        return self.board.get(x, y)

    def can_flow_x(self, y: int) -> bool:
        return 0 <= y < self.size and self.board.can_flow_x(y)

    def can_flow_y(self, x: int) -> bool:
        return 0 <= x < self.size and self.board.can_flow_y(x)

    def is_alive(self, player: PlayerId) -> bool:
        if self.phase is Phase.FILLING:
            return 0 <= player < self.player_count
        return self.board.occupied_count(player) > 0

    def alive_players(self) -> List[PlayerId]:
        return [p for p in range(self.player_count) if self.is_alive(p)]

    def game_over(self) -> bool:
        if self.phase is Phase.FILLING:
            return False
        return len(self.board.occupants()) == 1

    def winning(self) -> Optional[PlayerId]:
        if self.phase is Phase.FILLING:
            return None
        owners = self.board.occupants()
        if len(owners) != 1:
            return None
        return next(iter(owners))

    def would_recur(self, command: Command) -> bool:
        """True iff applying command (turn ignored) would repeat a past board."""
        try:
            board = self._simulate(command)
        except GameError:
            return False
        return self.history.is_recurrence(board)

    # -----------------------------
    # Command handling
    # -----------------------------
    def handle(self, command: Command) -> None:
        self._check_player(command.player)
        if isinstance(command, SetOccupied):
            self._expect_phase(Phase.FILLING)
        else:
            self._expect_phase(Phase.FLOWING)

        board = self._simulate(command)
        if self.history.is_recurrence(board):
            raise Recurrence()

        # commit
        before = self.board.occupants()
        self.board = board

        if isinstance(command, SetOccupied):
            self._previous_player()
            if board.is_ready():
                self.phase = Phase.FLOWING
                self.history.push(board)
                logger.debug("Board filled, flowing phase starts with player %d", self.current_player)
            return

        if isinstance(command, (FlowX, FlowY)):
            self.history.push(board)
        for dead in sorted(before - board.occupants()):
            logger.debug("Player %d eliminated", dead)
        self._next_player()

    def _check_player(self, player: PlayerId) -> None:
        if not 0 <= player < self.player_count:
            raise NotYourTurn()
        if not self.is_alive(player):
            raise PlayerEliminated()
        if player != self.current_player:
            raise NotYourTurn()

    def _expect_phase(self, phase: Phase) -> None:
        if self.phase is not phase:
            raise InvalidPhase()

    def _check_index(self, i: int) -> None:
        if not 0 <= i < self.size:
            raise IndexOutOfRange()

    def _simulate(self, command: Command) -> Board:
        """Board that command would produce, dead anchors already cleared."""
        board = self.board.copy()

        if isinstance(command, SetOccupied):
            self._check_index(command.x)
            self._check_index(command.y)
            if not board.get(command.x, command.y).is_empty:
                raise AlreadyOccupied()
            board.set(command.x, command.y, occupied(command.player))

        elif isinstance(command, SetAnchor):
            self._check_index(command.x)
            self._check_index(command.y)
            target = board.get(command.x, command.y)
            if target.is_occupied or target.is_anchor:
                raise AlreadyOccupied()
            old = board.anchor_of(command.player)
            if old is not None:
                board.set(old[0], old[1], NEUTRAL)
            board.set(command.x, command.y, anchored(command.player))

        elif isinstance(command, FlowX):
            self._check_index(command.y)
            if not board.flow_x(command.y, command.positive):
                raise BlockedByAnchor()

        elif isinstance(command, FlowY):
            self._check_index(command.x)
            if not board.flow_y(command.x, command.positive):
                raise BlockedByAnchor()

        else:
            raise TypeError(f"Unknown command: {command!r}")

        _clear_dead_anchors(board)
        return board

    def _next_player(self) -> None:
        # skips eliminated players; stays put if nobody else is alive
        for _ in range(self.player_count):
            self.current_player = (self.current_player + 1) % self.player_count
            if self.is_alive(self.current_player):
                return

    def _previous_player(self) -> None:
        self.current_player = (self.current_player + self.player_count - 1) % self.player_count


def _clear_dead_anchors(board: Board) -> None:
    if not board.is_ready():
        return
    alive = board.occupants()
    for x, y in board.anchors():
        if board.get(x, y).player not in alive:
            board.set(x, y, NEUTRAL)
