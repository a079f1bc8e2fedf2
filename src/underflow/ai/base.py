from __future__ import annotations
from typing import Protocol

from underflow.game.actions import Command
from underflow.game.server import GameServer
from underflow.types import PlayerId


class Agent(Protocol):
    name: str

    def choose_command(self, server: GameServer, player: PlayerId) -> Command:
        ...
