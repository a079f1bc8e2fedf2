from __future__ import annotations
import random
from dataclasses import dataclass, field

from underflow.game.actions import Command
from underflow.game.errors import NoValidMove
from underflow.game.moves import valid_commands
from underflow.game.server import GameServer
from underflow.types import PlayerId


@dataclass(slots=True)
class RandomAgent:
    name: str = "Random AI"
    rng: random.Random = field(default_factory=random.Random)
    last_info: dict = field(default_factory=dict)

    def choose_command(self, server: GameServer, player: PlayerId) -> Command:
        self.last_info = {}
        commands = valid_commands(server, player)
        if not commands:
            raise NoValidMove()
        choice = self.rng.choice(commands)
        self.last_info = {"depth": 0, "nodes": 0, "eval": None, "command": choice}
        return choice
