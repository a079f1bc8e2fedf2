from __future__ import annotations
from dataclasses import dataclass
from typing import Union

from underflow.types import PlayerId


@dataclass(frozen=True, slots=True)
class SetOccupied:
    player: PlayerId
    x: int
    y: int


@dataclass(frozen=True, slots=True)
class SetAnchor:
    player: PlayerId
    x: int
    y: int


@dataclass(frozen=True, slots=True)
class FlowX:
    player: PlayerId
    y: int
    positive: bool


@dataclass(frozen=True, slots=True)
class FlowY:
    player: PlayerId
    x: int
    positive: bool


Command = Union[SetOccupied, SetAnchor, FlowX, FlowY]


def describe(cmd: Command) -> str:
    if isinstance(cmd, SetOccupied):
        return f"P{cmd.player} fill ({cmd.x},{cmd.y})"
    if isinstance(cmd, SetAnchor):
        return f"P{cmd.player} anchor ({cmd.x},{cmd.y})"
    sign = "+" if cmd.positive else "-"
    if isinstance(cmd, FlowX):
        return f"P{cmd.player} flow row {cmd.y} {sign}x"
    return f"P{cmd.player} flow col {cmd.x} {sign}y"
