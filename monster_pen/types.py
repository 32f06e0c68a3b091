"""Shared enums, errors, and protocols for the monster pen."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

MonsterHandle = int


class Button(Enum):
    RIGHT = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    SELECT = 4
    NONE = 5


class Species(Enum):
    """Closed set of creatures. Value is ``(glyph, base_speed)``."""

    FUZZBALL = ("a", 1)
    DRAGON = ("D", 3)
    SLIME = ("s", 2)

    @property
    def glyph(self) -> str:
        return self.value[0]

    @property
    def base_speed(self) -> int:
        return self.value[1]


class InputMode(Enum):
    """What the bottom row shows and what UP/DOWN cycle through."""

    TREATS = 0
    BANK = 1


@dataclass(frozen=True, slots=True)
class PollContext:
    poll_number: int
    now: int
    button: Button
    request_stop: Callable[[], None]
    random: _random.Random


class InvalidState(Exception):
    """Raised when a simulation invariant is violated."""


class UnknownMonsterError(KeyError):
    """Raised when a handle does not name a monster in the registry."""

    def __init__(self, handle: int, message: str) -> None:
        self.handle = handle
        super().__init__(message)


class SnapshotError(Exception):
    """Raised on restore failures (version or pen width mismatch)."""


if TYPE_CHECKING:
    from monster_pen.state import SimulationState

System = Callable[["SimulationState", PollContext], None]
