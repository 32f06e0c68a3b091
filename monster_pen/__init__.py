"""monster-pen - a pen of hungry monsters on a 16x2 character LCD."""

from monster_pen.clock import Clock, ManualClock, MonotonicClock
from monster_pen.config import PenConfig, load_config
from monster_pen.engine import Engine
from monster_pen.input import InputStateMachine
from monster_pen.keypad import decode_adc
from monster_pen.monster import Monster
from monster_pen.registry import MonsterRegistry
from monster_pen.render import project
from monster_pen.state import Cursor, Pen, SimulationState
from monster_pen.types import (
    Button,
    InputMode,
    InvalidState,
    MonsterHandle,
    PollContext,
    SnapshotError,
    Species,
    UnknownMonsterError,
)

__all__ = [
    "Engine",
    "PenConfig",
    "load_config",
    "Clock",
    "ManualClock",
    "MonotonicClock",
    "Monster",
    "MonsterRegistry",
    "MonsterHandle",
    "Pen",
    "Cursor",
    "SimulationState",
    "InputStateMachine",
    "PollContext",
    "Button",
    "InputMode",
    "Species",
    "decode_adc",
    "project",
    "InvalidState",
    "UnknownMonsterError",
    "SnapshotError",
]
