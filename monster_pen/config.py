"""Tunables for the pen: display geometry, tick periods, economy."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

LCD_WIDTH = 16
LCD_HEIGHT = 2
# Column 0 of each row holds a fixed glyph.
WRITABLE_WIDTH = LCD_WIDTH - 1

HUNGER_PERIOD_MS = 10_000
ACTION_PERIOD_MS = 1_000
DEATH_HUNGER = 20
DECAY_DURATION_MS = 5_000
STARTING_BALANCE = 100
BLINK_PERIOD_MS = 500


@dataclass(frozen=True, slots=True)
class PenConfig:
    writable_width: int = WRITABLE_WIDTH
    hunger_period_ms: int = HUNGER_PERIOD_MS
    action_period_ms: int = ACTION_PERIOD_MS
    death_hunger: int = DEATH_HUNGER
    decay_duration_ms: int = DECAY_DURATION_MS
    starting_balance: int = STARTING_BALANCE
    blink_period_ms: int = BLINK_PERIOD_MS
    economy: bool = True

    def __post_init__(self) -> None:
        if not 0 < self.writable_width <= WRITABLE_WIDTH:
            raise ValueError(
                f"writable_width must be in 1..{WRITABLE_WIDTH}, got {self.writable_width}"
            )
        for name in (
            "hunger_period_ms",
            "action_period_ms",
            "death_hunger",
            "blink_period_ms",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.decay_duration_ms < 0:
            raise ValueError("decay_duration_ms must be >= 0")
        if self.starting_balance < 0:
            raise ValueError("starting_balance must be >= 0")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PenConfig:
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)


def load_config(path: str | Path) -> PenConfig:
    """Read a JSON object of ``PenConfig`` fields from *path*."""
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    return PenConfig.from_dict(data)
