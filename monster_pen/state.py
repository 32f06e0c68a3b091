"""Pen, cursor, and the bundled simulation state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from monster_pen.config import PenConfig
from monster_pen.registry import MonsterRegistry
from monster_pen.types import Button, InputMode, InvalidState, SnapshotError


@dataclass
class Pen:
    """Treat slots, one per writable column, and the bank balance."""

    treats: list[bool]
    bank_balance: int = 0

    @classmethod
    def empty(cls, width: int, bank_balance: int = 0) -> Pen:
        return cls(treats=[False] * width, bank_balance=bank_balance)

    @property
    def width(self) -> int:
        return len(self.treats)


@dataclass
class Cursor:
    position: int = 0
    last_button: Button = Button.NONE


@dataclass
class SimulationState:
    registry: MonsterRegistry
    pen: Pen
    cursor: Cursor = field(default_factory=Cursor)
    mode: InputMode = InputMode.TREATS

    @classmethod
    def new(cls, config: PenConfig) -> SimulationState:
        return cls(
            registry=MonsterRegistry(config.writable_width),
            pen=Pen.empty(
                config.writable_width,
                bank_balance=config.starting_balance if config.economy else 0,
            ),
        )

    @property
    def width(self) -> int:
        return self.pen.width

    def check(self) -> None:
        """Raise ``InvalidState`` if pen, cursor or registry is inconsistent."""
        if not 0 <= self.cursor.position < self.width:
            raise InvalidState(
                f"Cursor position {self.cursor.position} outside [0, {self.width})"
            )
        if self.pen.bank_balance < 0:
            raise InvalidState(f"Bank balance {self.pen.bank_balance} is negative")
        self.registry.validate()

    # -- Snapshot / restore --

    def snapshot(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "treats": list(self.pen.treats),
            "bank_balance": self.pen.bank_balance,
            "cursor": self.cursor.position,
            "last_button": self.cursor.last_button.name,
            "mode": self.mode.name,
            "registry": self.registry.snapshot(),
        }

    def restore(self, data: dict[str, Any]) -> None:
        """Replace the whole state from *data*; on any error nothing changes."""
        width = data["width"]
        if width != self.width:
            raise SnapshotError(
                f"Pen width mismatch: snapshot has {width}, pen has {self.width}"
            )
        if len(data["treats"]) != width:
            raise SnapshotError(
                f"Treat row has {len(data['treats'])} slots, expected {width}"
            )
        registry = MonsterRegistry(width)
        registry.restore(data["registry"])
        candidate = SimulationState(
            registry=registry,
            pen=Pen(
                treats=[bool(t) for t in data["treats"]],
                bank_balance=data["bank_balance"],
            ),
            cursor=Cursor(
                position=data["cursor"],
                last_button=Button[data["last_button"]],
            ),
            mode=InputMode[data["mode"]],
        )
        candidate.check()

        self.registry = candidate.registry
        self.pen = candidate.pen
        self.cursor = candidate.cursor
        self.mode = candidate.mode
