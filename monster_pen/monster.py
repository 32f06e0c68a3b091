"""Monster record."""

from __future__ import annotations

from dataclasses import dataclass

from monster_pen.types import Species


@dataclass
class Monster:
    id: int
    species: Species
    position: int
    speed: int
    hunger: int = 0
    alive: bool = True
    last_acted_at: int = 0
    last_hunger_tick_at: int = 0
    died_at: int | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "species": self.species.name,
            "position": self.position,
            "speed": self.speed,
            "hunger": self.hunger,
            "alive": self.alive,
            "last_acted_at": self.last_acted_at,
            "last_hunger_tick_at": self.last_hunger_tick_at,
            "died_at": self.died_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Monster:
        fields = dict(data)
        fields["species"] = Species[fields["species"]]
        return cls(**fields)
