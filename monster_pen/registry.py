"""MonsterRegistry - arrival-ordered arena of monsters with O(1) removal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generator

from monster_pen.config import WRITABLE_WIDTH
from monster_pen.monster import Monster
from monster_pen.types import InvalidState, MonsterHandle, Species, UnknownMonsterError


@dataclass(slots=True)
class _Node:
    monster: Monster
    prev: MonsterHandle | None = None
    next: MonsterHandle | None = None


class MonsterRegistry:
    """Doubly-linked list threaded through a handle-keyed arena.

    Handles are monster ids. A removed handle is simply gone from the
    arena, so nothing can follow a stale link into freed storage.
    """

    def __init__(self, width: int = WRITABLE_WIDTH) -> None:
        self._width = width
        self._nodes: dict[MonsterHandle, _Node] = {}
        self._head: MonsterHandle | None = None
        self._tail: MonsterHandle | None = None
        self._next_id: int = 0

    @property
    def head(self) -> MonsterHandle | None:
        return self._head

    @property
    def tail(self) -> MonsterHandle | None:
        return self._tail

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, handle: object) -> bool:
        return handle in self._nodes

    def spawn(
        self,
        species: Species,
        position: int,
        *,
        hunger: int = 0,
        speed: int | None = None,
        now: int = 0,
    ) -> MonsterHandle:
        monster = Monster(
            id=self._next_id,
            species=species,
            position=position,
            speed=species.base_speed if speed is None else speed,
            hunger=hunger,
            last_acted_at=now,
            last_hunger_tick_at=now,
        )
        return self.insert(monster)

    def insert(self, monster: Monster) -> MonsterHandle:
        if not 0 <= monster.position < self._width:
            raise InvalidState(
                f"Monster {monster.id} position {monster.position} "
                f"outside [0, {self._width})"
            )
        if monster.speed <= 0:
            raise InvalidState(f"Monster {monster.id} speed must be positive")
        if monster.hunger < 0:
            raise InvalidState(f"Monster {monster.id} hunger must be >= 0")
        if monster.id in self._nodes:
            raise InvalidState(f"Monster {monster.id} is already in the pen")

        handle = monster.id
        node = _Node(monster, prev=self._tail)
        if self._tail is None:
            self._head = handle
        else:
            self._nodes[self._tail].next = handle
        self._tail = handle
        self._nodes[handle] = node
        self._next_id = max(self._next_id, handle + 1)
        return handle

    def remove(self, handle: MonsterHandle) -> Monster:
        node = self._node(handle)
        if node.prev is None:
            self._head = node.next
        else:
            self._nodes[node.prev].next = node.next
        if node.next is None:
            self._tail = node.prev
        else:
            # For a head node this clears the successor's back-link.
            self._nodes[node.next].prev = node.prev
        del self._nodes[handle]
        node.prev = node.next = None
        return node.monster

    def get(self, handle: MonsterHandle) -> Monster:
        return self._node(handle).monster

    def links(self, handle: MonsterHandle) -> tuple[MonsterHandle | None, MonsterHandle | None]:
        node = self._node(handle)
        return node.prev, node.next

    def iterate(self) -> Generator[MonsterHandle, None, None]:
        """Yield handles in arrival order.

        The yielded node may be removed before the generator resumes; any
        other removal of a not-yet-visited node raises ``InvalidState``.
        """
        current = self._head
        while current is not None:
            node = self._nodes.get(current)
            if node is None:
                raise InvalidState(
                    f"Monster {current} was removed ahead of the iterator"
                )
            following = node.next
            yield current
            current = following

    def monsters(self) -> Generator[Monster, None, None]:
        for handle in self.iterate():
            yield self._nodes[handle].monster

    def validate(self) -> None:
        """Walk the list both ways and raise on any inconsistent link."""
        seen: list[MonsterHandle] = []
        prev: MonsterHandle | None = None
        current = self._head
        while current is not None:
            node = self._nodes.get(current)
            if node is None:
                raise InvalidState(f"Dangling link to monster {current}")
            if node.prev != prev:
                raise InvalidState(
                    f"Monster {current} back-link is {node.prev}, expected {prev}"
                )
            if len(seen) > len(self._nodes):
                raise InvalidState("Cycle in monster list")
            pos = node.monster.position
            if not 0 <= pos < self._width:
                raise InvalidState(f"Monster {current} position {pos} out of range")
            seen.append(current)
            prev, current = current, node.next
        if prev != self._tail:
            raise InvalidState(f"Tail is {self._tail}, list ends at {prev}")
        if len(seen) != len(self._nodes):
            raise InvalidState(
                f"{len(self._nodes) - len(seen)} monster(s) unreachable from head"
            )

    def _node(self, handle: MonsterHandle) -> _Node:
        node = self._nodes.get(handle)
        if node is None:
            raise UnknownMonsterError(handle, f"Monster {handle} is not in the pen")
        return node

    # -- Snapshot / restore --

    def snapshot(self) -> dict[str, Any]:
        return {
            "next_id": self._next_id,
            "monsters": [m.to_dict() for m in self.monsters()],
        }

    def restore(self, data: dict[str, Any]) -> None:
        self._nodes.clear()
        self._head = self._tail = None
        self._next_id = 0
        for fields in data["monsters"]:
            self.insert(Monster.from_dict(fields))
        self._next_id = max(self._next_id, data["next_id"])
