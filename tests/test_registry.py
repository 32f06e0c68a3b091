"""Tests for the monster registry: insertion, removal, iteration, links."""

import pytest

from monster_pen.monster import Monster
from monster_pen.registry import MonsterRegistry
from monster_pen.types import InvalidState, Species, UnknownMonsterError


def _pen_of_three() -> tuple[MonsterRegistry, int, int, int]:
    registry = MonsterRegistry()
    a = registry.spawn(Species.FUZZBALL, 2)
    b = registry.spawn(Species.DRAGON, 6)
    c = registry.spawn(Species.SLIME, 10)
    return registry, a, b, c


# --- Insertion ---

def test_empty_registry():
    registry = MonsterRegistry()
    assert len(registry) == 0
    assert registry.head is None
    assert registry.tail is None
    assert list(registry.iterate()) == []
    registry.validate()


def test_spawn_assigns_sequential_ids():
    registry, a, b, c = _pen_of_three()
    assert (a, b, c) == (0, 1, 2)
    assert registry.get(b).id == b


def test_spawn_uses_species_base_speed():
    registry = MonsterRegistry()
    h = registry.spawn(Species.DRAGON, 0)
    assert registry.get(h).speed == Species.DRAGON.base_speed


def test_spawn_explicit_speed_and_time():
    registry = MonsterRegistry()
    h = registry.spawn(Species.FUZZBALL, 3, hunger=5, speed=4, now=1200)
    m = registry.get(h)
    assert m.speed == 4
    assert m.hunger == 5
    assert m.last_acted_at == 1200
    assert m.last_hunger_tick_at == 1200
    assert m.alive is True
    assert m.died_at is None


def test_insert_appends_to_tail_with_links():
    registry, a, b, c = _pen_of_three()
    assert registry.head == a
    assert registry.tail == c
    assert registry.links(a) == (None, b)
    assert registry.links(b) == (a, c)
    assert registry.links(c) == (b, None)
    registry.validate()


def test_insert_out_of_range_position_fails():
    registry = MonsterRegistry()
    with pytest.raises(InvalidState):
        registry.insert(Monster(id=0, species=Species.FUZZBALL, position=15, speed=1))
    with pytest.raises(InvalidState):
        registry.insert(Monster(id=1, species=Species.FUZZBALL, position=-1, speed=1))
    assert len(registry) == 0


def test_insert_respects_narrow_width():
    registry = MonsterRegistry(width=4)
    registry.spawn(Species.FUZZBALL, 3)
    with pytest.raises(InvalidState):
        registry.spawn(Species.FUZZBALL, 4)


def test_insert_duplicate_id_fails():
    registry = MonsterRegistry()
    registry.insert(Monster(id=7, species=Species.SLIME, position=1, speed=1))
    with pytest.raises(InvalidState):
        registry.insert(Monster(id=7, species=Species.SLIME, position=2, speed=1))


def test_insert_bad_speed_fails():
    registry = MonsterRegistry()
    with pytest.raises(InvalidState):
        registry.insert(Monster(id=0, species=Species.SLIME, position=1, speed=0))


def test_spawn_after_explicit_insert_skips_used_ids():
    registry = MonsterRegistry()
    registry.insert(Monster(id=5, species=Species.SLIME, position=1, speed=1))
    h = registry.spawn(Species.FUZZBALL, 2)
    assert h == 6


# --- Removal ---

def test_remove_middle_keeps_neighbours_linked():
    registry, a, b, c = _pen_of_three()
    removed = registry.remove(b)
    assert removed.position == 6
    assert list(registry.iterate()) == [a, c]
    assert [m.position for m in registry.monsters()] == [2, 10]
    assert registry.links(a) == (None, c)
    assert registry.links(c) == (a, None)
    registry.validate()


def test_remove_head_clears_successor_back_link():
    # The successor of a removed head must not keep pointing at it.
    registry, a, b, c = _pen_of_three()
    registry.remove(a)
    assert registry.head == b
    assert registry.links(b) == (None, c)
    assert a not in registry
    registry.validate()


def test_remove_tail_updates_tail():
    registry, a, b, c = _pen_of_three()
    registry.remove(c)
    assert registry.tail == b
    assert registry.links(b) == (a, None)
    registry.validate()


def test_remove_sole_monster_empties_registry():
    registry = MonsterRegistry()
    h = registry.spawn(Species.FUZZBALL, 0)
    registry.remove(h)
    assert len(registry) == 0
    assert registry.head is None
    assert registry.tail is None
    assert list(registry.iterate()) == []


def test_remove_unknown_handle_raises():
    registry, a, _, _ = _pen_of_three()
    with pytest.raises(UnknownMonsterError) as exc_info:
        registry.remove(99)
    assert exc_info.value.handle == 99
    assert isinstance(exc_info.value, KeyError)


def test_removed_handle_is_invalidated():
    registry, a, b, _ = _pen_of_three()
    registry.remove(b)
    with pytest.raises(UnknownMonsterError):
        registry.get(b)
    with pytest.raises(UnknownMonsterError):
        registry.links(b)
    with pytest.raises(UnknownMonsterError):
        registry.remove(b)


def test_insert_after_removing_everything():
    registry, a, b, c = _pen_of_three()
    for h in (b, a, c):
        registry.remove(h)
    d = registry.spawn(Species.DRAGON, 4)
    assert d == 3
    assert registry.head == d
    assert registry.tail == d
    assert registry.links(d) == (None, None)


# --- Iteration ---

def test_iterate_is_lazy_and_in_arrival_order():
    registry, a, b, c = _pen_of_three()
    it = registry.iterate()
    assert next(it) == a
    assert next(it) == b
    assert next(it) == c
    with pytest.raises(StopIteration):
        next(it)


def test_removing_current_node_during_iteration():
    registry, a, b, c = _pen_of_three()
    visited = []
    for h in registry.iterate():
        visited.append(h)
        registry.remove(h)
    assert visited == [a, b, c]
    assert len(registry) == 0


def test_removing_some_nodes_during_iteration():
    registry, a, b, c = _pen_of_three()
    visited = []
    for h in registry.iterate():
        visited.append(h)
        if h != b:
            registry.remove(h)
    assert visited == [a, b, c]
    assert list(registry.iterate()) == [b]
    assert registry.links(b) == (None, None)
    registry.validate()


def test_removing_node_ahead_of_iterator_fails_fast():
    registry, a, b, c = _pen_of_three()
    it = registry.iterate()
    assert next(it) == a
    registry.remove(b)
    with pytest.raises(InvalidState):
        next(it)


# --- Validation ---

def test_validate_detects_corrupted_back_link():
    registry, a, b, c = _pen_of_three()
    registry._nodes[c].prev = a
    with pytest.raises(InvalidState):
        registry.validate()


def test_validate_detects_dangling_link():
    registry, a, b, c = _pen_of_three()
    registry._nodes[b].next = 42
    with pytest.raises(InvalidState):
        registry.validate()


def test_validate_detects_out_of_range_position():
    registry, a, _, _ = _pen_of_three()
    registry.get(a).position = 20
    with pytest.raises(InvalidState):
        registry.validate()


# --- Snapshot ---

def test_snapshot_restore_preserves_order_and_ids():
    registry, a, b, c = _pen_of_three()
    registry.remove(b)
    registry.get(c).alive = False
    registry.get(c).died_at = 300

    snap = registry.snapshot()
    other = MonsterRegistry()
    other.restore(snap)

    assert list(other.iterate()) == [a, c]
    assert other.get(c).alive is False
    assert other.get(c).died_at == 300
    assert other.get(c).species is Species.SLIME
    assert other.spawn(Species.FUZZBALL, 0) == 3
    other.validate()
