"""Time-driven monster update: hunger, feeding, wandering, death, decay."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from monster_pen.config import PenConfig
from monster_pen.monster import Monster
from monster_pen.types import InvalidState

if TYPE_CHECKING:
    from monster_pen.state import Pen, SimulationState
    from monster_pen.types import PollContext

logger = logging.getLogger(__name__)


def _period(base_ms: int, speed: int) -> int:
    # Never 0, or the due time would stop advancing.
    return max(1, base_ms // speed)


def hunger_due(monster: Monster, config: PenConfig) -> int:
    return monster.last_hunger_tick_at + _period(config.hunger_period_ms, monster.speed)


def action_due(monster: Monster, config: PenConfig) -> int:
    return monster.last_acted_at + _period(config.action_period_ms, monster.speed)


def decay_deadline(monster: Monster, config: PenConfig) -> int:
    if monster.died_at is None:
        raise InvalidState(f"Monster {monster.id} has no time of death")
    return monster.died_at + config.decay_duration_ms


def _kill(monster: Monster, now: int) -> None:
    monster.alive = False
    monster.died_at = now
    logger.info(
        "%s %d starved at %d ms (hunger %d)",
        monster.species.name.lower(), monster.id, now, monster.hunger,
    )


def _tick_hunger(monster: Monster, now: int, config: PenConfig) -> None:
    # One tick per poll at most; a late poll does not batch missed ticks.
    due = hunger_due(monster, config)
    if now >= due:
        monster.hunger += 1
        monster.last_hunger_tick_at = due
    if monster.hunger >= config.death_hunger:
        _kill(monster, now)


def _act(monster: Monster, pen: Pen, ctx: PollContext, config: PenConfig) -> None:
    due = action_due(monster, config)
    if ctx.now < due:
        return
    if monster.hunger > 0 and pen.treats[monster.position]:
        pen.treats[monster.position] = False
        monster.hunger -= 1
        logger.debug(
            "monster %d ate the treat at column %d (hunger %d)",
            monster.id, monster.position, monster.hunger,
        )
    else:
        step = ctx.random.choice((-1, 1))
        monster.position = (monster.position + step) % pen.width
        logger.debug("monster %d moved to column %d", monster.id, monster.position)
    monster.last_acted_at = due


def _check(monster: Monster, width: int) -> None:
    if not 0 <= monster.position < width:
        raise InvalidState(
            f"Monster {monster.id} position {monster.position} outside [0, {width})"
        )
    if monster.hunger < 0:
        raise InvalidState(f"Monster {monster.id} hunger underflow ({monster.hunger})")


def step_monsters(state: SimulationState, ctx: PollContext, config: PenConfig) -> None:
    """Advance every monster once, in arrival order, and drop decayed corpses."""
    registry = state.registry
    for handle in registry.iterate():
        monster = registry.get(handle)
        if monster.alive:
            _tick_hunger(monster, ctx.now, config)
        if monster.alive:
            _act(monster, state.pen, ctx, config)
            _check(monster, state.width)
        elif ctx.now > decay_deadline(monster, config):
            registry.remove(handle)
            logger.info("removed the remains of monster %d at %d ms", handle, ctx.now)


def make_simulation_system(
    config: PenConfig,
) -> Callable[[SimulationState, PollContext], None]:
    """Return a system that runs ``step_monsters`` with *config*."""

    def simulation_system(state: SimulationState, ctx: PollContext) -> None:
        step_monsters(state, ctx, config)

    return simulation_system
