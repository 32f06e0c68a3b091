"""Edge-triggered keypad interpreter for cursor, treats, and mode."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from monster_pen.config import PenConfig
from monster_pen.types import Button, InputMode, InvalidState

if TYPE_CHECKING:
    from monster_pen.state import SimulationState
    from monster_pen.types import PollContext

logger = logging.getLogger(__name__)

_MODES = list(InputMode)


class InputStateMachine:
    """Fires a gesture when the sampled button changes.

    The gesture is the *previous* button, so a press acts on release (or
    on switching to another button) and holding a button fires once.
    Only the pen, cursor and mode are touched, never the monsters.
    """

    def __init__(self, config: PenConfig) -> None:
        self._config = config

    def handle(self, state: SimulationState, button: Button) -> Button | None:
        """Feed one sample. Returns the gesture that fired, if any."""
        cursor = state.cursor
        gesture = None
        if button != cursor.last_button:
            gesture = cursor.last_button
            self._apply(state, gesture)
        cursor.last_button = button
        return gesture

    def _apply(self, state: SimulationState, gesture: Button) -> None:
        cursor = state.cursor
        width = state.width
        _check(state)
        if gesture is Button.LEFT:
            cursor.position = (cursor.position - 1) % width
        elif gesture is Button.RIGHT:
            cursor.position = (cursor.position + 1) % width
        elif gesture is Button.SELECT:
            self._toggle_treat(state)
        elif gesture in (Button.UP, Button.DOWN):
            if self._config.economy:
                step = 1 if gesture is Button.UP else -1
                index = (_MODES.index(state.mode) + step) % len(_MODES)
                state.mode = _MODES[index]
                logger.debug("input mode is now %s", state.mode.name)
        _check(state)

    def _toggle_treat(self, state: SimulationState) -> None:
        pen = state.pen
        pos = state.cursor.position
        if pen.treats[pos]:
            pen.treats[pos] = False
            if self._config.economy:
                pen.bank_balance += 1
            logger.debug("treat removed at column %d", pos)
            return
        if self._config.economy:
            if pen.bank_balance <= 0:
                logger.debug("treat at column %d refused: no funds", pos)
                return
            pen.bank_balance -= 1
        pen.treats[pos] = True
        logger.debug("treat placed at column %d", pos)


def _check(state: SimulationState) -> None:
    width = state.width
    if not 0 <= state.cursor.position < width:
        raise InvalidState(
            f"Cursor position {state.cursor.position} outside [0, {width})"
        )
    if state.pen.bank_balance < 0:
        raise InvalidState(f"Bank balance underflow ({state.pen.bank_balance})")


def make_input_system(
    config: PenConfig,
) -> Callable[[SimulationState, PollContext], None]:
    """Return a system that feeds ``ctx.button`` to an InputStateMachine."""
    machine = InputStateMachine(config)

    def input_system(state: SimulationState, ctx: PollContext) -> None:
        machine.handle(state, ctx.button)

    return input_system
