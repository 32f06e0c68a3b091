"""Project simulation state onto the 16x2 character buffer."""

from __future__ import annotations

from monster_pen.config import LCD_WIDTH, PenConfig
from monster_pen.state import SimulationState
from monster_pen.types import InputMode

CORPSE_GLYPH = "x"
TREAT_GLYPH = "*"
CURSOR_GLYPH = "_"
# Custom character slot 1 on the LCD; drawn as a caret here.
CARROT_GLYPH = "^"
BANK_GLYPH = "$"


def cursor_visible(now: int, config: PenConfig) -> bool:
    return now // config.blink_period_ms % 2 == 1


def top_row(state: SimulationState, pen_index: int = 1) -> str:
    cells = [" "] * state.width
    for monster in state.registry.monsters():
        if cells[monster.position] != " ":
            continue
        cells[monster.position] = (
            monster.species.glyph if monster.alive else CORPSE_GLYPH
        )
    return _fit(str(pen_index)[-1] + "".join(cells))


def bottom_row(state: SimulationState, now: int, config: PenConfig) -> str:
    if state.mode is InputMode.BANK:
        return _fit(f"{CARROT_GLYPH}{BANK_GLYPH}{state.pen.bank_balance}")
    cells = [TREAT_GLYPH if t else " " for t in state.pen.treats]
    if cursor_visible(now, config):
        cells[state.cursor.position] = CURSOR_GLYPH
    return _fit(CARROT_GLYPH + "".join(cells))


def project(
    state: SimulationState,
    now: int,
    config: PenConfig,
    pen_index: int = 1,
) -> tuple[str, str]:
    return top_row(state, pen_index), bottom_row(state, now, config)


def _fit(line: str) -> str:
    return line[:LCD_WIDTH].ljust(LCD_WIDTH)
