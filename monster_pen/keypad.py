"""Analog keypad decoding.

The shield wires all five buttons to one ADC pin through a resistor
ladder. Readings sit near 0 (right), 144 (up), 329 (down), 504 (left) and
741 (select); the thresholds add ~50 of slack on each.
"""

from __future__ import annotations

from monster_pen.types import Button

ADC_MAX = 1023

# Upper bounds, checked in order.
_THRESHOLDS: tuple[tuple[int, Button], ...] = (
    (50, Button.RIGHT),
    (195, Button.UP),
    (380, Button.DOWN),
    (555, Button.LEFT),
    (790, Button.SELECT),
)


def decode_adc(value: int) -> Button:
    if not 0 <= value <= ADC_MAX:
        raise ValueError(f"ADC reading must be in 0..{ADC_MAX}, got {value}")
    for bound, button in _THRESHOLDS:
        if value < bound:
            return button
    return Button.NONE
