"""Tests for ADC keypad decoding."""

import pytest

from monster_pen.keypad import decode_adc
from monster_pen.types import Button


def test_nominal_readings():
    assert decode_adc(0) is Button.RIGHT
    assert decode_adc(144) is Button.UP
    assert decode_adc(329) is Button.DOWN
    assert decode_adc(504) is Button.LEFT
    assert decode_adc(741) is Button.SELECT
    assert decode_adc(1023) is Button.NONE


def test_threshold_edges():
    edges = [
        (49, Button.RIGHT), (50, Button.UP),
        (194, Button.UP), (195, Button.DOWN),
        (379, Button.DOWN), (380, Button.LEFT),
        (554, Button.LEFT), (555, Button.SELECT),
        (789, Button.SELECT), (790, Button.NONE),
    ]
    for value, expected in edges:
        assert decode_adc(value) is expected, value


def test_out_of_range_reading():
    with pytest.raises(ValueError):
        decode_adc(-1)
    with pytest.raises(ValueError):
        decode_adc(1024)
