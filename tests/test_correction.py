from __future__ import annotations

import numpy as np
import pytest

from thermalloop.correction import correct, correct_for_temperature, divide, get_rule, multiply
from thermalloop.table import RESOLUTION, CalibrationTable


def test_identity_scale():
    assert correct((10.0, 5.0), 1.0) == (10.0, 5.0)


def test_multiplicative_default():
    assert correct((600.0, 400.0), 1.001) == pytest.approx((600.6, 400.4))


def test_injected_rule():
    def shift(x: float, y: float, scale: float) -> tuple[float, float]:
        return x + scale, y - scale

    assert correct((1.0, 1.0), 0.25, rule=shift) == (1.25, 0.75)
    assert correct((4.0, 2.0), 2.0, rule=divide) == (2.0, 1.0)


def test_get_rule():
    assert get_rule("multiply") is multiply
    assert get_rule("divide") is divide
    with pytest.raises(ValueError):
        get_rule("affine")


def test_correct_for_temperature_chains_interpolation():
    table = CalibrationTable.from_arrays(min_temp=0.0, max_temp=29.0, scales=np.full(RESOLUTION, 2.0))
    assert correct_for_temperature(table, (3.0, 4.0), 25.0) == (6.0, 8.0)


def test_divide_by_zero_scale_is_defined():
    x, y = correct((2.0, -3.0), 0.0, rule=divide)
    assert x == np.inf
    assert y == -np.inf
    x0, _ = correct((0.0, 1.0), 0.0, rule=divide)
    assert np.isnan(x0)


def test_correct_for_temperature_divide_on_zero_table():
    table = CalibrationTable.from_arrays(min_temp=0.0, max_temp=29.0, scales=np.zeros(RESOLUTION))
    x, y = correct_for_temperature(table, (1.0, 1.0), 5.0, rule=divide)
    assert x == np.inf and y == np.inf
