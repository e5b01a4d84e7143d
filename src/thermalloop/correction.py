from __future__ import annotations

from typing import Callable

import numpy as np

from thermalloop.interp import interpolate
from thermalloop.table import CalibrationTable

CorrectionRule = Callable[[float, float, float], tuple[float, float]]


def multiply(x: float, y: float, scale: float) -> tuple[float, float]:
    return x * scale, y * scale


def divide(x: float, y: float, scale: float) -> tuple[float, float]:
    """
    For tables whose bins store the inverse of the correction factor.

    A zero scale never raises: IEEE-754 division gives +/-inf for a non-zero
    component and nan for a zero component.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        xc, yc = np.divide(np.array([x, y], dtype=np.float64), np.float64(scale))
    return float(xc), float(yc)


_RULES: dict[str, CorrectionRule] = {
    "multiply": multiply,
    "divide": divide,
}


def get_rule(name: str) -> CorrectionRule:
    try:
        return _RULES[name]
    except KeyError:
        raise ValueError(f"unknown correction rule {name!r} (expected one of {sorted(_RULES)})") from None


def rule_names() -> list[str]:
    return sorted(_RULES)


def correct(
    original: tuple[float, float],
    scale: float,
    *,
    rule: CorrectionRule = multiply,
) -> tuple[float, float]:
    """
    Apply a thermal scale to a calibration pair (e.g. fx, fy).

    `rule` is a pure function (x, y, scale) -> (x', y'); the default multiplies
    both components by `scale`.
    """
    x, y = original
    xc, yc = rule(float(x), float(y), float(scale))
    return float(xc), float(yc)


def correct_for_temperature(
    table: CalibrationTable,
    original: tuple[float, float],
    measured_temp: float,
    *,
    rule: CorrectionRule = multiply,
) -> tuple[float, float]:
    return correct(original, interpolate(table, measured_temp), rule=rule)
