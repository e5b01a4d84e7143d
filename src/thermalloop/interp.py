from __future__ import annotations

import logging

import numpy as np

from thermalloop.table import CalibrationTable

logger = logging.getLogger(__name__)


def _domain(table: CalibrationTable) -> tuple[float, float]:
    t0 = float(table.metadata.min_temp)
    t1 = float(table.metadata.max_temp)
    if t1 < t0:
        t0, t1 = t1, t0
    return t0, t1


def interpolate(table: CalibrationTable, measured_temp: float | np.ndarray) -> float | np.ndarray:
    """
    Thermal scale at `measured_temp`.

    Bin i carries its scale at the center of the i-th of `len(table.bins)`
    equal-width sub-intervals of [min_temp, max_temp]. Between two adjacent
    centers the scale is interpolated linearly, so it is continuous across
    bin edges. Below the first center (and beyond min_temp) the first bin's
    scale is returned, above the last center the last bin's scale: no
    extrapolation.

    A zero-width domain (min_temp == max_temp) returns the mean of the bin
    scales, i.e. the single bin's scale for a one-bin table.

    A reversed domain (max_temp < min_temp) is interpolated over the swapped
    span; check_table() reports such records.

    Accepts a scalar (returns float) or an array of temperatures (returns a
    float64 array of the same shape).
    """
    n = len(table.bins)
    if n == 0:
        raise ValueError("table has no bins")

    scales = table.scales
    t0, t1 = _domain(table)
    t = np.asarray(measured_temp, dtype=np.float64)

    if t1 == t0:
        out = np.full(t.shape, float(np.mean(scales)), dtype=np.float64)
    else:
        width = (t1 - t0) / n
        centers = t0 + (np.arange(n, dtype=np.float64) + 0.5) * width
        # np.interp holds the end values outside [centers[0], centers[-1]].
        out = np.interp(t, centers, scales)
        if logger.isEnabledFor(logging.DEBUG):
            outside = np.count_nonzero((t < t0) | (t > t1))
            if outside:
                logger.debug("%d temperature(s) outside [%g, %g] clamped to boundary bins", outside, t0, t1)

    if out.ndim == 0:
        return float(out)
    return out
