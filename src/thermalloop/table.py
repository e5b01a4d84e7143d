from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Sequence

import numpy as np

TABLE_ID = 0x317
RESOLUTION = 29

# Field counts of the wire record (float32 words).
METADATA_FIELDS = 4
BIN_FIELDS = 4
METADATA_SIZE = METADATA_FIELDS * 4
BIN_SIZE = BIN_FIELDS * 4
TABLE_SIZE = METADATA_SIZE + BIN_SIZE * RESOLUTION


def _f32(value: float) -> np.float32:
    if isinstance(value, np.float32):
        return value
    return np.float32(value)


def _bits(values: Iterable[np.float32]) -> bytes:
    return np.asarray(list(values), dtype=np.float32).tobytes()


@dataclass(frozen=True, eq=False)
class TableMetadata:
    """
    Temperature domain of a thermal calibration table.

    `reference_temp` and `valid` are carried through the codec but not used
    by the interpolation.
    """

    min_temp: np.float32
    max_temp: np.float32
    reference_temp: np.float32 = np.float32(0.0)
    valid: np.float32 = np.float32(0.0)

    def __post_init__(self) -> None:
        for name in ("min_temp", "max_temp", "reference_temp", "valid"):
            object.__setattr__(self, name, _f32(getattr(self, name)))

    def as_tuple(self) -> tuple[np.float32, np.float32, np.float32, np.float32]:
        return (self.min_temp, self.max_temp, self.reference_temp, self.valid)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TableMetadata):
            return NotImplemented
        return _bits(self.as_tuple()) == _bits(other.as_tuple())

    def __hash__(self) -> int:
        return hash(_bits(self.as_tuple()))


@dataclass(frozen=True, eq=False)
class BinCoefficients:
    """One temperature bin: the scale at the bin center plus three opaque words."""

    scale: np.float32
    reserved: tuple[np.float32, np.float32, np.float32] = (np.float32(0.0),) * 3

    def __post_init__(self) -> None:
        object.__setattr__(self, "scale", _f32(self.scale))
        reserved = tuple(_f32(v) for v in self.reserved)
        if len(reserved) != 3:
            raise ValueError(f"reserved must hold 3 values, got {len(reserved)}")
        object.__setattr__(self, "reserved", reserved)

    def as_tuple(self) -> tuple[np.float32, ...]:
        return (self.scale, *self.reserved)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinCoefficients):
            return NotImplemented
        return _bits(self.as_tuple()) == _bits(other.as_tuple())

    def __hash__(self) -> int:
        return hash(_bits(self.as_tuple()))


@dataclass(frozen=True, eq=False)
class CalibrationTable:
    """
    Thermal calibration table (device table id 0x317).

    The domain [min_temp, max_temp] is split into `len(bins)` equal-width
    sub-intervals (29 on a well-formed record). Each bin's scale is defined
    at the center of its sub-interval.

    Equality is bit-exact on every float32 field: 0.0 != -0.0, and NaNs with
    the same payload are equal.
    """

    metadata: TableMetadata
    bins: tuple[BinCoefficients, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "bins", tuple(self.bins))

    @classmethod
    def from_arrays(
        cls,
        *,
        min_temp: float,
        max_temp: float,
        scales: Sequence[float] | np.ndarray,
        reserved: Sequence[Sequence[float]] | np.ndarray | None = None,
        reference_temp: float = 0.0,
        valid: float = 0.0,
    ) -> "CalibrationTable":
        scales = np.asarray(scales, dtype=np.float32).reshape(-1)
        if reserved is None:
            reserved = np.zeros((scales.shape[0], 3), dtype=np.float32)
        reserved = np.asarray(reserved, dtype=np.float32).reshape(-1, 3)
        if reserved.shape[0] != scales.shape[0]:
            raise ValueError("reserved must have one row of 3 values per scale")

        md = TableMetadata(min_temp=min_temp, max_temp=max_temp, reference_temp=reference_temp, valid=valid)
        bins = tuple(BinCoefficients(scale=s, reserved=tuple(r)) for s, r in zip(scales, reserved))
        return cls(metadata=md, bins=bins)

    @property
    def scales(self) -> np.ndarray:
        return np.asarray([b.scale for b in self.bins], dtype=np.float64)

    def bin_centers(self) -> np.ndarray:
        """Temperatures of the bin centers (float64, ascending for min_temp <= max_temp)."""
        n = len(self.bins)
        t0 = float(self.metadata.min_temp)
        t1 = float(self.metadata.max_temp)
        width = (t1 - t0) / n if n else 0.0
        return t0 + (np.arange(n, dtype=np.float64) + 0.5) * width

    def with_bin(self, index: int, *, scale: float | None = None, reserved: Sequence[float] | None = None) -> "CalibrationTable":
        """Return a copy with bin `index` replaced; the receiver is left unchanged."""
        old = self.bins[index]
        new = BinCoefficients(
            scale=old.scale if scale is None else scale,
            reserved=old.reserved if reserved is None else tuple(reserved),
        )
        bins = list(self.bins)
        bins[index] = new
        return replace(self, bins=tuple(bins))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CalibrationTable):
            return NotImplemented
        if len(self.bins) != len(other.bins):
            return False
        if self.metadata != other.metadata:
            return False
        return all(a == b for a, b in zip(self.bins, other.bins))

    def __hash__(self) -> int:
        return hash((self.metadata, self.bins))


def check_table(table: CalibrationTable, *, resolution: int = RESOLUTION) -> list[str]:
    """
    Data-quality report for a decoded table. Returns human-readable issues
    (empty list when the table looks physically meaningful). Never raises.
    """
    issues: list[str] = []
    md = table.metadata
    if len(table.bins) != resolution:
        issues.append(f"expected {resolution} bins, got {len(table.bins)}")
    if not (np.isfinite(md.min_temp) and np.isfinite(md.max_temp)):
        issues.append("min_temp/max_temp must be finite")
    elif md.min_temp > md.max_temp:
        issues.append(f"min_temp ({float(md.min_temp)}) > max_temp ({float(md.max_temp)})")
    elif md.min_temp == md.max_temp:
        issues.append("zero-width temperature domain")

    scales = table.scales
    bad = np.flatnonzero(~np.isfinite(scales))
    if bad.size:
        issues.append(f"non-finite scale in bins {bad.tolist()}")
    zero = np.flatnonzero(scales == 0.0)
    if zero.size:
        issues.append(f"zero scale in bins {zero.tolist()}")
    return issues
