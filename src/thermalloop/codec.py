from __future__ import annotations

import logging

import numpy as np

from thermalloop.table import (
    BIN_FIELDS,
    METADATA_FIELDS,
    RESOLUTION,
    TABLE_SIZE,
    BinCoefficients,
    CalibrationTable,
    TableMetadata,
)

logger = logging.getLogger(__name__)

_DTYPES = {
    "little": np.dtype("<f4"),
    "big": np.dtype(">f4"),
}


class FormatError(ValueError):
    pass


def _dtype(byte_order: str) -> np.dtype:
    try:
        return _DTYPES[byte_order]
    except KeyError:
        raise ValueError(f"byte_order must be one of {sorted(_DTYPES)}, got {byte_order!r}") from None


def decode(data: bytes | bytearray | memoryview | np.ndarray, *, byte_order: str = "little") -> CalibrationTable:
    """
    Decode a raw thermal calibration record into a `CalibrationTable`.

    Layout (float32 words, no padding):

      min_temp, max_temp, reference_temp, valid,
      then per bin: scale, reserved[0], reserved[1], reserved[2]

    The record must hold exactly `RESOLUTION` bins (480 bytes). Any other
    length raises `FormatError`.
    """
    dtype = _dtype(byte_order)
    if isinstance(data, np.ndarray):
        raw = np.ascontiguousarray(data, dtype=np.uint8).tobytes()
    else:
        raw = bytes(data)

    n = len(raw)
    if n % dtype.itemsize != 0:
        raise FormatError(f"data size ({n}) is not a whole number of float32 values")
    if n != TABLE_SIZE:
        raise FormatError(f"data size ({n}) does not meet expected size {TABLE_SIZE}")

    words = np.frombuffer(raw, dtype=dtype).astype(np.float32)
    md = TableMetadata(*words[:METADATA_FIELDS])
    per_bin = words[METADATA_FIELDS:].reshape(RESOLUTION, BIN_FIELDS)
    bins = tuple(BinCoefficients(scale=row[0], reserved=(row[1], row[2], row[3])) for row in per_bin)

    logger.debug(
        "decoded thermal table: %d bins, domain [%g, %g]",
        len(bins),
        float(md.min_temp),
        float(md.max_temp),
    )
    return CalibrationTable(metadata=md, bins=bins)


def encode(table: CalibrationTable, *, byte_order: str = "little") -> bytes:
    """Inverse of `decode`: pack metadata then every bin, field by field."""
    dtype = _dtype(byte_order)
    words = list(table.metadata.as_tuple())
    for b in table.bins:
        words.extend(b.as_tuple())
    raw = np.asarray(words, dtype=np.float32).astype(dtype).tobytes()
    logger.debug("encoded thermal table: %d bins, %d bytes", len(table.bins), len(raw))
    return raw
