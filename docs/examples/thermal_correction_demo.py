"""
Thermal scale correction demo.

It does:
1) build a synthetic 29-bin thermal table (or read a raw 0x317 record),
2) check that decode(encode(table)) reproduces the bytes,
3) sweep the measured temperature and print the interpolated scale,
4) correct a (fx, fy) pair at one temperature.
"""

from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np

from thermalloop import RESOLUTION, CalibrationTable, correct, decode, encode, interpolate


def synthetic_table() -> CalibrationTable:
    # Slight linear drift of the focal scale across the calibrated range.
    scales = np.linspace(0.998, 1.002, RESOLUTION)
    return CalibrationTable.from_arrays(min_temp=15.0, max_temp=75.0, scales=scales, reference_temp=35.0, valid=1.0)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--record", type=Path, default=None, help="Raw 480-byte thermal table record.")
    parser.add_argument("--fx", type=float, default=1380.0)
    parser.add_argument("--fy", type=float, default=1378.5)
    parser.add_argument("--temp", type=float, default=52.0)
    args = parser.parse_args()

    table = decode(args.record.read_bytes()) if args.record else synthetic_table()
    raw = encode(table)
    assert decode(raw) == table

    for t in np.linspace(float(table.metadata.min_temp) - 10.0, float(table.metadata.max_temp) + 10.0, 9):
        print(f"T={t:7.2f}  scale={interpolate(table, t):.7f}")

    scale = interpolate(table, args.temp)
    fx, fy = correct((args.fx, args.fy), scale)
    print(f"T={args.temp:.2f}: (fx, fy) = ({args.fx}, {args.fy}) -> ({fx:.4f}, {fy:.4f})")


if __name__ == "__main__":
    main()
