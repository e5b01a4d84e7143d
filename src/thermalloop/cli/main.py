from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from thermalloop.codec import decode, encode
from thermalloop.config import CorrectionConfig, default_config, load_config
from thermalloop.correction import correct, get_rule
from thermalloop.interp import interpolate
from thermalloop.table import TABLE_ID, CalibrationTable, check_table


def _load_table(path: Path, cfg: CorrectionConfig) -> CalibrationTable:
    return decode(Path(path).read_bytes(), byte_order=cfg.codec.byte_order)


def _table_summary(table: CalibrationTable) -> dict:
    md = table.metadata
    return {
        "table_id": f"0x{TABLE_ID:x}",
        "min_temp": float(md.min_temp),
        "max_temp": float(md.max_temp),
        "reference_temp": float(md.reference_temp),
        "valid": float(md.valid),
        "bins": len(table.bins),
        "bin_centers": table.bin_centers().tolist(),
        "scales": table.scales.tolist(),
        "issues": check_table(table),
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="thermalloop")
    parser.add_argument("--config", type=Path, default=None, help="JSON config (byte order, correction rule).")
    parser.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="cmd", required=True)

    insp = sub.add_parser("inspect", help="Decode a raw thermal table record and print its content.")
    insp.add_argument("record", type=Path)
    insp.add_argument("--json", action="store_true", help="Print the full summary as JSON.")

    sc = sub.add_parser("scale", help="Interpolated thermal scale at a measured temperature.")
    sc.add_argument("record", type=Path)
    sc.add_argument("--temp", type=float, required=True)

    cor = sub.add_parser("correct", help="Apply the thermal scale to a calibration pair (e.g. fx, fy).")
    cor.add_argument("record", type=Path)
    cor.add_argument("--temp", type=float, required=True)
    cor.add_argument("--x", type=float, required=True)
    cor.add_argument("--y", type=float, required=True)

    rt = sub.add_parser("roundtrip", help="Decode then re-encode a record and compare bytes.")
    rt.add_argument("record", type=Path)

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    cfg = load_config(args.config) if args.config is not None else default_config()

    if args.cmd == "inspect":
        table = _load_table(args.record, cfg)
        summary = _table_summary(table)
        if args.json:
            print(json.dumps(summary, indent=2))
        else:
            print(f"table {summary['table_id']}: {summary['bins']} bins, [{summary['min_temp']:g}, {summary['max_temp']:g}]")
            for t, s in zip(summary["bin_centers"], summary["scales"]):
                print(f"  {t:10.4f}  {s:.7g}")
            for issue in summary["issues"]:
                print(f"warning: {issue}")
        return 0

    if args.cmd == "scale":
        table = _load_table(args.record, cfg)
        print(f"{interpolate(table, args.temp):.9g}")
        return 0

    if args.cmd == "correct":
        table = _load_table(args.record, cfg)
        scale = interpolate(table, args.temp)
        x, y = correct((args.x, args.y), scale, rule=get_rule(cfg.correction.rule))
        print(f"{x:.9g} {y:.9g}")
        return 0

    if args.cmd == "roundtrip":
        raw = Path(args.record).read_bytes()
        table = decode(raw, byte_order=cfg.codec.byte_order)
        again = encode(table, byte_order=cfg.codec.byte_order)
        if again != raw:
            print("roundtrip mismatch")
            return 1
        print("roundtrip ok")
        return 0

    raise AssertionError(f"Unhandled cmd: {args.cmd}")
