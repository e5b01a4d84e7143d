from __future__ import annotations

import json
from pathlib import Path

import numpy as np

from thermalloop.cli.main import main
from thermalloop.codec import encode
from thermalloop.table import RESOLUTION, CalibrationTable


def _write_record(path: Path, *, byte_order: str = "little") -> Path:
    table = CalibrationTable.from_arrays(min_temp=0.0, max_temp=29.0, scales=np.arange(RESOLUTION) + 1.0)
    path.write_bytes(encode(table, byte_order=byte_order))
    return path


def test_inspect_json(tmp_path: Path, capsys) -> None:
    rec = _write_record(tmp_path / "table.bin")
    assert main(["inspect", str(rec), "--json"]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["table_id"] == "0x317"
    assert summary["bins"] == RESOLUTION
    assert summary["issues"] == []


def test_scale_and_correct(tmp_path: Path, capsys) -> None:
    rec = _write_record(tmp_path / "table.bin")
    assert main(["scale", str(rec), "--temp", "100"]) == 0
    assert float(capsys.readouterr().out) == 29.0

    assert main(["correct", str(rec), "--temp", "-5", "--x", "10", "--y", "5"]) == 0
    assert capsys.readouterr().out.split() == ["10", "5"]


def test_roundtrip_with_big_endian_config(tmp_path: Path, capsys) -> None:
    rec = _write_record(tmp_path / "table.bin", byte_order="big")
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"schema_version": "thermalloop.config.v0", "codec": {"byte_order": "big"}}), encoding="utf-8")
    assert main(["--config", str(cfg), "roundtrip", str(rec)]) == 0
    assert "roundtrip ok" in capsys.readouterr().out
