from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from thermalloop.correction import rule_names

SCHEMA_VERSION = "thermalloop.config.v0"


class ConfigValidationError(ValueError):
    pass


@dataclass(frozen=True)
class CodecConfig:
    byte_order: str = "little"


@dataclass(frozen=True)
class CorrectionRuleConfig:
    rule: str = "multiply"


@dataclass(frozen=True)
class CorrectionConfig:
    schema_version: str
    codec: CodecConfig
    correction: CorrectionRuleConfig


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigValidationError(msg)


def default_config() -> CorrectionConfig:
    return CorrectionConfig(schema_version=SCHEMA_VERSION, codec=CodecConfig(), correction=CorrectionRuleConfig())


def load_config(path: Path) -> CorrectionConfig:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return parse_config(data)


def parse_config(data: dict[str, Any]) -> CorrectionConfig:
    _require(isinstance(data, dict), "config must be a JSON object")
    schema_version = data.get("schema_version")
    _require(schema_version == SCHEMA_VERSION, f"schema_version must be {SCHEMA_VERSION}")

    codec = data.get("codec", {})
    correction = data.get("correction", {})
    _require(isinstance(codec, dict), "codec must be an object")
    _require(isinstance(correction, dict), "correction must be an object")

    byte_order = codec.get("byte_order", "little")
    _require(byte_order in ("little", "big"), "codec.byte_order must be 'little' or 'big'")

    rule = correction.get("rule", "multiply")
    _require(rule in rule_names(), f"correction.rule must be one of {rule_names()}")

    return CorrectionConfig(
        schema_version=schema_version,
        codec=CodecConfig(byte_order=byte_order),
        correction=CorrectionRuleConfig(rule=rule),
    )
