from thermalloop.codec import FormatError, decode, encode
from thermalloop.correction import correct, correct_for_temperature
from thermalloop.interp import interpolate
from thermalloop.table import RESOLUTION, TABLE_ID, TABLE_SIZE, BinCoefficients, CalibrationTable, TableMetadata, check_table

__all__ = [
    "RESOLUTION",
    "TABLE_ID",
    "TABLE_SIZE",
    "TableMetadata",
    "BinCoefficients",
    "CalibrationTable",
    "check_table",
    "FormatError",
    "decode",
    "encode",
    "interpolate",
    "correct",
    "correct_for_temperature",
]
