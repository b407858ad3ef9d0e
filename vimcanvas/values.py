"""Conversion of values received for settings into typed Python values.

Each parser returns the converted value, or ``current`` unchanged (and logs an
error) when the received value has an unsuitable type.
"""

from __future__ import annotations

import logging
import math
import struct
from typing import Any

logger = logging.getLogger(__name__)

_I64_MIN = -(1 << 63)
_I64_MAX = (1 << 63) - 1
_U64_MAX = (1 << 64) - 1
_F32_MAX = 3.4028234663852886e38


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_u64(value: Any) -> bool:
    return _is_int(value) and 0 <= value <= _U64_MAX


def _is_i64(value: Any) -> bool:
    return _is_int(value) and _I64_MIN <= value <= _I64_MAX


def _to_f32(number: float) -> float:
    if math.isnan(number):
        return number
    if abs(number) > _F32_MAX:
        try:
            return struct.unpack("<f", struct.pack("<f", number))[0]
        except OverflowError:
            return math.copysign(math.inf, number)
    return struct.unpack("<f", struct.pack("<f", number))[0]


def _wrap_signed32(number: int) -> int:
    number &= 0xFFFFFFFF
    return number - (1 << 32) if number & 0x80000000 else number


def parse_float(value: Any, current: float) -> float:
    """Accept a float or any 64-bit integer, rounded to single precision."""
    if isinstance(value, float):
        return _to_f32(value)
    if _is_i64(value) or _is_u64(value):
        return _to_f32(float(value))
    logger.error("Setting expected an f32, but received %r", value)
    return current


def parse_u64(value: Any, current: int) -> int:
    if _is_u64(value):
        return value
    logger.error("Setting expected a u64, but received %r", value)
    return current


def parse_u32(value: Any, current: int) -> int:
    """Accept an unsigned integer, truncated to 32 bits."""
    if _is_u64(value):
        return value & 0xFFFFFFFF
    logger.error("Setting expected a u32, but received %r", value)
    return current


def parse_i32(value: Any, current: int) -> int:
    """Accept a signed 64-bit integer, truncated to 32 bits."""
    if _is_i64(value):
        return _wrap_signed32(value)
    logger.error("Setting expected an i32, but received %r", value)
    return current


def parse_str(value: Any, current: str) -> str:
    if isinstance(value, str):
        return value
    logger.error("Setting expected a string, but received %r", value)
    return current


def parse_bool(value: Any, current: bool) -> bool:
    """Accept a boolean or an unsigned integer (non-zero meaning true)."""
    if isinstance(value, bool):
        return value
    if _is_u64(value):
        return value != 0
    logger.error("Setting expected a bool or 0/1, but received %r", value)
    return current