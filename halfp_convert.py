"""Buffer-level conversion entry points for half precision data.

The four ``*2halfp`` / ``halfp2*`` routines take a target buffer, a source
buffer and an element count. Buffers are any C-contiguous objects exposing the
buffer protocol and are reinterpreted in place as native-order unsigned words.
They return False only when the host double is not IEEE-754.
"""
from __future__ import annotations

import logging
from typing import Any, Callable

import numpy as np

from halfp_common import HalfpError, as_words
from halfp_numeric import (
    double_bits_to_half_bits,
    half_bits_to_double_bits,
    half_bits_to_single_bits,
    single_bits_to_half_bits,
)
from halfp_platform import is_ieee754, platform_info

logger = logging.getLogger(__name__)

NOT_IEEE754 = "Native floating point is not IEEE-754; half conversion unavailable"


def singles2halfp(target: Any, source: Any, count: int) -> bool:
    """Convert count binary32 values in source to binary16 in target."""
    if not is_ieee754():
        return False
    if source is None or target is None:
        return True
    out = as_words(target, np.uint16, count, writable=True, name="target")
    src = as_words(source, np.uint32, count, name="source")
    for idx in range(count):
        out[idx] = single_bits_to_half_bits(int(src[idx]))
    return True


def doubles2halfp(target: Any, source: Any, count: int) -> bool:
    """Convert count binary64 values in source to binary16 in target."""
    if not is_ieee754():
        return False
    if source is None or target is None:
        return True
    high = platform_info().high_word
    low = 1 - high
    out = as_words(target, np.uint16, count, writable=True, name="target")
    src = as_words(source, np.uint32, 2 * count, name="source").reshape(count, 2)
    for idx in range(count):
        bits = (int(src[idx, high]) << 32) | int(src[idx, low])
        out[idx] = double_bits_to_half_bits(bits)
    return True


def halfp2singles(target: Any, source: Any, count: int) -> bool:
    """Convert count binary16 values in source to binary32 in target."""
    if not is_ieee754():
        return False
    if source is None or target is None:
        return True
    out = as_words(target, np.uint32, count, writable=True, name="target")
    src = as_words(source, np.uint16, count, name="source")
    for idx in range(count):
        out[idx] = half_bits_to_single_bits(int(src[idx]))
    return True


def halfp2doubles(target: Any, source: Any, count: int) -> bool:
    """Convert count binary16 values in source to binary64 in target."""
    if not is_ieee754():
        return False
    if source is None or target is None:
        return True
    high = platform_info().high_word
    low = 1 - high
    out = as_words(target, np.uint32, 2 * count, writable=True, name="target").reshape(count, 2)
    src = as_words(source, np.uint16, count, name="source")
    for idx in range(count):
        bits = half_bits_to_double_bits(int(src[idx]))
        out[idx, high] = bits >> 32
        out[idx, low] = bits & 0xFFFFFFFF
    return True


def _require_ieee754() -> None:
    if not is_ieee754():
        raise HalfpError(NOT_IEEE754)


def _convert_array(
    routine: Callable[[Any, Any, int], bool],
    values: Any,
    src_dtype: Any,
    out_dtype: Any,
) -> np.ndarray:
    src = np.ascontiguousarray(values, dtype=src_dtype)
    shape = src.shape
    flat = src.reshape(-1)
    out = np.empty(flat.size, dtype=out_dtype)
    if not routine(out, flat, flat.size):
        raise HalfpError(NOT_IEEE754)
    logger.debug("%s converted %d values", routine.__name__, flat.size)
    return out.reshape(shape)


def float32_to_half(values: Any) -> np.ndarray:
    """Convert float32 values to an array of binary16 bit patterns."""
    return _convert_array(singles2halfp, values, np.float32, np.uint16)


def float64_to_half(values: Any) -> np.ndarray:
    """Convert float64 values to an array of binary16 bit patterns."""
    return _convert_array(doubles2halfp, values, np.float64, np.uint16)


def half_to_float32(bits: Any) -> np.ndarray:
    """Convert binary16 bit arrays to float32."""
    return _convert_array(halfp2singles, bits, np.uint16, np.float32)


def half_to_float64(bits: Any) -> np.ndarray:
    """Convert binary16 bit arrays to float64."""
    return _convert_array(halfp2doubles, bits, np.uint16, np.float64)


def float_to_half_bits(value: float) -> int:
    """Convert a Python float to its binary16 bit pattern."""
    _require_ieee754()
    bits = np.float64(value).view(np.uint64)
    return double_bits_to_half_bits(int(bits))


def half_bits_to_float(bits: int) -> float:
    """Convert a binary16 bit pattern to a Python float."""
    _require_ieee754()
    wide = np.uint64(half_bits_to_double_bits(bits))
    return float(wide.view(np.float64))
