"""Pretty-print helpers for floating-point bit patterns."""
from __future__ import annotations

import math

from halfp_types import FormatLayout, classify


def format_scalar(value: float) -> str:
    """Format a decoded value for display."""
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "-inf" if value < 0 else "inf"
    if value == 0.0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    return f"{value:.6g}"


def format_hex(bits: int, layout: FormatLayout) -> str:
    """Format a bit pattern as zero-padded hex."""
    return f"0x{bits:0{layout.width // 4}X}"


def format_fields(bits: int, layout: FormatLayout) -> str:
    """Format a bit pattern as sign, exponent and mantissa binary groups."""
    sign, exponent, mantissa = layout.fields(bits)
    return f"{sign} {exponent:0{layout.exponent_bits}b} {mantissa:0{layout.mantissa_bits}b}"


def format_pattern(bits: int, layout: FormatLayout, value: float) -> str:
    """Build one display line for a pattern and its decoded value."""
    return (
        f"{layout.name:>6}: {format_hex(bits, layout)} "
        f"[{format_fields(bits, layout)}] {classify(bits, layout)} = {format_scalar(value)}"
    )
