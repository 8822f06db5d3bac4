"""Bit-level conversions between half, single and double precision patterns.

All functions take and return plain integers holding raw bit patterns. The
rules follow IEEE-754 with two deliberate simplifications:

* rounding is round-to-nearest with ties rounded up (away from even);
* every NaN collapses to the target's quiet NaN (sign kept, payload dropped).
"""
from __future__ import annotations

from halfp_common import HalfpError
from halfp_types import DOUBLE, HALF, SINGLE, FormatLayout


def narrow_bits(bits: int, source: FormatLayout, target: FormatLayout = HALF) -> int:
    """Convert a bit pattern to a narrower format, rounding the mantissa."""
    drop = source.mantissa_bits - target.mantissa_bits
    if drop <= 0 or target.exponent_bits > source.exponent_bits:
        raise HalfpError(f"Cannot narrow {source.name} to {target.name}")
    bits = int(bits) & ((1 << source.width) - 1)
    sign, exponent, mantissa = source.fields(bits)
    sign_out = sign << (target.width - 1)

    if exponent == 0:
        # Signed zero, or a source denormal far below the target's smallest denormal.
        return sign_out
    if exponent == source.exponent_max:
        if mantissa == 0:
            return sign_out | target.infinity
        return sign_out | target.quiet_nan

    target_exponent = exponent - source.bias + target.bias
    if target_exponent >= target.exponent_max:
        return sign_out | target.infinity

    if target_exponent <= 0:
        shift = drop + 1 - target_exponent
        if shift > source.mantissa_bits + 1:
            # Even the hidden bit falls below the rounding position.
            return sign_out
        mantissa |= source.hidden_bit
        out = mantissa >> shift
        if (mantissa >> (shift - 1)) & 1:
            # A carry out of the mantissa lands in the exponent field as the
            # smallest normal, which is the correctly rounded result.
            out += 1
        return sign_out | out

    out = target.compose(0, target_exponent, mantissa >> drop)
    if mantissa & (1 << (drop - 1)):
        # Carry may ripple up to the infinity pattern.
        out += 1
    return sign_out | out


def widen_bits(bits: int, target: FormatLayout, source: FormatLayout = HALF) -> int:
    """Convert a bit pattern to a wider format. Always exact."""
    grow = target.mantissa_bits - source.mantissa_bits
    if grow <= 0 or target.exponent_bits < source.exponent_bits:
        raise HalfpError(f"Cannot widen {source.name} to {target.name}")
    bits = int(bits) & ((1 << source.width) - 1)
    sign, exponent, mantissa = source.fields(bits)
    sign_out = sign << (target.width - 1)

    if exponent == 0:
        if mantissa == 0:
            return sign_out
        # Denormal in the source is normal in the target.
        shift = 0
        while not mantissa & source.hidden_bit:
            mantissa <<= 1
            shift += 1
        target_exponent = 1 - source.bias + target.bias - shift
        mantissa &= source.mantissa_mask
        return sign_out | target.compose(0, target_exponent, mantissa << grow)
    if exponent == source.exponent_max:
        if mantissa == 0:
            return sign_out | target.infinity
        return sign_out | target.quiet_nan

    target_exponent = exponent - source.bias + target.bias
    return sign_out | target.compose(0, target_exponent, mantissa << grow)


def single_bits_to_half_bits(bits: int) -> int:
    """Convert a binary32 bit pattern to binary16."""
    return narrow_bits(bits, SINGLE)


def double_bits_to_half_bits(bits: int) -> int:
    """Convert a binary64 bit pattern to binary16."""
    return narrow_bits(bits, DOUBLE)


def half_bits_to_single_bits(bits: int) -> int:
    """Convert a binary16 bit pattern to binary32."""
    return widen_bits(bits, SINGLE)


def half_bits_to_double_bits(bits: int) -> int:
    """Convert a binary16 bit pattern to binary64."""
    return widen_bits(bits, DOUBLE)
