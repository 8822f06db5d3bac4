"""Bit layouts and type tables for the IEEE-754 binary formats."""
from __future__ import annotations

from typing import Annotated, Dict, Optional, Tuple

import numpy as np
from pydantic import Field, model_validator
from pydantic.dataclasses import dataclass as pydantic_dataclass


@pydantic_dataclass(frozen=True)
class FormatLayout:
    """Sign, exponent and mantissa fields of one binary floating-point format."""

    name: str
    width: Annotated[int, Field(gt=0)]
    exponent_bits: Annotated[int, Field(gt=0)]
    mantissa_bits: Annotated[int, Field(gt=0)]
    bias: int

    @model_validator(mode="after")
    def _check_fields(self) -> "FormatLayout":
        if 1 + self.exponent_bits + self.mantissa_bits != self.width:
            raise ValueError(
                f"{self.name}: 1 + {self.exponent_bits} + {self.mantissa_bits} bits != width {self.width}"
            )
        expected_bias = (1 << (self.exponent_bits - 1)) - 1
        if self.bias != expected_bias:
            raise ValueError(f"{self.name}: bias {self.bias} != {expected_bias}")
        return self

    @property
    def sign_mask(self) -> int:
        return 1 << (self.width - 1)

    @property
    def exponent_max(self) -> int:
        """All-ones biased exponent (infinity and NaN)."""
        return (1 << self.exponent_bits) - 1

    @property
    def exponent_mask(self) -> int:
        return self.exponent_max << self.mantissa_bits

    @property
    def mantissa_mask(self) -> int:
        return (1 << self.mantissa_bits) - 1

    @property
    def hidden_bit(self) -> int:
        """Implicit leading bit of a normalized mantissa."""
        return 1 << self.mantissa_bits

    @property
    def infinity(self) -> int:
        return self.exponent_mask

    @property
    def quiet_nan(self) -> int:
        """Canonical NaN: all exponent bits and only the top mantissa bit."""
        return self.exponent_mask | (1 << (self.mantissa_bits - 1))

    def fields(self, bits: int) -> Tuple[int, int, int]:
        """Split a bit pattern into (sign, biased exponent, mantissa)."""
        sign = (bits >> (self.width - 1)) & 1
        exponent = (bits >> self.mantissa_bits) & self.exponent_max
        mantissa = bits & self.mantissa_mask
        return sign, exponent, mantissa

    def compose(self, sign: int, exponent: int, mantissa: int) -> int:
        """Assemble a bit pattern from (sign, biased exponent, mantissa)."""
        return (sign << (self.width - 1)) | (exponent << self.mantissa_bits) | mantissa


HALF = FormatLayout(name="half", width=16, exponent_bits=5, mantissa_bits=10, bias=15)
SINGLE = FormatLayout(name="single", width=32, exponent_bits=8, mantissa_bits=23, bias=127)
DOUBLE = FormatLayout(name="double", width=64, exponent_bits=11, mantissa_bits=52, bias=1023)

LAYOUTS = (HALF, SINGLE, DOUBLE)


class FloatClass:
    """Value classes a bit pattern can decode to."""
    ZERO = "zero"
    DENORMAL = "denormal"
    NORMAL = "normal"
    INFINITY = "inf"
    NAN = "nan"


LAYOUT_UINT_DTYPE = {
    HALF: np.uint16,
    SINGLE: np.uint32,
    DOUBLE: np.uint64,
}

LAYOUT_FLOAT_DTYPE = {
    HALF: np.float16,
    SINGLE: np.float32,
    DOUBLE: np.float64,
}

FORMAT_ALIAS: Dict[str, FormatLayout] = {
    "half": HALF,
    "f16": HALF,
    "float16": HALF,
    "binary16": HALF,
    "single": SINGLE,
    "f32": SINGLE,
    "float32": SINGLE,
    "binary32": SINGLE,
    "double": DOUBLE,
    "f64": DOUBLE,
    "float64": DOUBLE,
    "binary64": DOUBLE,
}


def layout_from_alias(alias: Optional[str]) -> Optional[FormatLayout]:
    """Resolve a format alias string to its FormatLayout."""
    if alias is None:
        return None
    if isinstance(alias, str):
        key = alias.strip().lower()
        if key in FORMAT_ALIAS:
            return FORMAT_ALIAS[key]
    return None


def classify(bits: int, layout: FormatLayout) -> str:
    """Return the FloatClass of a bit pattern in the given layout."""
    _, exponent, mantissa = layout.fields(bits)
    if exponent == 0:
        return FloatClass.DENORMAL if mantissa else FloatClass.ZERO
    if exponent == layout.exponent_max:
        return FloatClass.NAN if mantissa else FloatClass.INFINITY
    return FloatClass.NORMAL
