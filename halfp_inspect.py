"""Show values in half, single and double precision bit layouts."""
from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from halfp_common import HalfpError, setup_logging
from halfp_convert import half_bits_to_float
from halfp_format import format_pattern
from halfp_numeric import half_bits_to_double_bits, half_bits_to_single_bits, narrow_bits
from halfp_platform import is_ieee754
from halfp_types import (
    DOUBLE,
    FORMAT_ALIAS,
    HALF,
    LAYOUT_FLOAT_DTYPE,
    LAYOUT_UINT_DTYPE,
    SINGLE,
    FormatLayout,
    layout_from_alias,
)

logger = logging.getLogger(__name__)


def parse_value(text: str, layout: FormatLayout) -> Tuple[int, FormatLayout]:
    """Parse a decimal float or a 0x bit pattern in the given layout."""
    text = text.strip()
    if text.lower().startswith(("0x", "-0x")):
        try:
            bits = int(text, 16)
        except ValueError as exc:
            raise HalfpError(f"Invalid bit pattern '{text}'") from exc
        if bits < 0 or bits >> layout.width:
            raise HalfpError(f"Bit pattern {text} does not fit {layout.name} ({layout.width} bits)")
        return bits, layout
    try:
        value = float(text)
    except ValueError as exc:
        raise HalfpError(f"Invalid value '{text}'") from exc
    return int(np.float64(value).view(np.uint64)), DOUBLE


def decode(bits: int, layout: FormatLayout) -> float:
    """Decode a bit pattern to a Python float."""
    if layout == HALF:
        return half_bits_to_float(bits)
    raw = np.array([bits], dtype=LAYOUT_UINT_DTYPE[layout])
    return float(raw.view(LAYOUT_FLOAT_DTYPE[layout])[0])


def describe(bits: int, layout: FormatLayout) -> List[str]:
    """Return display lines for a pattern narrowed to half and widened back."""
    lines = []
    if layout == HALF:
        half = bits
    else:
        lines.append(format_pattern(bits, layout, decode(bits, layout)))
        half = narrow_bits(bits, layout)
    lines.append(format_pattern(half, HALF, half_bits_to_float(half)))
    single = half_bits_to_single_bits(half)
    lines.append(format_pattern(single, SINGLE, decode(single, SINGLE)))
    double = half_bits_to_double_bits(half)
    lines.append(format_pattern(double, DOUBLE, decode(double, DOUBLE)))
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for half precision inspection."""
    parser = argparse.ArgumentParser(description="Show values as half, single and double bit patterns")
    parser.add_argument("values", nargs="+", help="Decimal floats or 0x bit patterns")
    parser.add_argument(
        "--from",
        dest="source",
        default="half",
        type=str.lower,
        choices=sorted(FORMAT_ALIAS),
        help="Layout of 0x bit patterns (default: half)",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if not is_ieee754():
        logger.error("Native floating point is not IEEE-754")
        return 1

    layout = layout_from_alias(args.source)
    for text in args.values:
        try:
            bits, value_layout = parse_value(text, layout)
        except HalfpError as exc:
            parser.error(str(exc))
        logger.debug("Parsed %s as %s pattern 0x%X", text, value_layout.name, bits)
        print(text)
        for line in describe(bits, value_layout):
            print(f"  {line}")
        print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
