"""
Numeric helpers: strict numeral parsing, rounding and canonical formatting.

Operands are IEEE doubles; rounding goes through Decimal so that the
half-away-from-zero rule applies to the shortest repr of the value rather
than to its binary expansion.
"""

import math
import re
import sys
from decimal import ROUND_HALF_UP, Decimal, localcontext

from menu_calc.errors import InvalidOperandError

# Largest integer magnitude a double represents exactly (2**53 - 1)
MAX_SAFE_INTEGER = 9_007_199_254_740_991

_NUMERAL_RE = re.compile(r"^-?(\d+\.?\d*|\.\d+)$")


def is_numeral(text: str) -> bool:
    """Return True if text is a (possibly partial) decimal numeral."""
    return bool(_NUMERAL_RE.match(text))


def parse_numeral(text: str) -> float:
    """Parse a decimal numeral, rejecting anything else (inf, nan, '', '.')."""
    if not is_numeral(text):
        raise InvalidOperandError(f"Not a number: {text!r}")
    return float(text)


def round_half_away(value: float, places: int) -> float:
    """
    Round to ``places`` decimals, halves away from zero.

    One machine epsilon is added in the direction of the value's sign first,
    so that values like 1.005 (stored as 1.00499999...) round up.
    """
    if not math.isfinite(value):
        return value
    biased = value + math.copysign(sys.float_info.epsilon, value)
    quantum = Decimal(1).scaleb(-places)
    # 16 integer digits plus the requested places must fit the context
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, 20 + places)
        return float(Decimal(repr(biased)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_number(value: float) -> str:
    """Canonical text for a number: no exponent, no trailing zeros."""
    if value == 0:
        return "0"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_percent(rate: float) -> str:
    """Render a rate such as 0.13 as ``13``."""
    return format_number(round_half_away(rate * 100, 4))
