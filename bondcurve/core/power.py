"""
Fixed-point power function: `base ** exponent`, both operands scaled.

Two evaluation modes:

- `PowerMode.INTEGER_EXPONENT` (default): binary exponentiation over
  `exponent // scale`. Any sub-unit fraction of the exponent is discarded
  before the loop, so an exponent strictly between 0 and 1.0 evaluates to 1.0
  for every base. The discard is logged, never silent.
- `PowerMode.FRACTIONAL`: the same integer part, multiplied by
  `base ** fraction`, where the fraction is expanded in binary and each set
  digit contributes a repeated fixed-point square root of `base`. Every step
  rounds one way (floor or ceil), so callers get a bound on the true power in
  the direction they choose (`pow_ratio`).

The integer mode multiplies with the exact `mul` and aborts on any
truncation. Both are integer-only and deterministic.
"""

from __future__ import annotations

from enum import Enum, unique
from typing import Callable

import structlog

from .fixed_point import FORMULA_MATH, FixedPointMath, require_u128

logger = structlog.get_logger()


@unique
class PowerMode(Enum):
    INTEGER_EXPONENT = "integer_exponent"
    FRACTIONAL = "fractional"


def _pow_by_squaring(base: int, e: int, *, one: int, mul: Callable[[int, int], int]) -> int:
    result = one
    while e > 0:
        if e & 1:
            result = mul(result, base)
        e >>= 1
        # no squaring after the last bit
        if e:
            base = mul(base, base)
    return result


def pow_integer_exponent(base: int, exponent: int, *, fp: FixedPointMath = FORMULA_MATH) -> int:
    """
    `base ** exponent` with the exponent truncated to whole units.

    - `exponent == 1.0` returns `base` unchanged.
    - `exponent == 0` returns 1.0.
    - otherwise `e = exponent // scale` and the result is `base ** e` by
      repeated squaring, every step through the exact `fp.mul`.
    """
    require_u128("base", base)
    require_u128("exponent", exponent)

    if exponent == fp.one:
        return base
    if exponent == 0:
        return fp.one

    e, fraction = divmod(exponent, fp.one)
    if fraction:
        logger.warning(
            "pow_fractional_exponent_discarded",
            base=base,
            exponent=exponent,
            integer_part=e,
            scale=fp.scale,
        )
    return _pow_by_squaring(base, e, one=fp.one, mul=fp.mul)


def pow_fractional(
    base: int,
    exponent: int,
    *,
    fp: FixedPointMath = FORMULA_MATH,
    round_up: bool = False,
) -> int:
    """
    `base ** exponent` including the sub-unit part of the exponent.

    Every step rounds the same way (`round_up` selects ceil, otherwise floor),
    so the result is a one-sided bound on `base ** exponent`. Binary digits of
    the fraction past `scale.bit_length()` are bounded by the last root when
    dropping them would move the result the wrong way.
    """
    require_u128("base", base)
    require_u128("exponent", exponent)

    if exponent == fp.one:
        return base
    if exponent == 0:
        return fp.one

    mul = fp.mul_up if round_up else fp.mul_down
    sqrt = fp.sqrt_up if round_up else fp.sqrt

    e, fraction = divmod(exponent, fp.one)
    result = _pow_by_squaring(base, e, one=fp.one, mul=mul)

    root = base
    for _ in range(fp.scale.bit_length()):
        if fraction == 0:
            break
        root = sqrt(root)
        fraction *= 2
        if fraction >= fp.one:
            fraction -= fp.one
            result = mul(result, root)

    # remaining digits weigh less than the last root
    if fraction and base != fp.one and (base > fp.one) == round_up:
        result = mul(result, root)
    return result


def pow_ratio(
    base: int,
    num: int,
    den: int,
    *,
    fp: FixedPointMath = FORMULA_MATH,
    round_up: bool = False,
) -> int:
    """
    One-sided bound on `base ** (num / den)`.

    The exponent `num / den` is rounded in the direction that moves the result
    toward `round_up` (up for a base above 1.0 when rounding up, down for a
    base below it), then evaluated with `pow_fractional`.
    """
    require_u128("base", base)
    grows = base >= fp.one
    exponent = fp.div_up(num, den) if grows == round_up else fp.div(num, den)
    return pow_fractional(base, exponent, fp=fp, round_up=round_up)


def power(
    base: int,
    exponent: int,
    *,
    fp: FixedPointMath = FORMULA_MATH,
    mode: PowerMode = PowerMode.INTEGER_EXPONENT,
) -> int:
    if mode is PowerMode.INTEGER_EXPONENT:
        return pow_integer_exponent(base, exponent, fp=fp)
    if mode is PowerMode.FRACTIONAL:
        return pow_fractional(base, exponent, fp=fp)
    raise ValueError(f"unknown power mode: {mode!r}")
