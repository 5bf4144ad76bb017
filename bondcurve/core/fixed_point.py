"""
Checked fixed-point arithmetic over the unsigned 128-bit domain.

A value `v` at scale `S` represents the real number `v / S`. Two scales are in
use and are never mixed within one call:
- `FORMULA_MATH` (1e9) for the purchase/sale formulas and the power function.
- `CURVE_MATH` (1e18) for the zero-supply bootstrap in `curve.py`.

Python ints never wrap, so `mul` and `div` form the exact intermediate
(`a * b` or `a * scale`, which may exceed 128 bits) and every operation
checks its exact result against `U128_MAX` before returning it: overflow is
detected before the value is used, never inferred afterwards.

Rounding: `mul`, `div` and `sqrt` floor, and `mul` rejects any product the
floor would change. The `_down` / `_up` variants round in a fixed direction
without the exactness check; the fractional power path uses them to bound a
result from one side.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import (
    DivisionByZeroError,
    FixedPointOverflowError,
    PrecisionLossError,
    UnderflowError,
)


U128_MAX = (1 << 128) - 1
U64_MAX = (1 << 64) - 1
U32_MAX = (1 << 32) - 1

PRECISION_F = 10**9
PRECISION_C = 10**18


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def require_u128(name: str, value: int) -> int:
    """Validate that `value` is an int in `[0, U128_MAX]` and return it."""
    _require_int(name, value)
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")
    if value > U128_MAX:
        raise FixedPointOverflowError(f"{name} exceeds u128: {value}")
    return value


def _checked(value: int, op: str) -> int:
    if value > U128_MAX:
        raise FixedPointOverflowError(f"{op} overflows u128")
    return value


@dataclass(frozen=True)
class FixedPointMath:
    """Overflow-checked add/sub/mul/div at a fixed `scale`."""

    scale: int

    def __post_init__(self) -> None:
        _require_int("scale", self.scale)
        if self.scale <= 0 or self.scale > U128_MAX:
            raise ValueError(f"scale must be in [1, u128]: {self.scale}")

    @property
    def one(self) -> int:
        """The fixed-point representation of 1.0."""
        return self.scale

    def add(self, a: int, b: int) -> int:
        require_u128("a", a)
        require_u128("b", b)
        return _checked(a + b, "add")

    def sub(self, a: int, b: int) -> int:
        require_u128("a", a)
        require_u128("b", b)
        if a < b:
            raise UnderflowError(f"sub underflows: {a} < {b}")
        return a - b

    def mul(self, a: int, b: int) -> int:
        """
        Fixed-point multiply: `a * b / scale`, exact or rejected.

        Fails with `FixedPointOverflowError` when the scaled product leaves u128.
        Fails with `PrecisionLossError` when the round trip
        `result * scale // a == b` (for `a != 0`) does not hold, i.e. when the
        scale division dropped any part of the product.
        """
        result = self.mul_down(a, b)
        if a != 0 and result * self.scale // a != b:
            raise PrecisionLossError(f"mul({a}, {b}) truncates at scale {self.scale}")
        return result

    def mul_down(self, a: int, b: int) -> int:
        """Fixed-point multiply with the overflow check only (floor, may reach zero)."""
        require_u128("a", a)
        require_u128("b", b)
        return _checked(a * b // self.scale, "mul")

    def mul_up(self, a: int, b: int) -> int:
        """Fixed-point multiply with the overflow check only (ceil)."""
        require_u128("a", a)
        require_u128("b", b)
        return _checked(-(-a * b // self.scale), "mul")

    def div(self, a: int, b: int) -> int:
        """Fixed-point divide: `a * scale / b` (floor)."""
        require_u128("a", a)
        require_u128("b", b)
        if b == 0:
            raise DivisionByZeroError("div by zero")
        return _checked(a * self.scale // b, "div")

    def div_up(self, a: int, b: int) -> int:
        """Fixed-point divide, rounded up."""
        require_u128("a", a)
        require_u128("b", b)
        if b == 0:
            raise DivisionByZeroError("div by zero")
        return _checked(-(-a * self.scale // b), "div")

    def sqrt(self, a: int) -> int:
        """Fixed-point square root (floor): `isqrt(a * scale)`."""
        require_u128("a", a)
        return math.isqrt(a * self.scale)

    def sqrt_up(self, a: int) -> int:
        """Fixed-point square root, rounded up."""
        require_u128("a", a)
        n = a * self.scale
        root = math.isqrt(n)
        return root if root * root == n else root + 1


FORMULA_MATH = FixedPointMath(PRECISION_F)
CURVE_MATH = FixedPointMath(PRECISION_C)
