"""Tests for bondcurve/core/fixed_point.py: checked u128 fixed-point arithmetic."""

from __future__ import annotations

import pytest

from bondcurve.core.errors import (
    CurveError,
    DivisionByZeroError,
    ErrorCode,
    FixedPointOverflowError,
    PrecisionLossError,
    UnderflowError,
)
from bondcurve.core.fixed_point import (
    CURVE_MATH,
    FORMULA_MATH,
    PRECISION_C,
    PRECISION_F,
    U128_MAX,
    FixedPointMath,
    require_u128,
)

ONE = PRECISION_F


# ---------------------------------------------------------------------------
# Domain checks
# ---------------------------------------------------------------------------

class TestRequireU128:
    def test_accepts_bounds(self):
        assert require_u128("x", 0) == 0
        assert require_u128("x", U128_MAX) == U128_MAX

    def test_rejects_bool(self):
        with pytest.raises(TypeError):
            require_u128("x", True)

    def test_rejects_float(self):
        with pytest.raises(TypeError):
            require_u128("x", 1.5)  # type: ignore[arg-type]

    def test_rejects_negative(self):
        with pytest.raises(ValueError, match="non-negative"):
            require_u128("x", -1)

    def test_rejects_above_u128(self):
        with pytest.raises(FixedPointOverflowError):
            require_u128("x", U128_MAX + 1)


def test_scale_must_be_positive() -> None:
    with pytest.raises(ValueError):
        FixedPointMath(0)


def test_precisions_are_independent() -> None:
    assert FORMULA_MATH.one == 10**9
    assert CURVE_MATH.one == 10**18
    assert FORMULA_MATH.scale == PRECISION_F
    assert CURVE_MATH.scale == PRECISION_C


# ---------------------------------------------------------------------------
# add / sub
# ---------------------------------------------------------------------------

class TestAddSub:
    def test_add(self):
        assert FORMULA_MATH.add(1, 2) == 3

    def test_add_at_limit(self):
        assert FORMULA_MATH.add(U128_MAX, 0) == U128_MAX

    def test_add_overflow(self):
        with pytest.raises(FixedPointOverflowError):
            FORMULA_MATH.add(U128_MAX, 1)

    def test_sub(self):
        assert FORMULA_MATH.sub(5, 3) == 2
        assert FORMULA_MATH.sub(3, 3) == 0

    def test_sub_underflow(self):
        with pytest.raises(UnderflowError):
            FORMULA_MATH.sub(3, 5)


# ---------------------------------------------------------------------------
# mul
# ---------------------------------------------------------------------------

class TestMul:
    def test_whole_numbers(self):
        assert FORMULA_MATH.mul(2 * ONE, 3 * ONE) == 6 * ONE

    def test_fractions(self):
        # 1.5 * 1.5 = 2.25
        assert FORMULA_MATH.mul(1_500_000_000, 1_500_000_000) == 2_250_000_000

    def test_zero_operand(self):
        assert FORMULA_MATH.mul(0, 5) == 0
        assert FORMULA_MATH.mul(5, 0) == 0

    def test_overflow_after_scale_division(self):
        with pytest.raises(FixedPointOverflowError):
            FORMULA_MATH.mul(2**100, 2**100)

    def test_product_truncated_to_zero_is_precision_loss(self):
        with pytest.raises(PrecisionLossError):
            FORMULA_MATH.mul(7, 3)

    def test_truncated_non_zero_product_is_precision_loss(self):
        # 3e-9 * 0.5 = 1.5e-9 floors to 1e-9; 1 * 1e9 // 3 != 5e8
        with pytest.raises(PrecisionLossError):
            FORMULA_MATH.mul(3, 500_000_000)

    def test_dropped_low_term_is_precision_loss(self):
        # (1 + 1e-9)^2 = 1 + 2e-9 + 1e-18, and the 1e-18 term cannot be kept
        with pytest.raises(PrecisionLossError):
            FORMULA_MATH.mul(ONE + 1, ONE + 1)

    def test_round_trip_holds_on_success(self):
        a, b = 1_500_000_000, 1_500_000_000
        result = FORMULA_MATH.mul(a, b)
        assert result * ONE // a == b

    def test_curve_precision(self):
        assert CURVE_MATH.mul(10**18, 10**18) == 10**18
        assert CURVE_MATH.mul(2 * 10**18, 5 * 10**17) == 10**18


class TestDirectedMul:
    def test_mul_down_floors(self):
        assert FORMULA_MATH.mul_down(ONE + 1, ONE + 1) == ONE + 2
        assert FORMULA_MATH.mul_down(7, 3) == 0

    def test_mul_up_ceils(self):
        assert FORMULA_MATH.mul_up(ONE + 1, ONE + 1) == ONE + 3
        assert FORMULA_MATH.mul_up(7, 3) == 1

    def test_exact_products_agree(self):
        a, b = 2 * ONE, 1_500_000_000
        assert FORMULA_MATH.mul_down(a, b) == FORMULA_MATH.mul_up(a, b) == FORMULA_MATH.mul(a, b)

    @pytest.mark.parametrize("fn", ["mul_down", "mul_up"])
    def test_still_checks_overflow(self, fn):
        with pytest.raises(FixedPointOverflowError):
            getattr(FORMULA_MATH, fn)(2**100, 2**100)


# ---------------------------------------------------------------------------
# div / sqrt
# ---------------------------------------------------------------------------

class TestDiv:
    def test_half(self):
        assert FORMULA_MATH.div(1, 2) == 500_000_000

    def test_whole(self):
        assert FORMULA_MATH.div(6 * ONE, 3 * ONE) == 2 * ONE

    def test_floors(self):
        assert FORMULA_MATH.div(1, 3) == 333_333_333

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            FORMULA_MATH.div(1, 0)

    def test_scaled_numerator_overflow(self):
        with pytest.raises(FixedPointOverflowError):
            FORMULA_MATH.div(U128_MAX, 2)

    def test_div_up(self):
        assert FORMULA_MATH.div_up(1, 3) == 333_333_334
        assert FORMULA_MATH.div_up(1, 2) == 500_000_000

    def test_div_up_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            FORMULA_MATH.div_up(1, 0)


class TestSqrt:
    def test_exact(self):
        assert FORMULA_MATH.sqrt(4 * ONE) == 2 * ONE

    def test_floor(self):
        # sqrt(2) = 1.41421356237...
        assert FORMULA_MATH.sqrt(2 * ONE) == 1_414_213_562

    def test_zero(self):
        assert FORMULA_MATH.sqrt(0) == 0

    def test_sqrt_up(self):
        assert FORMULA_MATH.sqrt_up(2 * ONE) == 1_414_213_563
        assert FORMULA_MATH.sqrt_up(4 * ONE) == 2 * ONE
        assert FORMULA_MATH.sqrt_up(0) == 0


# ---------------------------------------------------------------------------
# Error taxonomy
# ---------------------------------------------------------------------------

def test_errors_are_value_errors_with_codes() -> None:
    with pytest.raises(ValueError) as exc_info:
        FORMULA_MATH.sub(0, 1)
    assert isinstance(exc_info.value, CurveError)
    assert exc_info.value.code is ErrorCode.UNDERFLOW
    assert FixedPointOverflowError.code.value == "Overflow"
    assert PrecisionLossError.code.value == "PrecisionLoss"
