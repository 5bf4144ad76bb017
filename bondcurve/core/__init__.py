"""
Core bonding-curve algorithms
"""

from .errors import (
    CurveError,
    DivisionByZeroError,
    ErrorCode,
    FixedPointOverflowError,
    PrecisionLossError,
    SellAmountExceedsSupplyError,
    UnderflowError,
    WeightExceededError,
    ZeroBalanceError,
    ZeroSupplyError,
    ZeroWeightError,
)
from .fixed_point import CURVE_MATH, FORMULA_MATH, PRECISION_C, PRECISION_F, FixedPointMath
from .power import PowerMode, pow_fractional, pow_integer_exponent, pow_ratio, power
from .formulas import MAX_WEIGHT, purchase_return, sale_return
from .curve import (
    CurveParameters,
    burning_amount_from_refund,
    minting_amount_from_price,
    price_for_minting,
    refund_for_burning,
)
from .quote import QuoteKind, QuoteRequest, QuoteResult, compute_fee, quote, quote_or_raise

__all__ = [
    "CurveError",
    "DivisionByZeroError",
    "ErrorCode",
    "FixedPointOverflowError",
    "PrecisionLossError",
    "SellAmountExceedsSupplyError",
    "UnderflowError",
    "WeightExceededError",
    "ZeroBalanceError",
    "ZeroSupplyError",
    "ZeroWeightError",
    "CURVE_MATH",
    "FORMULA_MATH",
    "PRECISION_C",
    "PRECISION_F",
    "FixedPointMath",
    "PowerMode",
    "pow_fractional",
    "pow_integer_exponent",
    "pow_ratio",
    "power",
    "MAX_WEIGHT",
    "purchase_return",
    "sale_return",
    "CurveParameters",
    "burning_amount_from_refund",
    "minting_amount_from_price",
    "price_for_minting",
    "refund_for_burning",
    "QuoteKind",
    "QuoteRequest",
    "QuoteResult",
    "compute_fee",
    "quote",
    "quote_or_raise",
]
