"""Exception types for the bonding-curve engine.

Every fault is a ``CurveError`` (a ``ValueError``, matching the kernels'
habit of rejecting bad inputs with ``ValueError``) carrying a stable
``ErrorCode``. Callers that prefer result objects use ``quote()`` in
``quote.py``, which maps these to ``QuoteResult.code``.
"""

from __future__ import annotations

from enum import Enum, unique


@unique
class ErrorCode(Enum):
    """One member per fault class."""
    ZERO_SUPPLY = "ZeroSupply"
    ZERO_BALANCE = "ZeroBalance"
    ZERO_WEIGHT = "ZeroWeight"
    WEIGHT_EXCEEDED = "WeightExceeded"
    SELL_AMOUNT_EXCEEDS_SUPPLY = "SellAmountExceedsSupply"
    DIVISION_BY_ZERO = "DivisionByZero"
    UNDERFLOW = "Underflow"
    OVERFLOW = "Overflow"
    PRECISION_LOSS = "PrecisionLoss"


class CurveError(ValueError):
    """Base class for every precondition or arithmetic fault."""

    code: ErrorCode


class ZeroSupplyError(CurveError):
    code = ErrorCode.ZERO_SUPPLY


class ZeroBalanceError(CurveError):
    code = ErrorCode.ZERO_BALANCE


class ZeroWeightError(CurveError):
    code = ErrorCode.ZERO_WEIGHT


class WeightExceededError(CurveError):
    code = ErrorCode.WEIGHT_EXCEEDED


class SellAmountExceedsSupplyError(CurveError):
    code = ErrorCode.SELL_AMOUNT_EXCEEDS_SUPPLY


class DivisionByZeroError(CurveError):
    code = ErrorCode.DIVISION_BY_ZERO


class UnderflowError(CurveError):
    code = ErrorCode.UNDERFLOW


class FixedPointOverflowError(CurveError):
    """Raised when a result leaves the unsigned 128-bit domain."""

    code = ErrorCode.OVERFLOW


class PrecisionLossError(CurveError):
    """Raised when the scale division discards a non-zero product entirely."""

    code = ErrorCode.PRECISION_LOSS
