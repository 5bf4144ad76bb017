"""
Bancor-style purchase/sale return formulas (formula precision, 1e9).

    purchase: tokens  = s * ((1 + p / b) ** (w / MAX_WEIGHT) - 1)
    sale:     payment = b * (1 - (1 - k / s) ** (MAX_WEIGHT / w))

Every sub-step goes through the checked `FORMULA_MATH` operations, so any
overflow or precision fault aborts the whole call. There is no partial result.

Rounding depends on the power mode:
- `INTEGER_EXPONENT`: divisions floor and every multiply is the exact `mul`,
  which rejects a product it would have to truncate.
- `FRACTIONAL`: every step rounds in the reserve's favour. Purchases round
  the minted amount down; sales round the multiplier `r` up so the payout
  rounds down. A mint followed by a burn never pays out more than was paid in.

`w == MAX_WEIGHT` (100% reserve ratio) is the linear curve and never calls the
power function.
"""

from __future__ import annotations

from ..state.types import Amount, Weight
from .errors import (
    SellAmountExceedsSupplyError,
    WeightExceededError,
    ZeroBalanceError,
    ZeroSupplyError,
    ZeroWeightError,
)
from .fixed_point import FORMULA_MATH, require_u128
from .power import PowerMode, pow_integer_exponent, pow_ratio

# Reserve ratio expressed in parts per million.
MAX_WEIGHT = 1_000_000


def validate_weight(weight: Weight) -> None:
    require_u128("weight", weight)
    if weight == 0:
        raise ZeroWeightError("weight must be non-zero")
    if weight > MAX_WEIGHT:
        raise WeightExceededError(f"weight must be <= {MAX_WEIGHT}: {weight}")


def validate_curve(supply: Amount, balance: Amount, weight: Weight) -> None:
    """Shared preconditions: non-zero supply and balance, weight in range."""
    require_u128("supply", supply)
    require_u128("balance", balance)
    if supply == 0:
        raise ZeroSupplyError("supply must be non-zero")
    if balance == 0:
        raise ZeroBalanceError("balance must be non-zero")
    validate_weight(weight)


def purchase_return(
    supply: Amount,
    balance: Amount,
    weight: Weight,
    payment: Amount,
    *,
    power_mode: PowerMode = PowerMode.INTEGER_EXPONENT,
) -> Amount:
    """
    Tokens minted for `payment` against a curve holding `balance` in reserve.

    Args:
        supply: Circulating token supply (non-zero)
        balance: Reserve balance (non-zero)
        weight: Reserve ratio in ppm, `1..MAX_WEIGHT`
        payment: Amount paid in, in reserve units
        power_mode: Power evaluation mode (see `power.py`)

    Returns:
        Tokens to mint (rounded down)

    Raises:
        CurveError: On any precondition or arithmetic fault
    """
    validate_curve(supply, balance, weight)
    require_u128("payment", payment)

    if payment == 0:
        return 0

    fp = FORMULA_MATH
    exact = power_mode is PowerMode.INTEGER_EXPONENT
    mul = fp.mul if exact else fp.mul_down

    if weight == MAX_WEIGHT:
        return mul(supply, fp.div(payment, balance))

    base = fp.div(fp.add(payment, balance), balance)
    if exact:
        r = pow_integer_exponent(base, fp.div(weight, MAX_WEIGHT), fp=fp)
    else:
        r = pow_ratio(base, weight, MAX_WEIGHT, fp=fp, round_up=False)
    return fp.sub(mul(supply, r), supply)


def sale_return(
    supply: Amount,
    balance: Amount,
    weight: Weight,
    sell_amount: Amount,
    *,
    power_mode: PowerMode = PowerMode.INTEGER_EXPONENT,
) -> Amount:
    """
    Reserve paid out for burning `sell_amount` tokens.

    Selling the entire supply returns the entire balance exactly, without
    evaluating the power function.

    Raises:
        SellAmountExceedsSupplyError: If `sell_amount > supply`
        CurveError: On any other precondition or arithmetic fault
    """
    validate_curve(supply, balance, weight)
    require_u128("sell_amount", sell_amount)
    if sell_amount > supply:
        raise SellAmountExceedsSupplyError(
            f"sell_amount ({sell_amount}) exceeds supply ({supply})"
        )

    if sell_amount == 0:
        return 0
    if sell_amount == supply:
        return balance

    fp = FORMULA_MATH

    if power_mode is PowerMode.INTEGER_EXPONENT:
        if weight == MAX_WEIGHT:
            return fp.mul(balance, fp.div(sell_amount, supply))
        base = fp.div(fp.sub(supply, sell_amount), supply)
        r = pow_integer_exponent(base, fp.div(MAX_WEIGHT, weight), fp=fp)
        return fp.sub(balance, fp.mul(balance, r))

    if weight == MAX_WEIGHT:
        return fp.mul_down(balance, fp.div(sell_amount, supply))
    base = fp.div_up(fp.sub(supply, sell_amount), supply)
    r = pow_ratio(base, MAX_WEIGHT, weight, fp=fp, round_up=True)
    return fp.sub(balance, fp.mul_up(balance, r))
