"""
Curve parameters and the four entry points used by the token layer.

`CurveParameters` is created once at deployment and passed explicitly into
every call; nothing here reads ambient state. Each entry point reads the
parameters once and treats them as immutable for the rest of the call.

When the supply is zero there is no curve to delegate to, so minting uses a
closed-form bootstrap in curve precision (1e18):

    price(k)  = m * k ** (1 / cw) / (1 / cw)
    tokens(p) = (p * (1 / cw) / m) ** cw

with `cw = reserve_ratio / MAX_WEIGHT` and `m = slope / SLOPE_SCALE`.
Otherwise every quantity is derived from the purchase/sale relations in
formula precision (1e9). In the fractional mode each entry point rounds in the
reserve's favour: prices and burn amounts up, minted amounts and refunds down.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..state.types import Amount
from .fixed_point import CURVE_MATH, FORMULA_MATH, U64_MAX, require_u128
from .formulas import MAX_WEIGHT, purchase_return, sale_return, validate_curve, validate_weight
from .power import PowerMode, pow_integer_exponent, pow_ratio

SLOPE_SCALE = 1_000_000

DEFAULT_SLOPE = 1_000_000
DEFAULT_RESERVE_RATIO = 50_000


@dataclass(frozen=True)
class CurveParameters:
    slope: int = DEFAULT_SLOPE
    reserve_ratio: int = DEFAULT_RESERVE_RATIO
    power_mode: PowerMode = PowerMode.INTEGER_EXPONENT

    def __post_init__(self) -> None:
        for name, v in (("slope", self.slope), ("reserve_ratio", self.reserve_ratio)):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
        if not (1 <= self.slope <= U64_MAX):
            raise ValueError(f"slope must be in [1, {U64_MAX}]: {self.slope}")
        validate_weight(self.reserve_ratio)
        if not isinstance(self.power_mode, PowerMode):
            raise TypeError("power_mode must be a PowerMode")


def _inverse_weight(params: CurveParameters) -> int:
    # 1 / cw in curve precision
    return MAX_WEIGHT * CURVE_MATH.scale // params.reserve_ratio


def _slope(params: CurveParameters) -> int:
    return CURVE_MATH.div(params.slope, SLOPE_SCALE)


def _exact(params: CurveParameters) -> bool:
    return params.power_mode is PowerMode.INTEGER_EXPONENT


def price_for_minting(params: CurveParameters, balance: Amount, supply: Amount, amount: Amount) -> Amount:
    """
    Payment required to mint `amount` tokens.

    With a live supply this runs the sale relation in reverse: if burning
    `amount` out of `supply + amount` would refund `b'`, then minting it costs
    `b' * balance / (balance - b')`. The fractional mode evaluates the same
    quantity as `balance * ((supply + amount) / supply) ** (1 / cw) - balance`,
    rounded up.
    """
    require_u128("balance", balance)
    require_u128("supply", supply)
    require_u128("amount", amount)

    if supply == 0:
        fp = CURVE_MATH
        w_inv = _inverse_weight(params)
        if _exact(params):
            r = pow_integer_exponent(amount, w_inv, fp=fp)
            return fp.div(fp.mul(r, _slope(params)), w_inv)
        r = pow_ratio(amount, MAX_WEIGHT, params.reserve_ratio, fp=fp, round_up=True)
        return fp.div_up(fp.mul_up(r, fp.div_up(params.slope, SLOPE_SCALE)), w_inv)

    fp = FORMULA_MATH
    if _exact(params):
        refund = sale_return(fp.add(supply, amount), balance, params.reserve_ratio, amount)
        return fp.mul(refund, fp.div(balance, fp.sub(balance, refund)))

    validate_curve(supply, balance, params.reserve_ratio)
    base = fp.div_up(fp.add(supply, amount), supply)
    r = pow_ratio(base, MAX_WEIGHT, params.reserve_ratio, fp=fp, round_up=True)
    return fp.sub(fp.mul_up(balance, r), balance)


def minting_amount_from_price(
    params: CurveParameters, balance: Amount, supply: Amount, payment: Amount
) -> Amount:
    """Tokens minted for `payment`; the inverse of `price_for_minting`."""
    require_u128("balance", balance)
    require_u128("supply", supply)
    require_u128("payment", payment)

    if supply == 0:
        if payment == 0:
            return 0
        fp = CURVE_MATH
        w_inv = _inverse_weight(params)
        if _exact(params):
            base = fp.div(fp.mul(payment, w_inv), _slope(params))
            return pow_integer_exponent(base, fp.div(params.reserve_ratio, MAX_WEIGHT), fp=fp)
        base = fp.div(fp.mul_down(payment, w_inv), fp.div_up(params.slope, SLOPE_SCALE))
        return pow_ratio(base, params.reserve_ratio, MAX_WEIGHT, fp=fp, round_up=False)

    return purchase_return(supply, balance, params.reserve_ratio, payment, power_mode=params.power_mode)


def refund_for_burning(params: CurveParameters, balance: Amount, supply: Amount, amount: Amount) -> Amount:
    """
    Reserve refunded for burning `amount` tokens.

    Burning the whole supply refunds the whole balance; an empty supply or
    balance is rejected first.
    """
    return sale_return(supply, balance, params.reserve_ratio, amount, power_mode=params.power_mode)


def burning_amount_from_refund(
    params: CurveParameters, balance: Amount, supply: Amount, payment: Amount
) -> Amount:
    """
    Tokens to burn for a refund of `payment`; the inverse of `refund_for_burning`.

    Buying back with `payment` into the post-burn reserve `balance - payment`
    yields `t = s * (1 - y) / y`, where `y` is the post-burn supply fraction;
    the burn amount `s * (1 - y)` is then `t * s / (s + t)`. The fractional
    mode computes `s * (1 - y)` directly, rounded up.
    """
    validate_curve(supply, balance, params.reserve_ratio)
    require_u128("payment", payment)

    if payment == balance:
        return supply

    fp = FORMULA_MATH
    remaining = fp.sub(balance, payment)
    if _exact(params):
        minted = purchase_return(supply, remaining, params.reserve_ratio, payment)
        return fp.mul(minted, fp.div(supply, fp.add(supply, minted)))

    r = pow_ratio(fp.div(remaining, balance), params.reserve_ratio, MAX_WEIGHT, fp=fp, round_up=False)
    return fp.sub(supply, fp.mul_down(supply, r))
