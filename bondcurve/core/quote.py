"""Dispatch-table quote engine over the four curve entry points.

``quote(params, request)`` is the single entry point for the token layer. It:

1. Validates the request's parameter domains.
2. Dispatches to the handler for ``request.kind``.
3. Applies the fee on the payment side of the quote.
4. Returns a ``QuoteResult`` (accepted, or rejected with the fault code).

A rejected quote carries no amounts; the caller must not mint, burn or
transfer anything for it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Callable

import structlog

from ..state.types import Amount
from .curve import (
    CurveParameters,
    burning_amount_from_refund,
    minting_amount_from_price,
    price_for_minting,
    refund_for_burning,
)
from .errors import CurveError
from .fixed_point import FORMULA_MATH, U128_MAX, require_u128

logger = structlog.get_logger()

BPS_DENOM = 10_000


@unique
class QuoteKind(Enum):
    MINT_PRICE = "mint_price"      # amount = tokens to mint -> payment owed
    MINT_AMOUNT = "mint_amount"    # amount = payment -> tokens minted
    BURN_REFUND = "burn_refund"    # amount = tokens to burn -> payment refunded
    BURN_AMOUNT = "burn_amount"    # amount = gross refund -> tokens to burn


@dataclass(frozen=True)
class QuoteRequest:
    kind: QuoteKind
    balance: Amount
    supply: Amount
    amount: Amount
    fee_bps: int = 0


@dataclass(frozen=True)
class QuoteResult:
    """
    Outcome of one quote.

    `gross` and `fee` are in payment units. `amount` is what the caller
    applies: payment owed (MINT_PRICE), tokens minted (MINT_AMOUNT), payment
    refunded net of fee (BURN_REFUND) or tokens burned (BURN_AMOUNT).
    """

    ok: bool
    amount: Amount = 0
    gross: Amount = 0
    fee: Amount = 0
    error: str | None = None
    code: str | None = None


def compute_fee(*, gross: Amount, fee_bps: int) -> Amount:
    """
    Compute `fee = ceil(gross * fee_bps / 10_000)`.
    """
    require_u128("gross", gross)
    if not isinstance(fee_bps, int) or isinstance(fee_bps, bool):
        raise TypeError("fee_bps must be an int")
    if not (0 <= fee_bps <= BPS_DENOM):
        raise ValueError(f"fee_bps must be in [0, {BPS_DENOM}]")
    return (gross * fee_bps + BPS_DENOM - 1) // BPS_DENOM


# -- Handlers: (params, request) -> (amount, gross, fee) ---------------------

def _mint_price(params: CurveParameters, req: QuoteRequest) -> tuple[Amount, Amount, Amount]:
    gross = price_for_minting(params, req.balance, req.supply, req.amount)
    fee = compute_fee(gross=gross, fee_bps=req.fee_bps)
    return FORMULA_MATH.add(gross, fee), gross, fee


def _mint_amount(params: CurveParameters, req: QuoteRequest) -> tuple[Amount, Amount, Amount]:
    fee = compute_fee(gross=req.amount, fee_bps=req.fee_bps)
    tokens = minting_amount_from_price(params, req.balance, req.supply, req.amount - fee)
    return tokens, req.amount, fee


def _burn_refund(params: CurveParameters, req: QuoteRequest) -> tuple[Amount, Amount, Amount]:
    gross = refund_for_burning(params, req.balance, req.supply, req.amount)
    fee = compute_fee(gross=gross, fee_bps=req.fee_bps)
    return gross - fee, gross, fee


def _burn_amount(params: CurveParameters, req: QuoteRequest) -> tuple[Amount, Amount, Amount]:
    tokens = burning_amount_from_refund(params, req.balance, req.supply, req.amount)
    fee = compute_fee(gross=req.amount, fee_bps=req.fee_bps)
    return tokens, req.amount, fee


HandlerFn = Callable[[CurveParameters, QuoteRequest], tuple[Amount, Amount, Amount]]

_DISPATCH: dict[QuoteKind, HandlerFn] = {
    QuoteKind.MINT_PRICE: _mint_price,
    QuoteKind.MINT_AMOUNT: _mint_amount,
    QuoteKind.BURN_REFUND: _burn_refund,
    QuoteKind.BURN_AMOUNT: _burn_amount,
}


_REQUEST_BOUNDS: list[tuple[str, int, int]] = [
    ("balance", 0, U128_MAX),
    ("supply", 0, U128_MAX),
    ("amount", 0, U128_MAX),
    ("fee_bps", 0, BPS_DENOM),
]


def _validate_request(request: QuoteRequest) -> str | None:
    """Check request domains. Returns rejection reason or None."""
    for field, lo, hi in _REQUEST_BOUNDS:
        val = getattr(request, field)
        if not isinstance(val, int) or isinstance(val, bool) or val < lo or val > hi:
            return f"param_domain:{field}"
    return None


def _run(params: CurveParameters, request: QuoteRequest) -> QuoteResult:
    handler = _DISPATCH.get(request.kind)
    if handler is None:
        raise ValueError(f"unknown_kind:{request.kind}")
    domain_err = _validate_request(request)
    if domain_err is not None:
        raise ValueError(domain_err)
    amount, gross, fee = handler(params, request)
    return QuoteResult(ok=True, amount=amount, gross=gross, fee=fee)


def quote(params: CurveParameters, request: QuoteRequest) -> QuoteResult:
    """Quote one mint/burn request.

    Returns ``QuoteResult`` with ``ok=True`` on success, or ``ok=False`` with
    an ``error`` string and, for curve faults, the fault ``code``.
    """
    if request.kind not in _DISPATCH:
        return QuoteResult(ok=False, error=f"unknown_kind:{request.kind}")
    domain_err = _validate_request(request)
    if domain_err is not None:
        logger.warning("curve_quote_rejected", kind=request.kind.value, error=domain_err)
        return QuoteResult(ok=False, error=domain_err)

    try:
        result = _run(params, request)
    except CurveError as exc:
        logger.warning(
            "curve_quote_rejected",
            kind=request.kind.value,
            code=exc.code.value,
            error=str(exc),
        )
        return QuoteResult(ok=False, error=str(exc), code=exc.code.value)

    logger.debug(
        "curve_quote",
        kind=request.kind.value,
        balance=request.balance,
        supply=request.supply,
        amount=request.amount,
        result=result.amount,
        fee=result.fee,
    )
    return result


def quote_or_raise(params: CurveParameters, request: QuoteRequest) -> QuoteResult:
    """Like ``quote()`` but raises on rejection instead of returning a result.

    Raises:
        CurveError: Any precondition or arithmetic fault from the curve.
        ValueError: Unknown kind or a request field outside its domain.
    """
    return _run(params, request)
