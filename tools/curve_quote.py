#!/usr/bin/env python3

from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from pathlib import Path
from typing import Sequence

import structlog

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bondcurve.core.power import PowerMode
from bondcurve.core.quote import QuoteKind, QuoteRequest, quote
from bondcurve.state.config import (
    curve_parameters_to_dict,
    default_curve_parameters,
    load_curve_parameters,
)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Offline bonding-curve quote (mint/burn) with fee")
    ap.add_argument("--kind", required=True, choices=[k.value for k in QuoteKind])
    ap.add_argument("--balance", type=int, required=True)
    ap.add_argument("--supply", type=int, required=True)
    ap.add_argument("--amount", type=int, required=True)
    ap.add_argument("--fee-bps", type=int, default=0)
    ap.add_argument("--config", type=str, default="", help="curve parameters YAML (default: packaged defaults)")
    ap.add_argument("--fractional", action="store_true", help="evaluate sub-unit exponents")
    return ap.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    # stdout carries the JSON report only
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(file=sys.stderr))

    params = load_curve_parameters(args.config) if args.config else default_curve_parameters()
    if args.fractional:
        params = dataclasses.replace(params, power_mode=PowerMode.FRACTIONAL)

    request = QuoteRequest(
        kind=QuoteKind(args.kind),
        balance=args.balance,
        supply=args.supply,
        amount=args.amount,
        fee_bps=args.fee_bps,
    )
    result = quote(params, request)

    report = {
        "params": curve_parameters_to_dict(params),
        "request": {
            "kind": request.kind.value,
            "balance": request.balance,
            "supply": request.supply,
            "amount": request.amount,
            "fee_bps": request.fee_bps,
        },
        "result": dataclasses.asdict(result),
    }
    print(json.dumps(report, sort_keys=True))
    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
