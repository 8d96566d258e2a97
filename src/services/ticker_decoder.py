from __future__ import annotations

import json
import math
from typing import Any

from domain.currency import CurrencyInfo
from domain.rates import RateSet

from .errors import FetchErrorKind, RateFetchError

# Ticker response fields:
#   success  bool, API-level outcome
#   buy      number, purchase price
#   sell     number, sale price
#   error    str, optional reason when success is false ("message" is accepted too)
SUCCESS_FIELD = "success"
BUY_FIELD = "buy"
SELL_FIELD = "sell"
ERROR_FIELDS = ("error", "message")


def decode_ticker(body: str | bytes, currency: CurrencyInfo) -> RateSet:
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise RateFetchError(FetchErrorKind.DECODE, f"ticker returned invalid JSON: {exc}", payload=body) from exc

    if not isinstance(payload, dict):
        raise RateFetchError(FetchErrorKind.DECODE, "ticker returned unexpected payload type", payload=payload)

    success = payload.get(SUCCESS_FIELD)
    if not isinstance(success, bool):
        raise RateFetchError(FetchErrorKind.DECODE, "ticker payload missing success flag", payload=payload)

    if not success:
        raise RateFetchError(FetchErrorKind.API, _api_error_message(payload), payload=payload)

    return RateSet(
        buy=_price(payload, BUY_FIELD),
        sell=_price(payload, SELL_FIELD),
        currency=currency,
    )


def _price(payload: dict[str, Any], field: str) -> float:
    if field not in payload:
        raise RateFetchError(FetchErrorKind.DECODE, f"ticker payload missing {field} price", payload=payload)

    raw = payload[field]
    # bool is an int subclass
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise RateFetchError(FetchErrorKind.DECODE, f"ticker {field} price is not numeric: {raw!r}", payload=payload)

    try:
        value = float(raw)
    except OverflowError as exc:
        msg = f"ticker {field} price out of range: too large for a float"
        raise RateFetchError(FetchErrorKind.DECODE, msg, payload=payload) from exc
    if not math.isfinite(value) or value < 0:
        raise RateFetchError(FetchErrorKind.DECODE, f"ticker {field} price out of range: {raw!r}", payload=payload)
    return value


def _api_error_message(payload: dict[str, Any]) -> str:
    for field in ERROR_FIELDS:
        reason = payload.get(field)
        if isinstance(reason, str) and reason:
            return reason
    return "ticker API reported failure"


__all__ = ["decode_ticker"]
