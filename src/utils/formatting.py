from __future__ import annotations

from domain.currency import CurrencyInfo
from domain.rates import RateSet


def format_price(value: float) -> str:
    # matches C's %f: fixed notation, six decimals
    return f"{value:f}"


def format_rate_line(label: str, value: float, currency: CurrencyInfo, *, verbose: bool) -> str:
    price = format_price(value)
    if not verbose:
        return price
    if currency.sign:
        return f"{label}: {currency.sign} {price} {currency.code}"
    return f"{label}: {price} {currency.code}"


def render_ping(*, verbose: bool) -> list[str]:
    return ["result: success" if verbose else "success"]


def render_buy(rates: RateSet, *, verbose: bool) -> list[str]:
    return [format_rate_line("buy", rates.buy, rates.currency, verbose=verbose)]


def render_sell(rates: RateSet, *, verbose: bool) -> list[str]:
    return [format_rate_line("sell", rates.sell, rates.currency, verbose=verbose)]


def render_all(rates: RateSet, *, verbose: bool) -> list[str]:
    return render_ping(verbose=verbose) + render_buy(rates, verbose=verbose) + render_sell(rates, verbose=verbose)
