from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Callable, Sequence

from pydantic import ValidationError

from config import AppSettings, config
from domain.currency import CurrencyInfo, CurrencyValidationError
from domain.rates import RateSet
from services.errors import RateFetchError
from services.rate_cache import RateCache
from services.ticker_transport import TickerTransport
from utils.formatting import render_all, render_buy, render_ping, render_sell

BTCWATCH_VERSION = "0.1.0"

VERSION_TEXT = f"""\
%(prog)s {BTCWATCH_VERSION}
License LGPLv3+: GNU LGPL version 3 or later <https://gnu.org/licenses/lgpl.html>
This is free software: you are free to change and redistribute it.
There is NO WARRANTY, to the extent permitted by law."""

ACTIONS_DEST = "actions"

Renderer = Callable[..., list[str]]

_RENDERERS: dict[str, Renderer] = {
    "all": render_all,
    "buy": render_buy,
    "sell": render_sell,
}

logger = logging.getLogger(__name__)


class _OrderedAction(argparse.Action):
    """Records -c and -v in the same ordered list as the query options."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        actions = list(getattr(namespace, ACTIONS_DEST, None) or [])
        actions.append((self.const, values))
        setattr(namespace, ACTIONS_DEST, actions)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="btcwatch",
        description="Get Bitcoin trade information.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("-h", "-?", "--help", action="help", help="print this help")
    parser.add_argument("-V", "--version", action="version", version=VERSION_TEXT, help="print version number")
    parser.add_argument(
        "-a", "--all", dest=ACTIONS_DEST, action="append_const", const=("all", None), help="equivalent to -pbs"
    )
    parser.add_argument("-b", "--buy", dest=ACTIONS_DEST, action="append_const", const=("buy", None), help="print buy price")
    parser.add_argument(
        "-c",
        "--currency",
        dest=ACTIONS_DEST,
        action=_OrderedAction,
        const="currency",
        metavar="CURRENCY",
        help="set conversion currency for the options that follow",
    )
    parser.add_argument(
        "-p",
        "--ping",
        dest=ACTIONS_DEST,
        action="append_const",
        const=("ping", None),
        help="check for a successful JSON response",
    )
    parser.add_argument(
        "-s", "--sell", dest=ACTIONS_DEST, action="append_const", const=("sell", None), help="print sell price"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        dest=ACTIONS_DEST,
        action=_OrderedAction,
        const="verbose",
        nargs=0,
        help="increase verbosity for the options that follow",
    )
    return parser


Step = tuple[str, CurrencyInfo, bool]


def resolve_steps(actions: Sequence[tuple[str, Any]], default_currency: str) -> list[Step]:
    """Pair every query option with the currency and verbosity in effect at its position.

    All currency codes are validated here, before anything touches the network.
    """
    currency = CurrencyInfo.from_code(default_currency)
    verbose = False
    steps: list[Step] = []
    for name, value in actions:
        if name == "currency":
            currency = CurrencyInfo.from_code(value or "")
            continue
        if name == "verbose":
            verbose = True
            continue
        steps.append((name, currency, verbose))

    # no query option given: show the full summary for the selected currency
    if not steps:
        steps.append(("summary", currency, True))
    return steps


def render_step(name: str, rates: RateSet, *, verbose: bool) -> list[str]:
    if name == "summary":
        return render_all(rates, verbose=True)
    if name == "ping":
        return render_ping(verbose=verbose)
    return _RENDERERS[name](rates, verbose=verbose)


def run(steps: Sequence[Step], cache: RateCache) -> None:
    for name, currency, verbose in steps:
        rates = cache.get_rates(currency)
        for line in render_step(name, rates, verbose=verbose):
            print(line)


def build_transport(settings: AppSettings) -> TickerTransport:
    return TickerTransport(url_template=settings.api_url_template, timeout=settings.http_timeout_seconds)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = config()
    except ValidationError as exc:
        print(f"{parser.prog}: invalid settings: {exc}", file=sys.stderr)
        return 1
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    try:
        steps = resolve_steps(args.actions or [], settings.default_currency)
    except CurrencyValidationError as exc:
        print(f"{parser.prog}: {exc}", file=sys.stderr)
        return 1

    transport = build_transport(settings)
    try:
        run(steps, RateCache(transport))
    except RateFetchError as exc:
        logger.debug("Aborting after %s error", exc.kind)
        print(f"{parser.prog}: {exc}", file=sys.stderr)
        return 1
    finally:
        transport.close()
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
