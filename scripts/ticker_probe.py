# flake8: noqa E402
# Run via uv so project deps are loaded, e.g.:
# uv run scripts/ticker_probe.py --currency USD --currency USD --currency EUR
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure the src directory is importable when the script is invoked via uv/python directly.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from config import config
from domain.currency import CurrencyInfo
from services.errors import RateFetchError
from services.rate_cache import RateCache
from services.ticker_transport import TickerTransport


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Probe RateCache reuse against the live ticker endpoint.")
    parser.add_argument(
        "--currency",
        action="append",
        dest="currencies",
        help="Currency to query. Can be repeated; defaults to USD, USD, EUR.",
    )
    parser.add_argument("--url-template", default=None, help="Override the configured ticker URL template.")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging.")
    return parser.parse_args()


class CountingTickerTransport(TickerTransport):
    def __init__(self, *args, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(*args, **kwargs)
        self.fetch_count = 0

    def fetch(self, currency_code: str) -> str:
        self.fetch_count += 1
        print(f"[transport] fetch #{self.fetch_count} for {currency_code} -> {self.build_url(currency_code)}")
        return super().fetch(currency_code)


def main() -> None:
    args = parse_args()
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    settings = config()
    transport = CountingTickerTransport(
        url_template=args.url_template or settings.api_url_template,
        timeout=settings.http_timeout_seconds,
    )
    cache = RateCache(transport)

    currencies = args.currencies or ["USD", "USD", "EUR"]
    try:
        for idx, raw in enumerate(currencies, start=1):
            currency = CurrencyInfo.from_code(raw)
            before = transport.fetch_count
            try:
                rates = cache.get_rates(currency)
            except RateFetchError as exc:
                print(f"[request {idx}] {currency.code} => {exc.kind}: {exc}")
                continue
            status = "cache-hit" if transport.fetch_count == before else "fetched"
            print(f"[request {idx}] {currency.code} => buy {rates.buy} sell {rates.sell} ({status})")
    finally:
        transport.close()


if __name__ == "__main__":
    main()
