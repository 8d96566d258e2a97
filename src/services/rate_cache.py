from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from domain.currency import CurrencyInfo
from domain.rates import RateSet

from .errors import RateFetchError
from .ticker_decoder import decode_ticker
from .ticker_transport import TickerSource

logger = logging.getLogger(__name__)

TickerDecoder = Callable[[str, CurrencyInfo], RateSet]


@dataclass(frozen=True)
class CacheEntry:
    rates: RateSet | None = None
    valid: bool = False

    def lookup(self, currency: CurrencyInfo) -> RateSet | None:
        if self.valid and self.rates is not None and self.rates.currency.matches(currency):
            return self.rates
        return None


class RateCache:
    """Serves the latest rate set for a currency, fetching only when the cached one does not apply.

    The entry is replaced as a whole on success; any fetch or decode failure
    propagates and leaves it untouched.
    """

    def __init__(
        self,
        source: TickerSource,
        *,
        decoder: TickerDecoder = decode_ticker,
        entry: CacheEntry | None = None,
    ) -> None:
        self.source = source
        self.decoder = decoder
        self._entry = entry or CacheEntry()

    @property
    def entry(self) -> CacheEntry:
        return self._entry

    def get_rates(self, currency: CurrencyInfo) -> RateSet:
        cached = self._entry.lookup(currency)
        if cached is not None:
            logger.debug("Cache hit for %s", currency.code)
            return cached

        logger.debug("Fetching ticker for %s", currency.code)
        try:
            body = self.source.fetch(currency.code)
            rates = self.decoder(body, currency)
        except RateFetchError as exc:
            logger.warning("Ticker fetch for %s failed (%s): %s", currency.code, exc.kind, exc)
            raise

        self._entry = CacheEntry(rates=rates, valid=True)
        return rates


__all__ = ["CacheEntry", "RateCache", "TickerDecoder"]
