from __future__ import annotations

import pytest

from domain.currency import CurrencyInfo, CurrencyValidationError
from domain.rates import RateSet
from services.errors import FetchErrorKind, RateFetchError
from services.rate_cache import CacheEntry, RateCache
from tests.helpers.ticker_stubs import StubTickerSource, ticker_body


def test_same_currency_twice_fetches_once(stub_source: StubTickerSource, usd: CurrencyInfo) -> None:
    stub_source.queue(ticker_body(success=True, buy=634.5, sell=630.1))
    cache = RateCache(stub_source)

    first = cache.get_rates(usd)
    second = cache.get_rates(CurrencyInfo.from_code("usd"))

    assert first is second
    assert stub_source.calls == ["USD"]


def test_distinct_currencies_fetch_each(stub_source: StubTickerSource, usd: CurrencyInfo, eur: CurrencyInfo) -> None:
    stub_source.queue(ticker_body(success=True, buy=634.5, sell=630.1))
    stub_source.queue(ticker_body(success=True, buy=480.0, sell=478.2))
    cache = RateCache(stub_source)

    cache.get_rates(usd)
    eur_rates = cache.get_rates(eur)

    assert stub_source.calls == ["USD", "EUR"]
    assert eur_rates.currency == eur
    assert cache.entry.valid
    assert cache.entry.rates is not None
    assert cache.entry.rates.currency.code == "EUR"


def test_end_to_end_success(stub_source: StubTickerSource, usd: CurrencyInfo) -> None:
    stub_source.queue('{"success":true,"buy":634.5,"sell":630.1}')
    cache = RateCache(stub_source)

    rates = cache.get_rates(usd)

    assert rates == RateSet(buy=634.5, sell=630.1, currency=usd)


def test_transport_failure_keeps_previous_entry(
    stub_source: StubTickerSource, usd: CurrencyInfo, eur: CurrencyInfo
) -> None:
    stub_source.queue(ticker_body(success=True, buy=634.5, sell=630.1))
    stub_source.queue(RateFetchError(FetchErrorKind.TRANSPORT, "Connection refused"))
    cache = RateCache(stub_source)
    usd_rates = cache.get_rates(usd)
    entry_before = cache.entry

    with pytest.raises(RateFetchError) as excinfo:
        cache.get_rates(eur)

    assert excinfo.value.kind is FetchErrorKind.TRANSPORT
    assert cache.entry is entry_before
    assert cache.get_rates(usd) is usd_rates
    assert stub_source.calls == ["USD", "EUR"]


def test_transport_failure_on_first_call_leaves_cache_empty(
    stub_source: StubTickerSource, usd: CurrencyInfo
) -> None:
    stub_source.queue(RateFetchError(FetchErrorKind.TRANSPORT, "Connection refused"))
    cache = RateCache(stub_source)

    with pytest.raises(RateFetchError) as excinfo:
        cache.get_rates(usd)

    assert excinfo.value.kind is FetchErrorKind.TRANSPORT
    assert cache.entry == CacheEntry()


def test_api_failure_is_not_cached_and_retries(stub_source: StubTickerSource, usd: CurrencyInfo) -> None:
    stub_source.queue('{"success":false}')
    stub_source.queue('{"success":true,"buy":634.5,"sell":630.1}')
    cache = RateCache(stub_source)

    with pytest.raises(RateFetchError) as excinfo:
        cache.get_rates(usd)
    assert excinfo.value.kind is FetchErrorKind.API
    assert not cache.entry.valid

    rates = cache.get_rates(usd)

    assert rates.buy == 634.5
    assert stub_source.calls == ["USD", "USD"]


def test_decode_failure_keeps_previous_entry(
    stub_source: StubTickerSource, usd: CurrencyInfo, eur: CurrencyInfo
) -> None:
    stub_source.queue(ticker_body(success=True, buy=634.5, sell=630.1))
    stub_source.queue(ticker_body(success=True, buy=480.0))
    cache = RateCache(stub_source)
    cache.get_rates(usd)

    with pytest.raises(RateFetchError) as excinfo:
        cache.get_rates(eur)

    assert excinfo.value.kind is FetchErrorKind.DECODE
    assert cache.entry.rates is not None
    assert cache.entry.rates.currency == usd


def test_injected_entry_is_served_without_fetch(stub_source: StubTickerSource, usd: CurrencyInfo) -> None:
    seeded = RateSet(buy=1.0, sell=2.0, currency=usd)
    cache = RateCache(stub_source, entry=CacheEntry(rates=seeded, valid=True))

    assert cache.get_rates(usd) is seeded
    assert stub_source.calls == []


def test_invalid_entry_is_refetched(stub_source: StubTickerSource, usd: CurrencyInfo) -> None:
    stale = RateSet(buy=1.0, sell=2.0, currency=usd)
    stub_source.queue(ticker_body(success=True, buy=3.0, sell=4.0))
    cache = RateCache(stub_source, entry=CacheEntry(rates=stale, valid=False))

    assert cache.get_rates(usd).buy == 3.0
    assert stub_source.calls == ["USD"]


def test_custom_decoder_receives_requested_currency(stub_source: StubTickerSource, eur: CurrencyInfo) -> None:
    seen: list[tuple[str, CurrencyInfo]] = []

    def decoder(body: str, currency: CurrencyInfo) -> RateSet:
        seen.append((body, currency))
        return RateSet(buy=5.0, sell=4.0, currency=currency)

    stub_source.queue("raw")
    cache = RateCache(stub_source, decoder=decoder)

    cache.get_rates(eur)

    assert seen == [("raw", eur)]


def test_unnormalized_code_never_reaches_source(stub_source: StubTickerSource) -> None:
    cache = RateCache(stub_source)

    with pytest.raises(CurrencyValidationError):
        cache.get_rates(CurrencyInfo(code="toolong"))

    assert stub_source.calls == []
    assert cache.entry == CacheEntry()
