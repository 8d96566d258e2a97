from typing import Generator

import pytest

from config import config
from domain.currency import CurrencyInfo
from tests.helpers.ticker_stubs import StubTickerSource


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    for name in ("API_URL_TEMPLATE", "HTTP_TIMEOUT_SECONDS", "DEFAULT_CURRENCY", "LOG_LEVEL"):
        monkeypatch.delenv(f"BTCWATCH_{name}", raising=False)
    config.cache_clear()
    yield
    config.cache_clear()


@pytest.fixture(scope="function")
def stub_source() -> StubTickerSource:
    return StubTickerSource()


@pytest.fixture(scope="function")
def usd() -> CurrencyInfo:
    return CurrencyInfo.from_code("USD")


@pytest.fixture(scope="function")
def eur() -> CurrencyInfo:
    return CurrencyInfo.from_code("EUR")
