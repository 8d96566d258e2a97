from __future__ import annotations

import logging
from typing import Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

from config import DEFAULT_API_URL_TEMPLATE

from .errors import FetchErrorKind, RateFetchError

logger = logging.getLogger(__name__)


class TickerSource(Protocol):
    def fetch(self, currency_code: str) -> str: ...


class TickerTransport(TickerSource):
    """Single-shot HTTP client for the BTC ticker endpoint.

    Returns the raw response body; parsing is left to the decoder.
    """

    def __init__(
        self,
        url_template: str = DEFAULT_API_URL_TEMPLATE,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        if "{currency}" not in url_template:
            msg = "url_template must contain a {currency} placeholder"
            raise ValueError(msg)
        if timeout <= 0:
            msg = "timeout must be > 0"
            raise ValueError(msg)

        self.url_template = url_template
        self.timeout = timeout
        self._session = session or requests.Session()

        # one attempt per fetch, retry policy belongs to the caller
        adapter = HTTPAdapter(max_retries=Retry(total=0, raise_on_status=False))
        self._session.mount("https://", adapter)
        self._session.mount("http://", adapter)

    def build_url(self, currency_code: str) -> str:
        # plain substitution, other braces in the template are left alone
        return self.url_template.replace("{currency}", currency_code)

    def fetch(self, currency_code: str) -> str:
        url = self.build_url(currency_code)
        logger.debug("GET %s (timeout %.1fs)", url, self.timeout)
        try:
            response = self._session.request("GET", url, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as exc:
            resp = exc.response
            status_code = getattr(resp, "status_code", None)
            message = f"ticker request failed with HTTP {status_code}" if status_code else "ticker request failed"
            raise RateFetchError(
                FetchErrorKind.TRANSPORT,
                message,
                status_code=status_code,
                payload=getattr(resp, "text", None),
            ) from exc
        except requests.Timeout as exc:
            msg = f"ticker request timed out after {self.timeout:g}s"
            raise RateFetchError(FetchErrorKind.TRANSPORT, msg) from exc
        except requests.RequestException as exc:
            raise RateFetchError(FetchErrorKind.TRANSPORT, f"ticker request failed: {exc}") from exc

        return response.text

    def close(self) -> None:
        self._session.close()


__all__ = ["TickerSource", "TickerTransport"]
