from __future__ import annotations

from dataclasses import dataclass

from .currency import CurrencyInfo


@dataclass(frozen=True)
class RateSet:
    """Buy/sell price pair for one currency, as reported by a successful ticker fetch."""

    buy: float
    sell: float
    currency: CurrencyInfo

    def __post_init__(self) -> None:
        if self.buy < 0 or self.sell < 0:
            msg = f"rates must be non-negative, got buy={self.buy} sell={self.sell}"
            raise ValueError(msg)


__all__ = ["RateSet"]
