"""Domain types for btcwatch.

Immutable value objects describing currencies and the buy/sell rate sets
fetched for them. They carry no I/O so the services can be tested with stubs.
"""

__all__ = [
    "currency",
    "rates",
]
