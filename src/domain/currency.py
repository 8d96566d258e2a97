from __future__ import annotations

from dataclasses import dataclass

# Display symbols for the currencies the ticker API quotes. Codes missing from
# this table are still valid; they are shown by code only.
CURRENCY_SIGNS: dict[str, str] = {
    "AUD": "$",
    "CAD": "$",
    "CHF": "Fr.",
    "CNY": "¥",
    "CZK": "Kč",
    "DKK": "kr",
    "EUR": "€",
    "GBP": "£",
    "HKD": "$",
    "JPY": "¥",
    "NOK": "kr",
    "NZD": "$",
    "PLN": "zł",
    "RUB": "р.",
    "SEK": "kr",
    "SGD": "$",
    "THB": "฿",
    "USD": "$",
}

CURRENCY_CODE_LENGTH = 3


class CurrencyValidationError(ValueError):
    def __init__(self, message: str, *, raw_code: str) -> None:
        super().__init__(message)
        self.raw_code = raw_code

    @classmethod
    def for_code(cls, raw_code: str) -> CurrencyValidationError:
        msg = f"invalid currency code {raw_code!r}: expected {CURRENCY_CODE_LENGTH} letters, e.g. USD"
        return cls(msg, raw_code=raw_code)


def _is_normalized_code(code: str) -> bool:
    return len(code) == CURRENCY_CODE_LENGTH and code.isascii() and code.isalpha() and code.isupper()


@dataclass(frozen=True)
class CurrencyInfo:
    """Currency a rate set is requested in and denominated in.

    ``code`` is always three upper-case ASCII letters; anything else is
    rejected on construction.
    """

    code: str
    sign: str = ""

    def __post_init__(self) -> None:
        if not _is_normalized_code(self.code):
            raise CurrencyValidationError.for_code(self.code)

    @classmethod
    def from_code(cls, raw_code: str) -> CurrencyInfo:
        code = raw_code.strip().upper()
        if not _is_normalized_code(code):
            raise CurrencyValidationError.for_code(raw_code)
        return cls(code=code, sign=CURRENCY_SIGNS.get(code, ""))

    @property
    def display_sign(self) -> str:
        return self.sign or self.code

    def matches(self, other: CurrencyInfo) -> bool:
        return self.code == other.code


__all__ = ["CURRENCY_SIGNS", "CurrencyInfo", "CurrencyValidationError"]
