from __future__ import annotations

from enum import StrEnum
from typing import Any


class FetchErrorKind(StrEnum):
    TRANSPORT = "TRANSPORT"
    DECODE = "DECODE"
    API = "API"


class RateFetchError(RuntimeError):
    def __init__(
        self,
        kind: FetchErrorKind,
        message: str,
        *,
        status_code: int | None = None,
        payload: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.payload = payload


__all__ = ["FetchErrorKind", "RateFetchError"]
