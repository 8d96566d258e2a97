from __future__ import annotations

import logging
from functools import cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL_TEMPLATE = "https://data.mtgox.com/api/2/BTC{currency}/money/ticker_fast"


class AppSettings(BaseSettings):
    api_url_template: str = DEFAULT_API_URL_TEMPLATE
    http_timeout_seconds: float = 10.0
    default_currency: str = "USD"
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="BTCWATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("http_timeout_seconds")
    @classmethod
    def _timeout_must_be_positive(cls, value: float) -> float:
        if value <= 0:
            msg = "http_timeout_seconds must be > 0"
            raise ValueError(msg)
        return value

    @field_validator("api_url_template")
    @classmethod
    def _template_needs_placeholder(cls, value: str) -> str:
        if "{currency}" not in value:
            msg = "api_url_template must contain a {currency} placeholder"
            raise ValueError(msg)
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"log_level must be a logging level name, got {value!r}"
            raise ValueError(msg)
        return level


@cache
def config() -> AppSettings:
    return AppSettings()
