"""Concrete rate providers and factory.

'static' always answers with the configured fallback rate (offline / tests);
'external-http' asks open.er-api.com for the latest USD table.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict

from hedge_tracker.core.config import Settings
from hedge_tracker.services.http_client import get_json, HttpError
from .base import RateProvider, RateUnavailable

logger = logging.getLogger("hedge_tracker.rates.providers")


class StaticRateProvider(RateProvider):
    def __init__(self, rate: float):
        if rate <= 0:
            raise ValueError("static rate must be positive")
        self._rate = rate

    def get_usd_inr(self) -> float:  # type: ignore[override]
        return self._rate


class ExternalHTTPRateProvider(RateProvider):
    def __init__(self, url: str, api_key: str = "", timeout: float = 5.0):
        self._url = url
        self._api_key = api_key
        self._timeout = timeout

    def get_usd_inr(self) -> float:  # type: ignore[override]
        params = {"apikey": self._api_key} if self._api_key else None
        try:
            data = get_json(self._url, params=params, timeout=self._timeout, retries=1)
        except HttpError as e:
            raise RateUnavailable(str(e)) from e
        rates = data.get("rates") if isinstance(data, dict) else None
        if not isinstance(rates, dict):
            raise RateUnavailable("response has no rates table")
        value = rates.get(self.quote_currency)
        try:
            rate = float(value)
        except (TypeError, ValueError) as e:
            raise RateUnavailable(f"no {self.quote_currency} rate in response") from e
        if not math.isfinite(rate) or rate <= 0:
            raise RateUnavailable(f"unusable {self.quote_currency} rate {rate}")
        logger.debug("fetched USD/INR rate %s", rate)
        return rate


_PROVIDER_REGISTRY: Dict[str, Callable[[Settings], RateProvider]] = {
    "static": lambda s: StaticRateProvider(s.fallback_usd_inr_rate),
    "external-http": lambda s: ExternalHTTPRateProvider(
        str(s.exchange_rate_api_url),
        api_key=s.exchange_rate_api_key,
        timeout=s.http_timeout_seconds,
    ),
}


def make_rate_provider(settings: Settings) -> RateProvider:
    factory = _PROVIDER_REGISTRY.get(settings.exchange_rate_provider)
    if not factory:
        raise ValueError(
            f"Unknown rate provider kind '{settings.exchange_rate_provider}'"
        )
    return factory(settings)
