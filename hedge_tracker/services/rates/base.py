"""Rate provider abstraction.

A provider answers one question: how many INR is 1 USD right now. Providers
raise RateUnavailable on failure; substituting the configured fallback is the
cache service's job, so callers never see an upstream error.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class RateUnavailable(Exception):
    pass


class RateProvider(ABC):
    base_currency: str = "USD"
    quote_currency: str = "INR"

    @abstractmethod
    def get_usd_inr(self) -> float:
        """Return INR per 1 USD."""
        raise NotImplementedError
