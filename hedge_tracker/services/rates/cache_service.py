"""USD->INR rate cache service.

Purpose:
    Resolve the exchange rate handed to the metrics calculator once per
    request, without hitting the upstream API on every create/update.

Design:
    - Wraps a RateProvider selected via settings.exchange_rate_provider.
    - Keeps the last fetched rate for settings.rates_cache_ttl_seconds.
    - Provider failure -> log a warning and use settings.fallback_usd_inr_rate.
      The fallback is cached for a shorter window so the upstream is retried
      soon after it recovers.
    - A manual override (with its own expiry) wins over everything, for when
      the upstream is down for longer and the fallback is too stale.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from hedge_tracker.core.config import Settings
from .base import RateProvider, RateUnavailable
from .providers import make_rate_provider

FALLBACK_RETRY_SECONDS = 300


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class _CacheEntry:
    rate: float
    expires_at: datetime
    source: str


@dataclass
class _OverrideEntry:
    rate: float
    expires_at: datetime


@dataclass(frozen=True)
class RateQuote:
    rate: float
    source: str  # 'override' | 'cache' | 'provider' | 'fallback'


class RateCacheService:
    """Cached USD->INR rate with TTL-bound entries and a manual override."""

    def __init__(
        self,
        provider: RateProvider,
        *,
        fallback_rate: float,
        ttl_seconds: int,
    ):
        if fallback_rate <= 0:
            raise ValueError("fallback rate must be positive")
        self._provider = provider
        self._fallback = fallback_rate
        self._ttl = timedelta(seconds=ttl_seconds)
        self._fallback_ttl = timedelta(seconds=min(ttl_seconds, FALLBACK_RETRY_SECONDS))
        self._cache: Optional[_CacheEntry] = None
        self._override: Optional[_OverrideEntry] = None
        self._logger = logging.getLogger("hedge_tracker.rates")

    @classmethod
    def from_settings(cls, settings: Settings) -> "RateCacheService":
        return cls(
            make_rate_provider(settings),
            fallback_rate=settings.fallback_usd_inr_rate,
            ttl_seconds=settings.rates_cache_ttl_seconds,
        )

    # Internal --------------------------------------------------
    def _refresh(self) -> RateQuote:
        now = _utcnow()
        try:
            rate = self._provider.get_usd_inr()
            source, ttl = "provider", self._ttl
        except RateUnavailable as e:
            self._logger.warning(
                "exchange rate unavailable, using fallback %s: %s", self._fallback, e
            )
            rate, source, ttl = self._fallback, "fallback", self._fallback_ttl
        self._cache = _CacheEntry(rate=rate, expires_at=now + ttl, source=source)
        return RateQuote(rate=rate, source=source)

    def _active_override(self) -> Optional[_OverrideEntry]:
        if self._override and self._override.expires_at <= _utcnow():
            self._override = None
        return self._override

    # Public API -----------------------------------------------
    def quote(self) -> RateQuote:
        ov = self._active_override()
        if ov:
            return RateQuote(rate=ov.rate, source="override")
        entry = self._cache
        if entry and _utcnow() < entry.expires_at:
            return RateQuote(
                rate=entry.rate,
                source="fallback" if entry.source == "fallback" else "cache",
            )
        return self._refresh()

    def get_rate(self) -> float:
        return self.quote().rate

    def invalidate(self) -> None:
        self._cache = None

    # Manual override ------------------------------------------
    def set_override(self, rate: float, ttl_seconds: int) -> None:
        if rate <= 0:
            raise ValueError("override rate must be positive")
        if ttl_seconds <= 0:
            raise ValueError("override ttl must be positive seconds")
        self._override = _OverrideEntry(
            rate=rate, expires_at=_utcnow() + timedelta(seconds=ttl_seconds)
        )
        self._logger.info("USD/INR override set to %s for %ss", rate, ttl_seconds)

    def clear_override(self) -> bool:
        removed = self._override is not None
        self._override = None
        return removed

    def get_override(self) -> Optional[Dict[str, str | float]]:
        ov = self._active_override()
        if ov is None:
            return None
        return {"rate": ov.rate, "expires_at": ov.expires_at.isoformat()}
