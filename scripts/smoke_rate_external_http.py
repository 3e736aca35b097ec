"""Smoke script for the external-http rate provider.

Resolves the USD->INR rate via open.er-api.com (or the fallback when offline)
and shows which source answered on the first and second lookups.
"""

from pprint import pprint

from hedge_tracker.core.config import Settings
from hedge_tracker.services.rates.cache_service import RateCacheService


def run():
    settings = Settings(exchange_rate_provider="external-http", jwt_secret="smoke")
    svc = RateCacheService.from_settings(settings)
    first = svc.quote()
    second = svc.quote()
    pprint({"first": first, "second": second})


if __name__ == "__main__":
    run()
