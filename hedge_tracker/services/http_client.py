"""Lightweight HTTP client util with retry.

Uses stdlib urllib; the only outbound call is the exchange-rate lookup, a
single GET returning JSON.
"""

from __future__ import annotations

import json
import logging
import time
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger("hedge_tracker.http")


class HttpError(Exception):
    pass


def build_url(url: str, params: Optional[Mapping[str, str]] = None) -> str:
    if not params:
        return url
    sep = "&" if urllib.parse.urlparse(url).query else "?"
    return f"{url}{sep}{urllib.parse.urlencode(params)}"


def get_json(
    url: str,
    *,
    params: Optional[Mapping[str, str]] = None,
    timeout: float = 5.0,
    retries: int = 2,
    backoff: float = 0.5,
) -> Dict[str, Any]:
    full_url = build_url(url, params)
    last_err: Optional[Exception] = None
    for attempt in range(retries + 1):
        try:
            with urllib.request.urlopen(full_url, timeout=timeout) as resp:  # nosec B310
                if resp.status >= 400:
                    raise HttpError(f"HTTP {resp.status} for {url}")
                data = json.loads(resp.read().decode("utf-8"))
                if not isinstance(data, dict):
                    raise HttpError(f"unexpected JSON payload from {url}")
                return data
        except (
            urllib.error.URLError,
            TimeoutError,
            HttpError,
            ValueError,
        ) as e:  # ValueError for JSON decode
            last_err = e
            logger.debug("GET %s failed (attempt %d): %s", url, attempt + 1, e)
            if attempt == retries:
                break
            time.sleep(backoff * (2**attempt))
    raise HttpError(f"Failed to fetch JSON from {url}: {last_err}")
