"""Per-origin admission control for new pastes.

Sliding minute and hour windows per origin key. Buckets live in TTLCaches
so origins that stop posting are evicted and memory stays bounded.

For multi-instance deployments this needs a shared backend (e.g. Redis);
a single process only sees its own submissions.
"""

from __future__ import annotations

import time
from threading import Lock

from cachetools import TTLCache

from pasteq.config import RATE_LIMIT_MAX_ORIGINS, RATE_LIMIT_PASTES_PH, RATE_LIMIT_PASTES_PM
from pasteq.observability.telemetry import counter, log_event
from pasteq.utils.redaction import redact


class PasteRateLimiter:
    """
    Limits paste submissions per origin (default 10/min, 100/hour).

    admit() both checks and records: an admitted call counts against the
    windows, a denied one does not.
    """

    def __init__(
        self,
        pastes_per_minute: int = RATE_LIMIT_PASTES_PM,
        pastes_per_hour: int = RATE_LIMIT_PASTES_PH,
        max_origins: int = RATE_LIMIT_MAX_ORIGINS,
    ) -> None:
        self.pastes_per_minute = pastes_per_minute
        self.pastes_per_hour = pastes_per_hour

        # {origin: [timestamp, ...]}, evicted after ttl seconds of inactivity
        self.minute_buckets: TTLCache[str, list[float]] = TTLCache(maxsize=max_origins, ttl=120)
        self.hour_buckets: TTLCache[str, list[float]] = TTLCache(maxsize=max_origins, ttl=7200)
        self._lock = Lock()

    @staticmethod
    def _clean_old(bucket: list[float], now: float, max_age_seconds: int) -> list[float]:
        return [ts for ts in bucket if now - ts < max_age_seconds]

    def admit(self, origin: str) -> bool:
        """Return True if `origin` may submit now, recording the submission."""
        now = time.time()
        with self._lock:
            minute_bucket = self._clean_old(self.minute_buckets.get(origin, []), now, 60)
            hour_bucket = self._clean_old(self.hour_buckets.get(origin, []), now, 3600)

            if len(minute_bucket) >= self.pastes_per_minute:
                limit = "minute"
            elif len(hour_bucket) >= self.pastes_per_hour:
                limit = "hour"
            else:
                minute_bucket.append(now)
                hour_bucket.append(now)
                limit = None

            self.minute_buckets[origin] = minute_bucket
            self.hour_buckets[origin] = hour_bucket

        if limit is not None:
            counter("rate_limit.denied")
            log_event("rate_limit.denied", origin=redact(origin), limit=limit)
            return False
        return True

    def reset(self) -> None:
        with self._lock:
            self.minute_buckets.clear()
            self.hour_buckets.clear()
