"""Per-client sliding-window rate limiting for sensitive endpoints.

One limiter instance is created per application and kept on ``app.state``.
"""

import threading
import time
from collections import defaultdict, deque
from collections.abc import Callable

from storefront.domain import logger
from storefront.errors import RateLimited


class SlidingWindowRateLimiter:
    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, deque] = defaultdict(deque)
        self._lock = threading.Lock()

    def allow(self, key: str) -> bool:
        """Record a hit for ``key`` and report whether it fits in the window."""
        now = self._clock()
        with self._lock:
            hits = self._hits[key]
            while hits and now - hits[0] >= self.window_seconds:
                hits.popleft()
            if len(hits) >= self.max_requests:
                return False
            hits.append(now)
            return True

    def check(self, key: str) -> None:
        if not self.allow(key):
            logger.warning("rate_limited", client=key)
            raise RateLimited()

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
