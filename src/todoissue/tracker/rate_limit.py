"""Fixed-delay rate limiter for tracker API calls."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

_LOG = logging.getLogger(__name__)


class RateLimiter:
    """Keep at least *delay* seconds between consecutive calls to ``wait``.

    The first call never blocks.
    """

    def __init__(
        self,
        delay: float,
        *,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.delay = max(0.0, delay)
        self._sleep = sleep
        self._clock = clock
        self._last: Optional[float] = None

    def wait(self) -> None:
        now = self._clock()
        if self._last is not None:
            remaining = self._last + self.delay - now
            if remaining > 0:
                _LOG.debug("Rate limit: sleeping %.3fs", remaining)
                self._sleep(remaining)
                now = self._clock()
        self._last = now
