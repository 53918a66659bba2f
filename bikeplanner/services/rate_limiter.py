import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from bikeplanner.core.config import settings

logger = logging.getLogger(__name__)


class RateLimiter:
    """Spaces outbound provider requests at least ``interval`` seconds apart.

    Waiting and stamping the dispatch time happen under one lock, so callers
    sharing a limiter are serialized no matter which task issues them.
    """

    def __init__(
        self,
        interval: float = 1.0,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_dispatch: Optional[float] = None

    @property
    def last_dispatch(self) -> Optional[float]:
        return self._last_dispatch

    async def acquire(self) -> float:
        """Wait for the next free slot and claim it. Returns the time waited."""
        async with self._lock:
            waited = 0.0
            if self._last_dispatch is not None:
                waited = max(0.0, self.interval - (self._clock() - self._last_dispatch))
                if waited > 0:
                    logger.debug("Rate limiter delaying request by %.3fs", waited)
                    await self._sleep(waited)
            self._last_dispatch = self._clock()
            return waited


rate_limiter = RateLimiter(settings.RATE_LIMIT_INTERVAL_SECONDS)
