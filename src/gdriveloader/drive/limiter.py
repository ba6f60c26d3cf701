from __future__ import annotations

import asyncio
import inspect
import logging
import time
from typing import Any, Awaitable, Callable, Iterable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _is_async(operation: Callable[..., Any]) -> bool:
    # Callable objects with an async __call__ are coroutine functions too
    return inspect.iscoroutinefunction(operation) or inspect.iscoroutinefunction(
        getattr(operation, "__call__", None)
    )


class RateLimiter:
    """Admits remote calls one at a time, spaced by a minimum interval.

    ``min_interval`` is measured from the start of one operation to the
    start of the next, so the default of 150ms allows at most ~6.6 requests
    per second. Waiting callers are suspended, never rejected, and are
    admitted in arrival order.

    A limiter belongs to whoever created it; the loader makes one per run.
    Share one instance between runs to give them a common rate budget.
    """

    def __init__(
        self,
        min_interval: float = 0.15,
        max_concurrent: int = 1,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize the limiter.

        Args:
            min_interval: Seconds between consecutive operation starts.
            max_concurrent: Operations allowed to execute at once.
            clock: Monotonic clock, in seconds.
            sleep: Coroutine function used to wait for the next slot.
        """
        if min_interval < 0:
            raise ValueError("min_interval must not be negative")
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")

        self.min_interval = min_interval
        self.max_concurrent = max_concurrent
        self.submitted = 0

        self._clock = clock
        self._sleep = sleep
        self._slots = asyncio.Semaphore(max_concurrent)
        self._spacing = asyncio.Lock()
        self._last_start: float | None = None

    async def _wait_for_turn(self) -> None:
        async with self._spacing:
            if self._last_start is not None:
                delay = self._last_start + self.min_interval - self._clock()
                if delay > 0:
                    logger.debug("Throttling next request by %.3fs", delay)
                    await self._sleep(delay)
            self._last_start = self._clock()
            self.submitted += 1

    async def submit(self, operation: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:
        """Queue ``operation`` and return its result once it has run.

        Coroutine functions are awaited; plain callables are blocking
        requests and run in a worker thread. Exceptions raised by the
        operation propagate unchanged.
        """
        async with self._slots:
            await self._wait_for_turn()
            if _is_async(operation):
                return await operation(*args, **kwargs)
            return await asyncio.to_thread(operation, *args, **kwargs)


async def gather_ordered(aws: Iterable[Awaitable[T]]) -> list[T]:
    """Run awaitables concurrently and return their results in input order.

    The first failure is re-raised after the remaining tasks have been
    cancelled, so no partial result escapes.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []

    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
