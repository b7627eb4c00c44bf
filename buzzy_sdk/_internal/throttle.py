"""Request admission and pacing shared by every Buzzy operation.

All outbound calls go through one ``ThrottledDispatcher``. Calls are admitted
strictly in the order they were submitted, at most ``max_concurrent`` run at
once, and consecutive call starts are at least ``min_spacing`` seconds apart.
"""

import asyncio
import functools
import inspect
import logging
import time
from collections import deque
from collections.abc import Awaitable, Callable
from typing import Any

from buzzy_sdk.exceptions import BuzzyConfigError

DEFAULT_MAX_CONCURRENT = 1
DEFAULT_MIN_SPACING = 0.150

logger = logging.getLogger(__name__)


class _QueueEntry:
    """A submitted call waiting for, or holding, an execution slot."""

    __slots__ = ("operation", "args", "kwargs", "result", "not_before")

    def __init__(
        self,
        operation: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        result: asyncio.Future,
    ) -> None:
        self.operation = operation
        self.args = args
        self.kwargs = kwargs
        self.result = result
        self.not_before: float | None = None


class ThrottledDispatcher:
    """FIFO admission queue with a concurrency cap and start-to-start spacing.

    Construct one per process (or per client) and share it by reference
    between everything that must be paced together. The clock and sleep
    functions can be injected for tests.

    Queued calls cannot be withdrawn and have no timeout; the queue is
    unbounded.
    """

    def __init__(
        self,
        *,
        max_concurrent: int = DEFAULT_MAX_CONCURRENT,
        min_spacing: float = DEFAULT_MIN_SPACING,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            max_concurrent: Maximum number of calls executing at once.
            min_spacing: Minimum seconds between two consecutive call starts.
            clock: Monotonic clock returning seconds.
            sleep: Coroutine function used to wait out the spacing.

        Raises:
            BuzzyConfigError: If either limit is out of range.
        """
        if max_concurrent < 1:
            raise BuzzyConfigError(f"max_concurrent must be >= 1, got {max_concurrent}")
        if min_spacing < 0:
            raise BuzzyConfigError(f"min_spacing must be >= 0, got {min_spacing}")

        self._max_concurrent = max_concurrent
        self._min_spacing = min_spacing
        self._clock = clock
        self._sleep = sleep

        self._queue: deque[_QueueEntry] = deque()
        self._slot_freed: asyncio.Future | None = None
        self._drainer: asyncio.Task | None = None
        self._running: set[asyncio.Task] = set()
        self._last_start: float | None = None

    @property
    def max_concurrent(self) -> int:
        return self._max_concurrent

    @property
    def min_spacing(self) -> float:
        return self._min_spacing

    @property
    def pending(self) -> int:
        """Number of calls queued but not yet started."""
        return len(self._queue)

    @property
    def running(self) -> int:
        """Number of calls currently executing."""
        return len(self._running)

    def submit(self, operation: Callable[..., Any], *args: Any, **kwargs: Any) -> asyncio.Future:
        """Enqueue a call and return a future for its outcome.

        The entry is queued before this method returns, so submission order
        is admission order. Must be called from a running event loop.

        Args:
            operation: Sync or async callable performing one external call.
            *args: Positional arguments for ``operation``.
            **kwargs: Keyword arguments for ``operation``.

        Returns:
            Future resolving to the operation's result or failing with its
            exception, unaltered.
        """
        loop = asyncio.get_running_loop()
        entry = _QueueEntry(operation, args, kwargs, loop.create_future())
        self._queue.append(entry)

        if self._drainer is None or self._drainer.done() or self._drainer.get_loop() is not loop:
            self._drainer = loop.create_task(self._drain())
        return entry.result

    def wrap(self, operation: Callable[..., Any]) -> Callable[..., asyncio.Future]:
        """Return a throttled version of ``operation``.

        The wrapper has the same arguments and result as ``operation``, but
        returns a future immediately and runs the call once admitted.
        """

        @functools.wraps(operation)
        def throttled(*args: Any, **kwargs: Any) -> asyncio.Future:
            return self.submit(operation, *args, **kwargs)

        return throttled

    async def _drain(self) -> None:
        """Admit queued entries one by one until the queue is empty.

        This task is the only place a slot is checked and claimed, so two
        entries can never both be admitted into the same slot. Slot state
        lives on the tasks themselves, so a dispatcher can be reused from a
        later event loop.
        """
        loop = asyncio.get_running_loop()
        self._running = {task for task in self._running if task.get_loop() is loop}
        entry: _QueueEntry | None = None
        try:
            while self._queue:
                while len(self._running) >= self._max_concurrent:
                    self._slot_freed = loop.create_future()
                    await self._slot_freed

                entry = self._queue.popleft()
                if entry.result.get_loop() is not loop:
                    logger.debug("Dropping call queued on a previous event loop")
                    entry = None
                    continue

                if self._last_start is not None:
                    entry.not_before = self._last_start + self._min_spacing
                    wait = entry.not_before - self._clock()
                    if wait > 0:
                        logger.debug("Throttling %.3fs before next call (%d queued)", wait, len(self._queue))
                        await self._sleep(wait)

                self._last_start = self._clock()
                task = loop.create_task(self._run(entry))
                entry = None
                self._running.add(task)
                task.add_done_callback(self._release)
        except Exception as e:
            stranded = [entry] if entry is not None else []
            stranded.extend(self._queue)
            self._queue.clear()
            logger.warning("Dispatcher stopped, failing %d queued calls: %s", len(stranded), e)
            for queued in stranded:
                if queued.result.get_loop() is loop and not queued.result.done():
                    queued.result.set_exception(e)

    def _release(self, task: asyncio.Task) -> None:
        self._running.discard(task)
        freed = self._slot_freed
        if freed is not None and not freed.done() and freed.get_loop() is task.get_loop():
            freed.set_result(None)

    async def _run(self, entry: _QueueEntry) -> None:
        name = getattr(entry.operation, "__name__", "<operation>")
        try:
            logger.debug("Starting %s", name)
            result = entry.operation(*entry.args, **entry.kwargs)
            if inspect.isawaitable(result):
                result = await result
        except asyncio.CancelledError:
            entry.result.cancel()
            raise
        except Exception as e:
            if not entry.result.done():
                entry.result.set_exception(e)
        else:
            if not entry.result.done():
                entry.result.set_result(result)
