import asyncio
import logging
from contextlib import suppress
from typing import Awaitable, Callable, List, Optional, Union

logger = logging.getLogger(__name__)

TickCallback = Callable[[], Union[None, Awaitable[None]]]


class IntervalTicker:
    """
    Timer event source. Subscribers are called one after another on every
    tick, on the running event loop; a failing subscriber is logged and the
    ticker keeps going.
    """

    def __init__(self, interval_seconds: float, name: str = "ticker"):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.interval_seconds = interval_seconds
        self.name = name
        self._subscribers: List[TickCallback] = []
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, callback: TickCallback) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: TickCallback) -> None:
        with suppress(ValueError):
            self._subscribers.remove(callback)

    async def fire(self) -> None:
        for callback in list(self._subscribers):
            try:
                result = callback()
                if asyncio.iscoroutine(result):
                    await result
            except Exception:
                logger.exception("Subscriber of %s failed", self.name)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            await self.fire()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=self.name)
        logger.info("Started %s every %s seconds", self.name, self.interval_seconds)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Stopped %s", self.name)
