from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Generic, Optional, Set, TypeVar

from apps.common import get_logger

logger = get_logger(__name__).bind(component="storefront", layer="search")

T = TypeVar("T")


class SearchDebouncer(Generic[T]):
    """
    Dispatches ``perform(text)`` only once input has been quiet for ``delay_ms``.

    A new keystroke cancels the pending schedule but never an in-flight
    request. Each dispatch gets a sequence number, and a result is handed to
    ``apply`` only if nothing newer has been applied already.
    """

    def __init__(
        self,
        perform: Callable[[str], Awaitable[T]],
        apply: Callable[[str, T], None],
        *,
        delay_ms: int = 500,
    ):
        self._perform = perform
        self._apply = apply
        self.delay = delay_ms / 1000
        self._handle: Optional[asyncio.TimerHandle] = None
        self._tasks: Set[asyncio.Task] = set()
        self._issued = 0
        self._applied = 0

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def submit(self, text: str) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._dispatch, text)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _dispatch(self, text: str) -> None:
        self._handle = None
        self._issued += 1
        task = asyncio.get_running_loop().create_task(self._run(self._issued, text))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, sequence: int, text: str) -> None:
        logger.debug("Dispatching search", sequence=sequence, text=text)
        result = await self._perform(text)
        if sequence < self._applied:
            logger.debug(
                "Discarding stale search result",
                sequence=sequence,
                latest=self._applied,
            )
            return
        self._applied = sequence
        self._apply(text, result)

    async def drain(self) -> None:
        """Wait for the pending schedule and every dispatched search to settle."""
        while self._handle is not None or self._tasks:
            if self._tasks:
                await asyncio.gather(*list(self._tasks))
            else:
                await asyncio.sleep(self.delay)
