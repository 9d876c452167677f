"""
Closable job queue feeding the worker pool.

A single producer enqueues every URL of a round and then closes the queue.
Any number of consumers pull URLs until the queue is closed and drained;
closing is the only signal workers need to finish a round.
"""

import asyncio
from typing import AsyncIterator, Optional

# Marker put behind the last job. Each consumer that takes it puts it back
# so that every other waiting consumer wakes up as well.
_CLOSED = object()


class JobQueue:
    """An unbounded single-producer/multi-consumer queue of URLs."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed: bool = False

    @property
    def closed(self) -> bool:
        return self._closed

    def qsize(self) -> int:
        """Returns the number of pending URLs."""
        return self._queue.qsize() - (1 if self._closed else 0)

    def put(self, url: str) -> None:
        """
        Enqueues a URL.

        Raises:
            RuntimeError: If the queue has already been closed.
        """
        if self._closed:
            raise RuntimeError("Cannot enqueue into a closed JobQueue.")
        self._queue.put_nowait(url)

    def close(self) -> None:
        """Closes the queue. Pending URLs are still delivered. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)

    async def get(self) -> Optional[str]:
        """
        Waits for the next URL.

        Returns:
            Optional[str]: The next URL, or None once the queue is closed and empty.
        """
        item = await self._queue.get()
        if item is _CLOSED:
            self._queue.put_nowait(_CLOSED)
            return None
        return item

    def __aiter__(self) -> AsyncIterator[str]:
        return self

    async def __anext__(self) -> str:
        url = await self.get()
        if url is None:
            raise StopAsyncIteration
        return url
