"""
Worker pool for the website health checker.

This module provides the WorkerPool class, a fixed set of concurrent worker
tasks that consume URLs from a shared JobQueue, probe them, and publish one
Outcome per URL to a shared result sink.
"""

import asyncio
import logging
import time
from asyncio import Queue, Task
from typing import Callable, List

from .contracts import HttpClient
from .domain import FailureKind, Outcome
from .job_queue import JobQueue
from .probe import ProbeExecutor

HttpClientFactory = Callable[[], HttpClient]


class WorkerPool:
    """
    Runs a fixed number of probe loops over one JobQueue.

    Each worker owns an HttpClient for its whole lifetime. Workers exit when
    the JobQueue is closed and drained, so a round ends cleanly without any
    other signal.
    """

    def __init__(
        self,
        size: int,
        jobs: JobQueue,
        results: "Queue[Outcome]",
        probe: ProbeExecutor,
        client_factory: HttpClientFactory,
    ) -> None:
        """
        Initializes a new WorkerPool instance.

        Args:
            size: Number of concurrent worker tasks to create.
            jobs: The queue of URLs to probe.
            results: The sink each Outcome is published to.
            probe: The executor performing each check.
            client_factory: Creates the HttpClient owned by each worker.

        Raises:
            ValueError: If size is smaller than 1.
        """
        if size < 1:
            raise ValueError("size must be a positive integer.")

        self._size: int = size
        self._jobs: JobQueue = jobs
        self._results: "Queue[Outcome]" = results
        self._probe: ProbeExecutor = probe
        self._client_factory: HttpClientFactory = client_factory
        self._logger: logging.Logger = logging.getLogger(__name__)
        self._worker_tasks: List[Task] = []

    @property
    def size(self) -> int:
        return self._size

    async def _executor(self, worker_num: int) -> None:
        """
        Consumer task that probes URLs from the queue until it is closed.

        An unexpected exception from the probe is converted into an
        'internal error' Outcome so the URL is still accounted for.

        Args:
            worker_num: The identifier number of this worker task.

        Returns:
            None
        """
        worker_logger: logging.Logger = logging.getLogger(f"{__name__}.executor-{worker_num}")
        client: HttpClient = self._client_factory()

        try:
            async for url in self._jobs:
                start: float = time.monotonic()
                try:
                    outcome = await self._probe.probe(client, url)
                except Exception as e:
                    worker_logger.exception(f"Probe failed for {url} with error: {e}")
                    outcome = Outcome.failure(
                        url,
                        FailureKind.INTERNAL,
                        f"internal error: {e}",
                        time.monotonic() - start,
                    )
                self._results.put_nowait(outcome)
            worker_logger.debug("Job queue closed. Stopping.")
        finally:
            await client.close()

    def start(self) -> None:
        """
        Starts all the worker tasks.

        Raises:
            RuntimeError: If the pool has already been started.
        """
        if self._worker_tasks:
            raise RuntimeError("WorkerPool has already been started.")

        self._logger.debug(f"Starting worker pool with {self._size} workers.")
        self._worker_tasks = [
            asyncio.create_task(self._executor(i + 1)) for i in range(self._size)
        ]

    async def join(self) -> None:
        """
        Waits until every worker has exited.

        Workers only exit on their own once the JobQueue is closed. Errors
        that escaped a worker are logged.

        Returns:
            None
        """
        results = await asyncio.gather(*self._worker_tasks, return_exceptions=True)
        for worker_num, result in enumerate(results, start=1):
            if isinstance(result, BaseException) and not isinstance(result, asyncio.CancelledError):
                self._logger.error(f"Worker {worker_num} exited with error: {result!r}")

    async def stop(self) -> None:
        """
        Cancels all worker tasks and waits for them to acknowledge.

        Used to tear the pool down when a round is abandoned.

        Returns:
            None
        """
        pending = [task for task in self._worker_tasks if not task.done()]
        if pending:
            self._logger.info(f"Cancelling {len(pending)} worker tasks...")
        for task in pending:
            task.cancel()
        await asyncio.gather(*self._worker_tasks, return_exceptions=True)
