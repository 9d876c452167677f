"""
Round runner for the website health checker.

A round probes every configured URL exactly once. The runner wires a fresh
JobQueue, result sink and WorkerPool together for each round, collects one
Outcome per URL, and makes sure every worker has exited before returning.
"""

import asyncio
import functools
import logging
from asyncio import Queue
from typing import Callable, List

from .config.http_config import create_http_client
from .contracts import HttpClient
from .domain import CheckConfig, Outcome, RoundResult
from .errors import ConfigurationError, IncompleteRoundError
from .job_queue import JobQueue
from .probe import ProbeExecutor
from .worker import WorkerPool

# Module logger
logger = logging.getLogger(__name__)

ConfiguredClientFactory = Callable[[CheckConfig], HttpClient]


def pool_size_for(config: CheckConfig) -> int:
    """
    Computes the worker count for a round.

    Never more workers than URLs, never fewer than one.

    Args:
        config: The configuration of the round.

    Returns:
        int: The number of workers to start.
    """
    return max(1, min(config.workers, len(config.urls)))


class RoundRunner:
    """
    Runs single rounds over a CheckConfig.

    The pool is sized from the URLs of each round, so a configuration whose
    URL list changes between rounds is always sized correctly.
    """

    def __init__(self, client_factory: ConfiguredClientFactory = create_http_client) -> None:
        """
        Initializes the runner.

        Args:
            client_factory: Creates one HttpClient per worker from the round's
                configuration.
        """
        self._client_factory: ConfiguredClientFactory = client_factory

    async def run_round(self, config: CheckConfig) -> RoundResult:
        """
        Probes every URL of the configuration once.

        Args:
            config: The configuration of the round.

        Returns:
            RoundResult: Exactly one Outcome per URL, in arrival order.

        Raises:
            ConfigurationError: If the configuration has no URLs.
            IncompleteRoundError: If the workers exited before every Outcome arrived.
        """
        if not config.urls:
            raise ConfigurationError("No URLs to check.")

        expected: int = len(config.urls)
        jobs = JobQueue()
        results: "Queue[Outcome]" = Queue()
        pool = WorkerPool(
            size=pool_size_for(config),
            jobs=jobs,
            results=results,
            probe=ProbeExecutor.from_config(config),
            client_factory=functools.partial(self._client_factory, config),
        )

        logger.debug(f"Starting round over {expected} URLs with {pool.size} workers.")
        pool.start()
        for url in config.urls:
            jobs.put(url)
        jobs.close()

        pool_done: asyncio.Future = asyncio.ensure_future(pool.join())
        try:
            outcomes = await self._collect(results, pool_done, expected)
            await pool_done
        except BaseException:
            await pool.stop()
            raise

        logger.debug(f"Round complete: {len(outcomes)} outcomes.")
        return outcomes

    async def _collect(
        self, results: "Queue[Outcome]", pool_done: asyncio.Future, expected: int
    ) -> List[Outcome]:
        """
        Receives exactly 'expected' Outcomes from the sink.

        Waits on the sink and on the pool at the same time, so a pool that
        exits early is detected instead of blocking forever.
        """
        outcomes: List[Outcome] = []

        while len(outcomes) < expected:
            getter: asyncio.Future = asyncio.ensure_future(results.get())
            try:
                done, _ = await asyncio.wait(
                    {getter, pool_done}, return_when=asyncio.FIRST_COMPLETED
                )
            finally:
                if not getter.done():
                    getter.cancel()

            if getter in done:
                outcomes.append(getter.result())
                continue

            while not results.empty() and len(outcomes) < expected:
                outcomes.append(results.get_nowait())
            if len(outcomes) < expected:
                logger.error(
                    f"Worker pool exited after delivering {len(outcomes)} of {expected} outcomes."
                )
                raise IncompleteRoundError(expected, outcomes)

        return outcomes
