"""
Periodic scheduler for the website health checker.

This module repeats rounds on a fixed interval, feeds every round into a
StatisticsAggregator, and stops when the shutdown signal is set. A round in
flight is never interrupted: it completes and is recorded before the signal
is checked, so every started round contributes to the final aggregate.
"""

import asyncio
import logging
import time
from enum import Enum
from typing import Optional

from sitewatch.config.constants import DEFAULT_SHUTDOWN_POLL_INTERVAL
from sitewatch.contracts import Reporter
from sitewatch.domain import CheckConfig, RoundResult
from sitewatch.errors import ConfigurationError, IncompleteRoundError
from sitewatch.runner import RoundRunner
from sitewatch.shutdown import ShutdownSignal
from sitewatch.statistics import StatisticsAggregator, summarize_round

# Module logger
logger = logging.getLogger(__name__)


class SchedulerState(str, Enum):
    """The states of a periodic run."""

    IDLE = "idle"
    RUNNING_ROUND = "running_round"
    SLEEPING = "sleeping"
    STOPPED = "stopped"


class PeriodicScheduler:
    """
    Runs rounds every 'period' seconds until the shutdown signal is set.

    The sleep between rounds polls the signal every 'poll_interval' seconds,
    which bounds the stop latency independently of the period.
    """

    def __init__(
        self,
        config: CheckConfig,
        runner: RoundRunner,
        reporter: Reporter,
        shutdown: ShutdownSignal,
        aggregator: Optional[StatisticsAggregator] = None,
        poll_interval: float = DEFAULT_SHUTDOWN_POLL_INTERVAL,
    ) -> None:
        """
        Initializes a new PeriodicScheduler instance.

        Args:
            config: The configuration of every round. Its period must be positive.
            runner: Runs the individual rounds.
            reporter: Receives each round and the final aggregate.
            shutdown: The signal that ends the run.
            aggregator: Accumulates statistics across rounds. A new one is
                created if not provided.
            poll_interval: Seconds between shutdown checks while sleeping.

        Raises:
            ConfigurationError: If the configuration has no positive period.
            ValueError: If poll_interval is not positive.
        """
        if not config.is_periodic:
            raise ConfigurationError("A periodic run requires a positive period.")
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive.")

        self._config: CheckConfig = config
        self._runner: RoundRunner = runner
        self._reporter: Reporter = reporter
        self._shutdown: ShutdownSignal = shutdown
        self._aggregator: StatisticsAggregator = aggregator or StatisticsAggregator()
        self._poll_interval: float = poll_interval
        self._state: SchedulerState = SchedulerState.IDLE
        self._rounds_completed: int = 0

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def aggregator(self) -> StatisticsAggregator:
        return self._aggregator

    @property
    def rounds_completed(self) -> int:
        return self._rounds_completed

    async def run(self) -> StatisticsAggregator:
        """
        Runs rounds until the shutdown signal is set.

        Returns:
            StatisticsAggregator: The statistics of every recorded round.

        Raises:
            RuntimeError: If the scheduler has already been started.
        """
        if self._state is not SchedulerState.IDLE:
            raise RuntimeError(f"Scheduler cannot start from state {self._state.value}.")

        logger.info(f"Periodic monitoring every {self._config.period}s started.")
        while not self._shutdown.is_set():
            self._state = SchedulerState.RUNNING_ROUND
            await self._run_round()

            self._state = SchedulerState.SLEEPING
            await self._sleep()

        self._state = SchedulerState.STOPPED
        logger.info(f"Periodic monitoring stopped after {self._rounds_completed} rounds.")
        await self._reporter.report_aggregate(self._aggregator.snapshots())
        return self._aggregator

    async def _run_round(self) -> None:
        """Runs, records and reports one round."""
        try:
            outcomes: RoundResult = await self._runner.run_round(self._config)
        except IncompleteRoundError as e:
            logger.error(f"{e} Recording the partial round.")
            outcomes = e.outcomes

        self._aggregator.record_round(outcomes)
        self._rounds_completed += 1
        await self._reporter.report_round(outcomes, summarize_round(outcomes))

    async def _sleep(self) -> None:
        """Sleeps for one period, returning early once the signal is set."""
        deadline: float = time.monotonic() + self._config.period
        while not self._shutdown.is_set():
            remaining: float = deadline - time.monotonic()
            if remaining <= 0:
                return
            await asyncio.sleep(min(self._poll_interval, remaining))
