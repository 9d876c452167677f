"""
Delegating reporter implementation.

This module provides a composite implementation of the Reporter interface
that forwards every report to multiple child reporters concurrently. A
failure in one reporter does not affect the others.
"""

import asyncio
import logging
from typing import Awaitable, Callable, List

from sitewatch.contracts import Reporter
from sitewatch.domain import Outcome, RoundSummary, UrlSnapshot

# Module logger
logger = logging.getLogger(__name__)


class DelegatingReporter(Reporter):
    """
    A Reporter that follows the Composite pattern.

    This class holds a list of other Reporter instances and delegates every
    call to each of them concurrently, exposing a single entry point for the
    whole reporting pipeline.
    """

    def __init__(self, reporters: List[Reporter]) -> None:
        """
        Initializes the delegator with a list of reporters to delegate to.

        Args:
            reporters: Objects that adhere to the Reporter interface.
        """
        self._reporters: List[Reporter] = reporters

    async def _report_with_one(
        self, reporter: Reporter, call: Callable[[Reporter], Awaitable[None]]
    ) -> None:
        """
        Runs a single reporter, logging instead of propagating its failure.

        Args:
            reporter: The individual reporter to run.
            call: Invokes the reporting method on the given reporter.
        """
        try:
            await call(reporter)
        except Exception as e:
            logger.exception(f"Reporter '{type(reporter).__name__}' failed with error: {e}")

    async def _delegate(self, call: Callable[[Reporter], Awaitable[None]]) -> None:
        if not self._reporters:
            return
        await asyncio.gather(*(self._report_with_one(reporter, call) for reporter in self._reporters))

    async def report_round(self, outcomes: List[Outcome], summary: RoundSummary) -> None:
        await self._delegate(lambda reporter: reporter.report_round(outcomes, summary))

    async def report_aggregate(self, snapshots: List[UrlSnapshot]) -> None:
        await self._delegate(lambda reporter: reporter.report_aggregate(snapshots))
