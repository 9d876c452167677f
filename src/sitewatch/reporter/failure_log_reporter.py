"""
Failure logging reporter.

This module provides a Reporter that writes failed probes and downtime
samples to the application log, keeping a record of problems next to the
other log output of the run.
"""

import logging
from typing import List

from sitewatch.contracts import Reporter
from sitewatch.domain import Outcome, RoundSummary, UrlSnapshot

# Module logger
logger = logging.getLogger(__name__)


class FailureLogReporter(Reporter):
    """
    A Reporter that logs every Outcome that does not count as "up".

    Failed probes are logged with their failure reason, status codes outside
    [200, 399] with the code. The round summary is logged at INFO level.
    """

    async def report_round(self, outcomes: List[Outcome], summary: RoundSummary) -> None:
        for outcome in outcomes:
            if outcome.is_up:
                continue
            if outcome.error is not None:
                logger.warning(
                    f"Check failed for {outcome.url} ({outcome.failure_kind.value}): {outcome.error}"
                )
            else:
                logger.warning(f"Check for {outcome.url} returned status {outcome.status_code}")

        logger.info(
            f"Round finished: {summary.successes}/{summary.count} up "
            f"({summary.uptime_pct:.2f}%), avg {summary.avg_latency * 1000:.0f}ms"
        )

    async def report_aggregate(self, snapshots: List[UrlSnapshot]) -> None:
        for snapshot in snapshots:
            if snapshot.uptime_pct < 100.0:
                logger.warning(
                    f"{snapshot.url} was up {snapshot.uptime_pct:.2f}% of "
                    f"{snapshot.samples} samples"
                )
