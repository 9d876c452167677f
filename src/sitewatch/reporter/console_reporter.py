"""
Console reporter for the website health checker.

Prints a results table after every round and, at the end of a periodic run,
the aggregated per-URL statistics.
"""

import sys
from typing import List, Optional, TextIO

from sitewatch.contracts import Reporter
from sitewatch.domain import Outcome, RoundSummary, UrlSnapshot


def _ms(seconds: float) -> int:
    return int(seconds * 1000)


def format_round(outcomes: List[Outcome], summary: RoundSummary) -> str:
    """
    Renders the results table and round statistics of one round.

    Args:
        outcomes: The round's Outcomes in arrival order.
        summary: The round's statistics.

    Returns:
        str: The rendered text, without a trailing newline.
    """
    lines = [
        "",
        f"Results ({len(outcomes)} checks):",
        f"{'#':<5} | {'Status':<8} | {'ms':<7} | {'ts(ms)':<13} | URL",
        "-" * 100,
    ]
    for index, outcome in enumerate(outcomes, start=1):
        status = str(outcome.status_code) if outcome.status_code is not None else "ERR"
        ts_ms = int(outcome.timestamp.timestamp() * 1000)
        lines.append(
            f"{index:<5} | {status:<8} | {_ms(outcome.elapsed):<7} | {ts_ms:<13} | {outcome.url}"
        )
        if outcome.error is not None:
            lines.append(f"        -> error: {outcome.error}")

    lines.append("")
    lines.append(
        f"Round stats: avg={_ms(summary.avg_latency)}ms, uptime={summary.uptime_pct:.2f}% "
        f"({summary.successes}/{summary.count})"
    )
    return "\n".join(lines)


def format_aggregate(snapshots: List[UrlSnapshot]) -> str:
    """
    Renders the aggregate statistics table.

    Args:
        snapshots: One snapshot per URL, in the order to print them.

    Returns:
        str: The rendered text, without a trailing newline.
    """
    lines = [
        "",
        "Aggregate statistics:",
        f"{'samples':<7} | {'uptime%':<7} | {'avg ms':<7} | URL",
        "-" * 80,
    ]
    for snapshot in snapshots:
        lines.append(
            f"{snapshot.samples:<7} | {snapshot.uptime_pct:<7.2f} | "
            f"{_ms(snapshot.avg_latency):<7} | {snapshot.url}"
        )
    return "\n".join(lines)


class ConsoleReporter(Reporter):
    """Writes human-readable tables to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        """
        Args:
            stream: Where to write. Defaults to sys.stdout at the time of writing.
        """
        self._stream: Optional[TextIO] = stream

    def _write(self, text: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(text + "\n")
        stream.flush()

    async def report_round(self, outcomes: List[Outcome], summary: RoundSummary) -> None:
        self._write(format_round(outcomes, summary))

    async def report_aggregate(self, snapshots: List[UrlSnapshot]) -> None:
        self._write(format_aggregate(snapshots))
