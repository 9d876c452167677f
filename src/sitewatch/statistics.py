"""
Uptime and latency statistics.

The StatisticsAggregator accumulates Outcomes per URL across the rounds of a
periodic run. Rounds are recorded one after another by a single caller, so
the accumulators are not synchronized.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from .domain import Outcome, RoundSummary, UrlSnapshot


def _ratio(part: float, whole: int) -> float:
    return part / whole if whole else 0.0


@dataclass
class UrlStats:
    """Mutable per-URL accumulator."""

    samples: int = 0
    successes: int = 0
    total_latency: float = 0.0

    def record(self, outcome: Outcome) -> None:
        self.samples += 1
        if outcome.is_up:
            self.successes += 1
        # Failed probes still contribute their elapsed time.
        self.total_latency += outcome.elapsed

    @property
    def uptime_pct(self) -> float:
        return 100.0 * _ratio(self.successes, self.samples)

    @property
    def avg_latency(self) -> float:
        return _ratio(self.total_latency, self.samples)


def summarize_round(outcomes: Sequence[Outcome]) -> RoundSummary:
    """
    Computes round-level statistics.

    Args:
        outcomes: The Outcomes of one round.

    Returns:
        RoundSummary: Count, successes, uptime percentage and mean latency.
    """
    stats = UrlStats()
    for outcome in outcomes:
        stats.record(outcome)
    return RoundSummary(
        count=stats.samples,
        successes=stats.successes,
        uptime_pct=stats.uptime_pct,
        avg_latency=stats.avg_latency,
    )


class StatisticsAggregator:
    """
    Accumulates per-URL statistics across rounds.

    Entries are created on the first Outcome for a URL and never removed.
    """

    def __init__(self) -> None:
        self._stats: Dict[str, UrlStats] = {}

    def __len__(self) -> int:
        return len(self._stats)

    def __contains__(self, url: object) -> bool:
        return url in self._stats

    def record(self, outcome: Outcome) -> None:
        """
        Adds one Outcome to its URL's statistics.

        Args:
            outcome: The Outcome to record.
        """
        stats = self._stats.get(outcome.url)
        if stats is None:
            stats = self._stats[outcome.url] = UrlStats()
        stats.record(outcome)

    def record_round(self, outcomes: Iterable[Outcome]) -> None:
        """Records every Outcome of a round."""
        for outcome in outcomes:
            self.record(outcome)

    def snapshot(self, url: str) -> UrlSnapshot:
        """
        Returns the statistics of a URL.

        A URL that was never observed yields zero samples, zero uptime and
        zero latency. Asking does not create an entry.

        Args:
            url: The URL to report on.

        Returns:
            UrlSnapshot: Sample count, uptime percentage and mean latency.
        """
        stats = self._stats.get(url, UrlStats())
        return UrlSnapshot(
            url=url,
            samples=stats.samples,
            uptime_pct=stats.uptime_pct,
            avg_latency=stats.avg_latency,
        )

    def snapshots(self) -> List[UrlSnapshot]:
        """Returns the snapshot of every observed URL, sorted by URL."""
        return [self.snapshot(url) for url in sorted(self._stats)]
