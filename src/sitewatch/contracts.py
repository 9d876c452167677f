"""
Core interfaces for the website health checker.

This module defines the abstract base classes at the edges of the checking
engine: the HTTP transport it delegates to and the sinks it reports to.
Keeping these as contracts lets the engine run against aiohttp in production
and against in-memory fakes in tests.
"""

import abc
from typing import List

from .domain import HttpResponse, Outcome, RoundSummary, UrlSnapshot


class HttpClient(abc.ABC):
    """
    Abstract interface for the HTTP client capability.

    Each worker owns one instance and reuses it for every URL it probes,
    so implementations can keep connections and resolver caches warm.
    """

    @abc.abstractmethod
    async def get(self, url: str, timeout: float) -> HttpResponse:
        """
        Performs a single HTTP GET.

        Any received response is returned, whatever its status code.

        Args:
            url: The URL to request.
            timeout: Maximum number of seconds the attempt may take.

        Returns:
            HttpResponse: The status code and headers of the response.

        Raises:
            TransportError: If the exchange could not be completed
                (connection refused, DNS failure, timeout, ...).
        """
        pass

    @abc.abstractmethod
    async def close(self) -> None:
        """
        Releases any resources held by the client.

        Returns:
            None
        """
        pass


class Reporter(abc.ABC):
    """
    Abstract interface for a reporting sink.

    Reporters receive each completed round and, at the end of a periodic run,
    the aggregated per-URL statistics. Presentation is up to the implementation.
    """

    @abc.abstractmethod
    async def report_round(self, outcomes: List[Outcome], summary: RoundSummary) -> None:
        """
        Reports the Outcomes of one completed round.

        Args:
            outcomes: The round's Outcomes in arrival order.
            summary: Round-level statistics computed from the Outcomes.

        Returns:
            None
        """
        pass

    @abc.abstractmethod
    async def report_aggregate(self, snapshots: List[UrlSnapshot]) -> None:
        """
        Reports the final per-URL statistics of a periodic run.

        Args:
            snapshots: One snapshot per observed URL, sorted by URL.

        Returns:
            None
        """
        pass
