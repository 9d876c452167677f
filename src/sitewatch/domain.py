"""
Domain models for the website health checker.

This module defines the core data structures used throughout the application:
the immutable check configuration, the outcome of a single probe, the response
handed back by an HTTP client, and the summaries derived from outcomes.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Mapping, NamedTuple, Optional, Tuple

# Status codes in this inclusive range count as "up".
UP_STATUS_MIN = 200
UP_STATUS_MAX = 399


def is_up_status(status_code: Optional[int]) -> bool:
    """
    Checks whether a status code counts as an available site.

    Args:
        status_code: The HTTP status code, or None if no response was received.

    Returns:
        bool: True if the status code is within [200, 399].
    """
    return status_code is not None and UP_STATUS_MIN <= status_code <= UP_STATUS_MAX


class FailureKind(str, Enum):
    """
    Classifies why a probe did not produce a status code.

    Inheriting from 'str' keeps the members usable wherever a plain
    string tag is expected.
    """

    TRANSPORT = "transport error"
    MISSING_HEADER = "missing header"
    HEADER_MISMATCH = "header mismatch"
    INTERNAL = "internal error"


class HeaderCheck(NamedTuple):
    """
    An exact-match requirement on a response header.

    Attributes:
        name: The header name, matched case-insensitively.
        expected: The exact value the header must carry.
    """

    name: str
    expected: str


class CheckConfig(NamedTuple):
    """
    Immutable configuration of a health-check run.

    Attributes:
        workers: Number of concurrent workers (at least 1).
        timeout: Per-attempt timeout in seconds.
        retries: Number of extra attempts allowed after a transport error.
        header_checks: Ordered exact-match requirements on response headers.
        urls: The URLs to probe each round.
        period: Seconds between rounds; 0 means a single run.
    """

    workers: int
    timeout: float
    retries: int
    header_checks: Tuple[HeaderCheck, ...]
    urls: Tuple[str, ...]
    period: float = 0.0

    @property
    def is_periodic(self) -> bool:
        return self.period > 0


class HttpResponse(NamedTuple):
    """
    The part of an HTTP response a probe needs.

    Attributes:
        status: The numeric status code.
        headers: The response headers. Lookups by the probe are case-insensitive
            regardless of the mapping type supplied here.
    """

    status: int
    headers: Mapping[str, str]


class Outcome(NamedTuple):
    """
    The result of probing one URL in one round.

    Exactly one of 'status_code' and 'error' is set. A response with an
    HTTP error status (4xx/5xx) is still a status-carrying Outcome.

    Attributes:
        url: The probed URL.
        status_code: The HTTP status code, or None for a failed probe.
        error: A human-readable failure reason, or None when a status was received.
        failure_kind: The failure classification, or None when a status was received.
        elapsed: Seconds spent producing this Outcome. For transport failures this
            spans every attempt; otherwise only the final attempt.
        timestamp: When the Outcome was produced (UTC).
    """

    url: str
    status_code: Optional[int]
    error: Optional[str]
    failure_kind: Optional[FailureKind]
    elapsed: float
    timestamp: datetime

    @classmethod
    def success(
        cls, url: str, status_code: int, elapsed: float, timestamp: Optional[datetime] = None
    ) -> "Outcome":
        return cls(
            url=url,
            status_code=status_code,
            error=None,
            failure_kind=None,
            elapsed=elapsed,
            timestamp=timestamp or datetime.now(timezone.utc),
        )

    @classmethod
    def failure(
        cls,
        url: str,
        kind: FailureKind,
        reason: str,
        elapsed: float,
        timestamp: Optional[datetime] = None,
    ) -> "Outcome":
        return cls(
            url=url,
            status_code=None,
            error=reason,
            failure_kind=kind,
            elapsed=elapsed,
            timestamp=timestamp or datetime.now(timezone.utc),
        )

    @property
    def is_up(self) -> bool:
        return is_up_status(self.status_code)


# One Outcome per submitted URL, in arrival order.
RoundResult = List[Outcome]


class RoundSummary(NamedTuple):
    """
    Round-level statistics.

    Attributes:
        count: Number of Outcomes in the round.
        successes: Number of Outcomes with a status code in [200, 399].
        uptime_pct: 100 * successes / count, or 0 for an empty round.
        avg_latency: Mean elapsed seconds, or 0 for an empty round.
    """

    count: int
    successes: int
    uptime_pct: float
    avg_latency: float


class UrlSnapshot(NamedTuple):
    """
    Aggregated statistics for one URL across all recorded rounds.

    Attributes:
        url: The URL the statistics belong to.
        samples: Number of recorded Outcomes.
        uptime_pct: 100 * successes / samples, or 0 without samples.
        avg_latency: Mean elapsed seconds, or 0 without samples.
    """

    url: str
    samples: int
    uptime_pct: float
    avg_latency: float
