"""
Probe executor for the website health checker.

This module turns one URL into exactly one Outcome: it issues the GET through
an HttpClient, retries transport failures with a fixed backoff, and validates
the response headers against the configured exact-match requirements.
"""

import asyncio
import logging
import time
from typing import Mapping, Optional, Sequence, Tuple

from multidict import CIMultiDict

from .config.constants import DEFAULT_RETRY_BACKOFF
from .contracts import HttpClient
from .domain import CheckConfig, FailureKind, HeaderCheck, HttpResponse, Outcome
from .errors import TransportError

# Module logger
logger = logging.getLogger(__name__)


def validate_headers(
    headers: Mapping[str, str], header_checks: Sequence[HeaderCheck]
) -> Optional[Tuple[FailureKind, str]]:
    """
    Checks response headers against exact-match requirements.

    Header names are compared case-insensitively, values exactly. The first
    failing requirement short-circuits the remaining ones.

    Args:
        headers: The response headers.
        header_checks: The requirements, in the order they should be checked.

    Returns:
        Optional[Tuple[FailureKind, str]]: None if every requirement holds,
            otherwise the failure kind and a reason naming the header.
    """
    if not header_checks:
        return None

    lookup: CIMultiDict = CIMultiDict(headers)
    for check in header_checks:
        actual: Optional[str] = lookup.get(check.name)
        if actual is None:
            return FailureKind.MISSING_HEADER, f"missing header {check.name}"
        if actual != check.expected:
            return (
                FailureKind.HEADER_MISMATCH,
                f"header {check.name} mismatch: got '{actual}', expected '{check.expected}'",
            )
    return None


class ProbeExecutor:
    """
    Performs the check for a single URL.

    Only transport failures are retried. A response with any status code,
    including 4xx and 5xx, completes the probe; header validation failures
    are reported as failed Outcomes without retrying.
    """

    def __init__(
        self,
        timeout: float,
        retries: int,
        header_checks: Sequence[HeaderCheck] = (),
        backoff: float = DEFAULT_RETRY_BACKOFF,
    ) -> None:
        """
        Initializes the probe executor.

        Args:
            timeout: Per-attempt timeout in seconds.
            retries: Extra attempts allowed after a transport error.
            header_checks: Exact-match requirements on the response headers.
            backoff: Seconds to wait between transport-failure retries.

        Raises:
            ValueError: If any of the parameters have invalid values.
        """
        if timeout <= 0:
            raise ValueError("timeout must be a positive number of seconds.")
        if retries < 0:
            raise ValueError("retries must not be negative.")
        if backoff < 0:
            raise ValueError("backoff must not be negative.")

        self._timeout: float = timeout
        self._retries: int = retries
        self._header_checks: Tuple[HeaderCheck, ...] = tuple(header_checks)
        self._backoff: float = backoff

    @classmethod
    def from_config(cls, config: CheckConfig) -> "ProbeExecutor":
        return cls(
            timeout=config.timeout,
            retries=config.retries,
            header_checks=config.header_checks,
        )

    async def probe(self, client: HttpClient, url: str) -> Outcome:
        """
        Probes a URL and returns its Outcome.

        Args:
            client: The HTTP client to issue requests with.
            url: The URL to probe.

        Returns:
            Outcome: A success carrying the status code, or a failure carrying
                the reason. The elapsed time of a transport failure spans all
                attempts; any other Outcome records only the final attempt.
        """
        attempts: int = 0
        overall_start: float = time.monotonic()

        while True:
            attempt_start: float = time.monotonic()
            try:
                response: HttpResponse = await client.get(url, self._timeout)
            except TransportError as e:
                attempts += 1
                if attempts > self._retries:
                    logger.debug(f"Giving up on {url} after {attempts} attempt(s): {e}")
                    return Outcome.failure(
                        url,
                        FailureKind.TRANSPORT,
                        f"transport error: {e}",
                        time.monotonic() - overall_start,
                    )
                logger.debug(f"Attempt {attempts} for {url} failed ({e}); retrying.")
                await asyncio.sleep(self._backoff)
                continue

            elapsed: float = time.monotonic() - attempt_start
            failure = validate_headers(response.headers, self._header_checks)
            if failure is not None:
                kind, reason = failure
                return Outcome.failure(url, kind, reason, elapsed)

            logger.debug(f"Probed {url} in {elapsed:.3f}s with status {response.status}")
            return Outcome.success(url, response.status, elapsed)
