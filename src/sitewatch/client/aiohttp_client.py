"""
HTTP client implementation using the aiohttp library.

This module provides an implementation of the HttpClient interface on top of
an aiohttp ClientSession. Network-level failures are translated into
TransportError; responses with any status code are returned as they are.
"""

import asyncio
import logging

import aiohttp

from sitewatch.contracts import HttpClient
from sitewatch.domain import HttpResponse
from sitewatch.errors import TransportError

# Module logger
logger = logging.getLogger(__name__)


def _describe(error: BaseException) -> str:
    """Returns a readable message, falling back to the type name for empty ones."""
    message = str(error)
    return message if message else type(error).__name__


class AiohttpClient(HttpClient):
    """
    A concrete implementation of HttpClient using the aiohttp library.

    The client owns its session and closes it in close(). Redirects are
    followed; the status of the final response is reported.
    """

    def __init__(self, session: aiohttp.ClientSession) -> None:
        """
        Initializes the client with an aiohttp ClientSession.

        Args:
            session: The session to issue requests with. Ownership passes to the client.
        """
        self._session: aiohttp.ClientSession = session

    async def get(self, url: str, timeout: float) -> HttpResponse:
        """
        Performs an HTTP GET on the URL.

        The body is not read; the status and headers are all a probe needs.

        Args:
            url: The URL to request.
            timeout: Maximum number of seconds the attempt may take.

        Returns:
            HttpResponse: The status code and headers of the response.

        Raises:
            TransportError: If the request could not be completed.
        """
        try:
            async with self._session.get(
                url, timeout=aiohttp.ClientTimeout(total=timeout)
            ) as response:
                return HttpResponse(status=response.status, headers=response.headers)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug(f"Transport failure for {url}: {e!r}")
            raise TransportError(_describe(e)) from e

    async def close(self) -> None:
        if not self._session.closed:
            await self._session.close()
