"""
HTTP client configuration module for the website health checker.

This module creates the aiohttp-backed HTTP clients used by the workers.
Every worker gets its own session, configured with the per-attempt timeout.
"""

import logging

import aiohttp

from sitewatch.client.aiohttp_client import AiohttpClient
from sitewatch.domain import CheckConfig

# Module logger
logger = logging.getLogger(__name__)


def get_http_session(config: CheckConfig) -> aiohttp.ClientSession:
    """
    Create and configure an HTTP client session.

    Must be called from a running event loop.

    Args:
        config: The check configuration providing the per-attempt timeout.

    Returns:
        aiohttp.ClientSession: A session whose requests time out after config.timeout seconds.
    """
    return aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=config.timeout))


def create_http_client(config: CheckConfig) -> AiohttpClient:
    """
    Create the HTTP client owned by one worker.

    Args:
        config: The check configuration of the round.

    Returns:
        AiohttpClient: A client wrapping a dedicated session.
    """
    return AiohttpClient(get_http_session(config))
