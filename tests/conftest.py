"""
Shared fixtures for the sitewatch test suite.
"""

from typing import Callable

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestServer

from fakes import create_test_app
from sitewatch.domain import CheckConfig, HeaderCheck


@pytest.fixture
def make_config() -> Callable[..., CheckConfig]:
    """
    Provides a factory for CheckConfig objects with test-friendly defaults.

    Returns:
        Callable[..., CheckConfig]: Builds a config; keyword arguments override defaults.
    """

    def _make(**overrides) -> CheckConfig:
        values = dict(
            workers=4,
            timeout=2.0,
            retries=0,
            header_checks=(),
            urls=("https://example.com",),
            period=0.0,
        )
        values.update(overrides)
        values["urls"] = tuple(values["urls"])
        values["header_checks"] = tuple(HeaderCheck(*check) for check in values["header_checks"])
        return CheckConfig(**values)

    return _make


@pytest_asyncio.fixture
async def http_server():
    """
    Serves the test application from fakes.create_test_app on a free local port.

    Yields:
        TestServer: The running server. Use make_url(path) to address it.
    """
    server = TestServer(create_test_app())
    await server.start_server()
    try:
        yield server
    finally:
        await server.close()
