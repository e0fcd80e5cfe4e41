"""
Shared fixtures: fresh configuration per test and httpx clients backed by
``httpx.MockTransport``.
"""

import httpx
import pytest

from medsafe.core.config import reset_config
from medsafe.services.sources.health_data_client import HealthDataClient
from medsafe.services.sources.openfda_client import OpenFDAClient


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def mock_http():
    """Factory: handler(request) -> httpx.Response  ==>  AsyncClient."""
    def factory(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return factory


@pytest.fixture
def offline_http(mock_http):
    """Client whose every request fails with a connection error."""
    def handler(request):
        raise httpx.ConnectError("network unreachable", request=request)
    return mock_http(handler)


@pytest.fixture
def empty_http(mock_http):
    """Client that answers every request with 404 (no matches)."""
    return mock_http(lambda request: httpx.Response(404, json={"error": {"code": "NOT_FOUND"}}))


@pytest.fixture
def offline_sources(offline_http):
    return OpenFDAClient(http_client=offline_http), HealthDataClient(http_client=offline_http)


@pytest.fixture
def empty_sources(empty_http):
    return OpenFDAClient(http_client=empty_http), HealthDataClient(http_client=empty_http)
