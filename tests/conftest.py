"""Shared test fixtures for Visma.net MCP tests."""

import json

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from vismanet_server.vismanet_client import VismaNetAuthorization, VismaNetClient


TEST_ENV = {
    "VISMANET_TOKEN": "test_token",
    "VISMANET_COMPANY_ID": "1234567",
}


@pytest.fixture
def mock_response():
    """Factory for creating mock HTTP responses.

    Usage:
        resp = mock_response(200, {"key": "value"})
        resp = mock_response(201, headers={"Location": "https://.../customer/10001"})
    """
    def _make(status_code=200, json_data=None, text=None, headers=None, content=b""):
        response = MagicMock()
        response.status_code = status_code
        if json_data is not None:
            response.text = text if text is not None else json.dumps(json_data)
        else:
            response.text = text or ""
        response.content = content
        response.headers = headers or {}
        return response
    return _make


@pytest.fixture
def mock_client():
    """Create a VismaNetClient with mocked _request method."""
    with patch.dict("os.environ", TEST_ENV, clear=True):
        client = VismaNetClient.from_env()
        client._request = AsyncMock()
        return client


@pytest.fixture
async def transport_client():
    """Factory for a VismaNetClient backed by httpx.MockTransport.

    Usage:
        client = transport_client(handler)  # handler(request) -> httpx.Response
    """
    opened = []

    def _make(handler, **kwargs):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        opened.append(http_client)
        kwargs.setdefault(
            "authorization",
            VismaNetAuthorization(token="test_token", company_id=1234567),
        )
        return VismaNetClient(http_client=http_client, **kwargs)

    yield _make
    for http_client in opened:
        await http_client.aclose()


# All resource modules that import VismaNetClient
_RESOURCE_MODULES = [
    "vismanet_server.resources.auth",
    "vismanet_server.resources.customers",
    "vismanet_server.resources.suppliers",
    "vismanet_server.resources.sales_orders",
    "vismanet_server.resources.customer_invoices",
    "vismanet_server.resources.inventory",
    "vismanet_server.resources.templates",
]


@pytest.fixture
def mock_vismanet_class():
    """Patch VismaNetClient in all resource modules, yield (mock_class, mock_instance).

    Usage:
        def test_something(mock_vismanet_class):
            mock_class, mock_instance = mock_vismanet_class
            mock_instance.some_method = AsyncMock(return_value={...})
            # call the tool function...
    """
    mock_instance = MagicMock()
    mock_class = MagicMock()
    mock_class.from_env.return_value = mock_instance

    patchers = [patch(f"{mod}.VismaNetClient", mock_class) for mod in _RESOURCE_MODULES]
    for p in patchers:
        p.start()
    yield mock_class, mock_instance
    for p in patchers:
        p.stop()
