"""Pytest configuration and fixtures for tests.

Provides an in-memory stand-in for the Ontraport HTTP API built on
httpx.MockTransport, plus a mock Redis client.
"""

import json
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import pytest_asyncio

from ontraport_api.models.api_object import ApiObject
from ontraport_api.services.request_helper import OntraportRequestHelper

BASE_URL = "https://api.ontraport.com/1"
API_PREFIX = "/1"


class FakeOntraport:
    """Routes requests to canned responses and records what was sent.

    Responses queued for the same route are served in order; the last one
    keeps being served once the queue is down to it.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], List[Tuple[int, Any, Dict[str, str]]]] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        data: Any = None,
        status: int = 200,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        """Queue a response. ``data`` is wrapped in the envelope unless ``body`` is given."""
        if body is None:
            body = {"code": 0, "data": data, "account_id": 12345}
        self.routes.setdefault((method, path), []).append((status, body, headers or {}))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]
        queue = self.routes.get((request.method, path))
        if not queue:
            return httpx.Response(404, json={"message": f"No route for {request.method} {path}"})
        status, body, headers = queue.pop(0) if len(queue) > 1 else queue[0]
        return httpx.Response(status, json=body, headers=headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def host():
    """Create an empty data bag."""
    return ApiObject()


@pytest.fixture
def fake_api():
    return FakeOntraport()


@pytest.fixture
def mock_redis():
    """Create a mock Redis client."""
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.setex = AsyncMock()
    return redis


@pytest_asyncio.fixture
async def api_request(fake_api):
    """Create an OntraportRequestHelper talking to the fake API."""
    helper = OntraportRequestHelper(
        app_id="test-app-id",
        api_key="test-api-key",
        base_url=BASE_URL,
        transport=fake_api.transport,
    )
    yield helper
    await helper.close()


@pytest.fixture
def no_sleep():
    """Skip retry backoff delays."""
    with patch("ontraport_api.services.request_helper.asyncio.sleep", new_callable=AsyncMock) as sleep:
        yield sleep
