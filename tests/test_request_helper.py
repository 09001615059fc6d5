"""Unit tests for OntraportRequestHelper.

Tests cover:
- HTTP client initialization and configuration
- Api-Appid / Api-Key authentication headers
- Response envelope unwrapping
- Redis caching with TTL
- Error handling and retry logic
"""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from ontraport_api.core.config import Settings
from ontraport_api.core.errors import (
    ConfigurationError,
    ErrorCode,
    OntraportAuthenticationError,
    OntraportConnectionError,
    OntraportError,
    OntraportForbiddenError,
    OntraportNotFoundError,
    OntraportRateLimitError,
    OntraportServerError,
    OntraportValidationError,
)
from ontraport_api.services.request_helper import OntraportRequestHelper

BASE_URL = "https://api.ontraport.com/1"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def client(mock_redis):
    """Create an OntraportRequestHelper with mock Redis."""
    return OntraportRequestHelper(
        app_id="test-app-id",
        api_key="test-api-key",
        base_url=BASE_URL,
        cache=mock_redis,
        cache_ttl=300,
    )


@pytest.fixture
def client_no_cache():
    """Create an OntraportRequestHelper without caching."""
    return OntraportRequestHelper(app_id="test-app-id", api_key="test-api-key")


def error_response(status, body=None, headers=None, text=""):
    response = MagicMock()
    response.is_success = False
    response.status_code = status
    response.text = text
    response.headers = headers or {}
    response.json.return_value = body or {}
    return response


def ok_response(body):
    response = MagicMock()
    response.is_success = True
    response.status_code = 200
    response.json.return_value = body
    return response


# =============================================================================
# Initialization Tests
# =============================================================================


class TestClientInitialization:
    """Tests for OntraportRequestHelper initialization."""

    def test_init_with_all_params(self, mock_redis):
        client = OntraportRequestHelper(
            app_id="app",
            api_key="key",
            base_url="https://api.ontraport.com/1/",
            cache=mock_redis,
            cache_ttl=600,
            max_retries=5,
            timeout=10.0,
        )

        # URL should be normalized (trailing slash removed)
        assert client.base_url == "https://api.ontraport.com/1"
        assert client.cache == mock_redis
        assert client.cache_ttl == 600
        assert client.max_retries == 5
        assert client.timeout == 10.0

    def test_init_with_defaults(self):
        client = OntraportRequestHelper(app_id="app", api_key="key")

        assert client.base_url == OntraportRequestHelper.DEFAULT_BASE_URL
        assert client.cache is None
        assert client.cache_ttl == OntraportRequestHelper.DEFAULT_CACHE_TTL
        assert client.max_retries == OntraportRequestHelper.MAX_RETRIES

    def test_from_settings(self):
        settings = Settings(app_id="app", api_key="key", base_url="https://example.test/1", max_retries=1)

        client = OntraportRequestHelper.from_settings(settings)

        assert client.app_id == "app"
        assert client.api_key == "key"
        assert client.base_url == "https://example.test/1"
        assert client.max_retries == 1
        assert client.cache is None

    def test_from_settings_connects_redis(self):
        settings = Settings(app_id="app", api_key="key", redis_url="redis://localhost:6379/0")

        with patch("ontraport_api.services.request_helper.Redis.from_url") as from_url:
            client = OntraportRequestHelper.from_settings(settings)

        from_url.assert_called_once_with("redis://localhost:6379/0")
        assert client.cache is from_url.return_value

    def test_from_settings_requires_credentials(self):
        with pytest.raises(ConfigurationError) as exc_info:
            OntraportRequestHelper.from_settings(Settings(app_id="", api_key=""))

        assert exc_info.value.error_code == ErrorCode.CONFIGURATION_ERROR


# =============================================================================
# Authentication Header Tests
# =============================================================================


class TestAuthenticationHeader:
    """Tests for Api-Appid / Api-Key headers."""

    @pytest.mark.asyncio
    async def test_headers_on_client(self, client_no_cache):
        http_client = await client_no_cache._get_client()

        assert http_client.headers["Api-Appid"] == "test-app-id"
        assert http_client.headers["Api-Key"] == "test-api-key"
        assert http_client.headers["Accept"] == "application/json"

        await client_no_cache.close()

    @pytest.mark.asyncio
    async def test_headers_sent(self, api_request, fake_api):
        fake_api.add("GET", "/Rules", data=[])

        await api_request.get("/Rules")

        assert fake_api.last_request.headers["Api-Appid"] == "test-app-id"
        assert fake_api.last_request.headers["Api-Key"] == "test-api-key"


# =============================================================================
# Envelope Tests
# =============================================================================


class TestEnvelope:
    """Tests for unwrapping {"code": 0, "data": ...}."""

    @pytest.mark.asyncio
    async def test_returns_data_member(self, api_request, fake_api):
        fake_api.add("GET", "/Rule", data={"id": "1"})

        result = await api_request.get("/Rule", params={"id": 1})

        assert result == {"id": "1"}
        assert fake_api.last_request.url.params["id"] == "1"

    @pytest.mark.asyncio
    async def test_non_zero_code_raises(self, api_request, fake_api):
        fake_api.add("GET", "/Rule", body={"code": 1, "data": "Invalid id"})

        with pytest.raises(OntraportError, match="code 1"):
            await api_request.get("/Rule")

    @pytest.mark.asyncio
    async def test_body_without_envelope_returned_as_is(self, api_request, fake_api):
        fake_api.add("GET", "/Rules", body=[{"id": "1"}])

        assert await api_request.get("/Rules") == [{"id": "1"}]

    @pytest.mark.asyncio
    async def test_post_sends_json(self, api_request, fake_api):
        fake_api.add("POST", "/Contacts", data={"id": "9"})

        await api_request.post("/Contacts", {"firstname": "Ada"})

        assert fake_api.last_json() == {"firstname": "Ada"}


# =============================================================================
# Cache Tests
# =============================================================================


class TestCache:
    """Tests for cache keys and cache operations."""

    def test_cache_key_stable_and_prefixed(self, client):
        key1 = client._get_cache_key("/Rules/meta")
        key2 = client._get_cache_key("/Rules/meta")

        assert key1 == key2
        assert key1.startswith("ontraport:")

    def test_cache_key_param_order_independent(self, client):
        key1 = client._get_cache_key("/objects/meta", {"objectID": 0, "format": "byId"})
        key2 = client._get_cache_key("/objects/meta", {"format": "byId", "objectID": 0})

        assert key1 == key2

    def test_cache_key_scoped_to_account(self, mock_redis):
        first = OntraportRequestHelper(app_id="a", api_key="k", cache=mock_redis)
        second = OntraportRequestHelper(app_id="b", api_key="k", cache=mock_redis)

        assert first._get_cache_key("/Rules/meta") != second._get_cache_key("/Rules/meta")

    @pytest.mark.asyncio
    async def test_get_from_cache_hit(self, client, mock_redis):
        mock_redis.get.return_value = json.dumps({"a": 1})

        assert await client._get_from_cache("k") == {"a": 1}
        mock_redis.get.assert_called_once_with("k")

    @pytest.mark.asyncio
    async def test_get_from_cache_failure_is_ignored(self, client, mock_redis):
        mock_redis.get.side_effect = ConnectionError("redis down")

        assert await client._get_from_cache("k") is None

    @pytest.mark.asyncio
    async def test_set_cache_default_ttl(self, client, mock_redis):
        await client._set_cache("k", {"a": 1})

        mock_redis.setex.assert_called_once_with("k", 300, json.dumps({"a": 1}))

    @pytest.mark.asyncio
    async def test_set_cache_no_redis(self, client_no_cache):
        # Should not raise
        await client_no_cache._set_cache("k", {"a": 1})

    @pytest.mark.asyncio
    async def test_get_with_cache_stores_then_serves(self, fake_api, mock_redis):
        store = {}

        async def fake_get(key):
            return store.get(key)

        async def fake_setex(key, ttl, value):
            store[key] = value

        mock_redis.get = AsyncMock(side_effect=fake_get)
        mock_redis.setex = AsyncMock(side_effect=fake_setex)
        fake_api.add("GET", "/Rules/meta", data={"6": {"name": "Rule", "fields": {}}})

        async with OntraportRequestHelper(
            app_id="app", api_key="key", base_url=BASE_URL, cache=mock_redis, transport=fake_api.transport
        ) as helper:
            first = await helper.get("/Rules/meta", use_cache=True)
            second = await helper.get("/Rules/meta", use_cache=True)

        assert first == second == {"6": {"name": "Rule", "fields": {}}}
        assert len(fake_api.requests) == 1

    @pytest.mark.asyncio
    async def test_get_without_cache_skips_redis(self, fake_api, mock_redis):
        fake_api.add("GET", "/Rules", data=[])

        async with OntraportRequestHelper(
            app_id="app", api_key="key", base_url=BASE_URL, cache=mock_redis, transport=fake_api.transport
        ) as helper:
            await helper.get("/Rules")

        mock_redis.get.assert_not_called()
        mock_redis.setex.assert_not_called()


# =============================================================================
# Error Handling Tests
# =============================================================================


class TestErrorHandling:
    """Tests for HTTP error handling."""

    @pytest.mark.parametrize(
        "status,exception",
        [
            (400, OntraportValidationError),
            (401, OntraportAuthenticationError),
            (403, OntraportForbiddenError),
            (404, OntraportNotFoundError),
            (422, OntraportValidationError),
            (500, OntraportServerError),
            (503, OntraportServerError),
            (418, OntraportError),
        ],
    )
    def test_status_mapping(self, client, status, exception):
        with pytest.raises(exception):
            client._handle_response_error(error_response(status, {"message": "nope"}))

    def test_handle_429_error(self, client):
        response = error_response(429, {"message": "slow down"}, headers={"Retry-After": "60"})

        with pytest.raises(OntraportRateLimitError) as exc_info:
            client._handle_response_error(response)

        assert exc_info.value.retry_after == 60
        assert exc_info.value.is_retryable

    def test_message_from_body(self, client):
        with pytest.raises(OntraportAuthenticationError) as exc_info:
            client._handle_response_error(error_response(401, {"message": "Invalid Api-Key"}))

        assert "Invalid Api-Key" in str(exc_info.value)
        assert not exc_info.value.is_retryable
        assert exc_info.value.suggested_action

    def test_non_json_body_uses_text(self, client):
        response = error_response(500, text="Bad Gateway")
        response.json.side_effect = ValueError("not json")

        with pytest.raises(OntraportServerError, match="Bad Gateway"):
            client._handle_response_error(response)

    def test_handle_success_no_error(self, client):
        # Should not raise
        client._handle_response_error(ok_response({}))


# =============================================================================
# Retry Logic Tests
# =============================================================================


class TestRetryLogic:
    """Tests for exponential backoff retry logic."""

    @pytest.mark.asyncio
    async def test_retry_on_connection_error(self, client_no_cache, no_sleep):
        call_count = 0

        async def mock_request(*args, **kwargs):
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise httpx.ConnectError("Connection refused")
            return ok_response({"code": 0, "data": "success"})

        with patch.object(httpx.AsyncClient, "request", side_effect=mock_request):
            result = await client_no_cache.get("/test")

        assert result == "success"
        assert call_count == 3
        assert [c.args[0] for c in no_sleep.call_args_list] == [1.0, 2.0]
        await client_no_cache.close()

    @pytest.mark.asyncio
    async def test_retry_on_server_error(self, api_request, fake_api, no_sleep):
        fake_api.add("GET", "/Rules", status=503, body={"message": "unavailable"})
        fake_api.add("GET", "/Rules", data=[{"id": "1"}])

        result = await api_request.get("/Rules")

        assert result == [{"id": "1"}]
        assert len(fake_api.requests) == 2

    @pytest.mark.asyncio
    async def test_rate_limit_honours_retry_after(self, api_request, fake_api, no_sleep):
        fake_api.add("GET", "/Rules", status=429, body={"message": "slow"}, headers={"Retry-After": "7"})
        fake_api.add("GET", "/Rules", data=[])

        await api_request.get("/Rules")

        no_sleep.assert_awaited_once_with(7)

    @pytest.mark.asyncio
    async def test_no_retry_on_client_error(self, api_request, fake_api, no_sleep):
        fake_api.add("GET", "/Rule", status=400, body={"message": "bad id"})

        with pytest.raises(OntraportValidationError):
            await api_request.get("/Rule")

        assert len(fake_api.requests) == 1
        no_sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_max_retries_exceeded(self, api_request, fake_api, no_sleep):
        fake_api.add("GET", "/Rules", status=500, body={"message": "boom"})

        with pytest.raises(OntraportServerError):
            await api_request.get("/Rules")

        assert len(fake_api.requests) == api_request.max_retries + 1

    @pytest.mark.asyncio
    async def test_connection_error_after_retries(self, client_no_cache, no_sleep):
        with patch.object(httpx.AsyncClient, "request", side_effect=httpx.ConnectTimeout("timed out")):
            with pytest.raises(OntraportConnectionError):
                await client_no_cache.get("/Rules")

        assert no_sleep.await_count == client_no_cache.max_retries
        await client_no_cache.close()


# =============================================================================
# Context Manager Tests
# =============================================================================


class TestContextManager:
    @pytest.mark.asyncio
    async def test_context_manager_closes_client(self, fake_api):
        fake_api.add("GET", "/Rules", data=[])

        async with OntraportRequestHelper(
            app_id="app", api_key="key", base_url=BASE_URL, transport=fake_api.transport
        ) as helper:
            await helper.get("/Rules")
            assert helper._client is not None

        assert helper._client is None
