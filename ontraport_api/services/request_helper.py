"""HTTP transport for the Ontraport REST API.

This module provides the OntraportRequestHelper class used by every resource
service. It includes:
- HTTP client with Api-Appid / Api-Key authentication
- Unwrapping of Ontraport's ``{"code": 0, "data": ...}`` response envelope
- Optional Redis caching with configurable TTL for schema lookups
- Error handling with exponential backoff retry logic
"""

import asyncio
import hashlib
import json
from typing import Any, Optional

import httpx
from redis.asyncio import Redis

from ontraport_api.core.config import Settings
from ontraport_api.core.errors import (
    ConfigurationError,
    OntraportAuthenticationError,
    OntraportConnectionError,
    OntraportError,
    OntraportForbiddenError,
    OntraportNotFoundError,
    OntraportRateLimitError,
    OntraportServerError,
    OntraportValidationError,
)
from ontraport_api.core.logging import get_logger

logger = get_logger(__name__)


class OntraportRequestHelper:
    """Sends authenticated requests to Ontraport and returns response data.

    Example:
        ```python
        async with OntraportRequestHelper(app_id="2_1234_abc", api_key="secret") as helper:
            rules = await helper.get("/Rules", params={"range": 10})
        ```
    """

    # Default configuration
    DEFAULT_BASE_URL = "https://api.ontraport.com/1"
    DEFAULT_CACHE_TTL = 3600  # 1 hour
    MAX_RETRIES = 3
    INITIAL_RETRY_DELAY = 1.0  # seconds
    MAX_RETRY_DELAY = 30.0  # seconds
    REQUEST_TIMEOUT = 30.0  # seconds

    def __init__(
        self,
        app_id: str,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        cache: Optional[Redis] = None,
        cache_ttl: Optional[int] = None,
        max_retries: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize OntraportRequestHelper.

        Args:
            app_id: Ontraport API App ID
            api_key: Ontraport API key
            base_url: API base URL including the version segment
            cache: Optional Redis client for schema caching. If None, caching is disabled.
            cache_ttl: Cache TTL in seconds. Defaults to 3600.
            max_retries: Retries for transient failures. Defaults to 3.
            timeout: Request timeout in seconds. Defaults to 30.
            transport: Optional httpx transport, mainly for tests
        """
        self.app_id = app_id
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.cache = cache
        self.cache_ttl = cache_ttl if cache_ttl is not None else self.DEFAULT_CACHE_TTL
        self.max_retries = max_retries if max_retries is not None else self.MAX_RETRIES
        self.timeout = timeout if timeout is not None else self.REQUEST_TIMEOUT
        self._transport = transport

        # HTTP client will be created lazily
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "OntraportRequestHelper":
        """Build a helper from Settings, connecting Redis when ``redis_url`` is set.

        Raises:
            ConfigurationError: If app_id or api_key is not configured
        """
        if not settings.has_credentials:
            raise ConfigurationError(
                "ONTRAPORT_APP_ID and ONTRAPORT_API_KEY must be set to call the API"
            )
        if "cache" not in kwargs and settings.redis_url:
            kwargs["cache"] = Redis.from_url(settings.redis_url)
        return cls(
            app_id=settings.app_id,
            api_key=settings.api_key,
            base_url=settings.base_url,
            cache_ttl=settings.cache_ttl,
            max_retries=settings.max_retries,
            timeout=settings.request_timeout,
            **kwargs,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
                headers={
                    "Api-Appid": self.app_id,
                    "Api-Key": self.api_key,
                    "Accept": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "OntraportRequestHelper":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # =========================================================================
    # Cache Methods
    # =========================================================================

    def _get_cache_key(self, endpoint: str, params: Optional[dict] = None) -> str:
        """Generate a cache key scoped to the account, endpoint and parameters."""
        key_parts = [self.base_url, self.app_id, endpoint]
        if params:
            key_parts.append(json.dumps(params, sort_keys=True))

        key_hash = hashlib.md5(":".join(key_parts).encode()).hexdigest()
        return f"ontraport:{key_hash}"

    async def _get_from_cache(self, cache_key: str) -> Optional[Any]:
        """Get data from cache, or None if missing, expired or unavailable."""
        if self.cache is None:
            return None

        try:
            cached = await self.cache.get(cache_key)
            if cached:
                return json.loads(cached)
        except Exception as e:
            logger.warning(f"Cache get failed for {cache_key}: {e}")

        return None

    async def _set_cache(self, cache_key: str, data: Any, ttl: Optional[int] = None) -> None:
        """Store JSON-serializable data in cache."""
        if self.cache is None:
            return

        try:
            ttl = ttl if ttl is not None else self.cache_ttl
            await self.cache.setex(cache_key, ttl, json.dumps(data))
        except Exception as e:
            logger.warning(f"Cache set failed for {cache_key}: {e}")

    # =========================================================================
    # HTTP Request Methods
    # =========================================================================

    def _handle_response_error(self, response: httpx.Response) -> None:
        """Raise the exception matching an HTTP error response.

        Raises:
            OntraportValidationError: For 400 and 422 responses
            OntraportAuthenticationError: For 401 responses
            OntraportForbiddenError: For 403 responses
            OntraportNotFoundError: For 404 responses
            OntraportRateLimitError: For 429 responses
            OntraportServerError: For 5xx responses
            OntraportError: For other error responses
        """
        if response.is_success:
            return

        status = response.status_code

        try:
            error_detail = response.json()
            message = error_detail.get("message", error_detail.get("data", response.text))
        except Exception:
            message = response.text or f"HTTP {status}"

        if status in (400, 422):
            raise OntraportValidationError(f"Invalid request: {message}")
        elif status == 401:
            raise OntraportAuthenticationError(f"Authentication failed: {message}")
        elif status == 403:
            raise OntraportForbiddenError(f"Access forbidden: {message}")
        elif status == 404:
            raise OntraportNotFoundError(f"Resource not found: {message}")
        elif status == 429:
            retry_after = response.headers.get("Retry-After")
            retry_seconds = int(retry_after) if retry_after and retry_after.isdigit() else None
            raise OntraportRateLimitError(f"Rate limited: {message}", retry_after=retry_seconds)
        elif status >= 500:
            raise OntraportServerError(f"Server error ({status}): {message}")
        else:
            raise OntraportError(f"API error ({status}): {message}")

    def _backoff(self, attempt: int) -> float:
        return min(self.INITIAL_RETRY_DELAY * (2 ** attempt), self.MAX_RETRY_DELAY)

    async def _request_with_retry(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None,
        json_data: Optional[Any] = None,
    ) -> httpx.Response:
        """Make an HTTP request with exponential backoff retry.

        Raises:
            OntraportError: If the request fails and is not retryable, or all retries fail
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        client = await self._get_client()
        last_exception: Optional[OntraportError] = None

        for attempt in range(self.max_retries + 1):
            try:
                logger.debug(f"{method} {url} params={params}")
                response = await client.request(method=method, url=url, params=params, json=json_data)
                self._handle_response_error(response)
                return response

            except OntraportRateLimitError as e:
                last_exception = e
                if attempt < self.max_retries:
                    delay = min(e.retry_after, self.MAX_RETRY_DELAY) if e.retry_after else self._backoff(attempt)
                    logger.warning(
                        f"Rate limited, waiting {delay}s before retry "
                        f"(attempt {attempt + 1}/{self.max_retries + 1})"
                    )
                    await asyncio.sleep(delay)
                    continue
                raise
            except OntraportServerError as e:
                last_exception = e
                if attempt < self.max_retries:
                    delay = self._backoff(attempt)
                    logger.warning(
                        f"Server error, retrying in {delay}s "
                        f"(attempt {attempt + 1}/{self.max_retries + 1}): {e}"
                    )
                    await asyncio.sleep(delay)
                    continue
                raise
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                last_exception = OntraportConnectionError(
                    f"Cannot reach Ontraport at {self.base_url}: {e}"
                )
                if attempt < self.max_retries:
                    delay = self._backoff(attempt)
                    logger.warning(
                        f"Connection failed, retrying in {delay}s "
                        f"(attempt {attempt + 1}/{self.max_retries + 1}): {e}"
                    )
                    await asyncio.sleep(delay)
                    continue
                raise last_exception from e

        # All retries exhausted
        if last_exception:
            raise last_exception
        raise OntraportError("Request failed after all retries")

    @staticmethod
    def _unwrap(response: httpx.Response) -> Any:
        """Return the ``data`` member of an Ontraport response envelope."""
        try:
            body = response.json()
        except ValueError as e:
            raise OntraportError(f"Response is not JSON: {response.text[:200]!r}") from e

        if not isinstance(body, dict) or "data" not in body:
            return body
        code = body.get("code", 0)
        if code not in (0, "0"):
            raise OntraportError(f"Ontraport returned code {code}: {body.get('message', body['data'])}")
        return body["data"]

    async def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None,
        json_data: Optional[Any] = None,
    ) -> Any:
        """Send a request and return the unwrapped response data."""
        response = await self._request_with_retry(method, endpoint, params=params, json_data=json_data)
        return self._unwrap(response)

    async def get(
        self,
        endpoint: str,
        params: Optional[dict] = None,
        use_cache: bool = False,
        cache_ttl: Optional[int] = None,
    ) -> Any:
        """Make a GET request, optionally served from and stored in the cache."""
        if use_cache:
            cache_key = self._get_cache_key(endpoint, params)
            cached = await self._get_from_cache(cache_key)
            if cached is not None:
                logger.debug(f"Cache hit for {endpoint}")
                return cached

        data = await self.request("GET", endpoint, params=params)

        if use_cache:
            await self._set_cache(cache_key, data, ttl=cache_ttl)

        return data

    async def post(self, endpoint: str, data: dict, params: Optional[dict] = None) -> Any:
        return await self.request("POST", endpoint, params=params, json_data=data)

    async def put(self, endpoint: str, data: dict, params: Optional[dict] = None) -> Any:
        return await self.request("PUT", endpoint, params=params, json_data=data)

    async def delete(self, endpoint: str, params: Optional[dict] = None) -> Any:
        return await self.request("DELETE", endpoint, params=params)
