"""
HTTP client utilities for external API calls.
"""

import asyncio
import time
from typing import Any, Dict, Optional

import httpx
import structlog

from src.config.settings import settings
from src.domain.exceptions.provider_error import ProviderAPIError

logger = structlog.get_logger()

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class HTTPClient:
    """HTTP client for external API calls with retry and exponential backoff."""

    def __init__(
        self,
        provider: str,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff_factor: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.provider = provider
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self.max_retries = (
            max_retries if max_retries is not None else settings.HTTP_MAX_RETRIES
        )
        self.backoff_factor = (
            backoff_factor if backoff_factor is not None else settings.HTTP_BACKOFF_FACTOR
        )
        self.transport = transport
        self.client = None

    async def __aenter__(self):
        """Async context manager entry."""
        self.client = httpx.AsyncClient(timeout=self.timeout, transport=self.transport)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.client:
            await self.client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Send a request, retrying timeouts, network errors and 429/5xx replies.

        Raises:
            ProviderAPIError: When the final attempt times out or cannot connect
        """
        attempts = self.max_retries + 1

        for attempt in range(1, attempts + 1):
            start_time = time.time()
            try:
                response = await self.client.request(
                    method, url, json=json, data=data, params=params, headers=headers
                )
            except httpx.TimeoutException:
                if attempt < attempts:
                    await self._backoff(method, url, attempt, "timeout")
                    continue
                raise ProviderAPIError(self.provider, 408, "Request timeout")
            except httpx.RequestError as e:
                if attempt < attempts:
                    await self._backoff(method, url, attempt, str(e))
                    continue
                raise ProviderAPIError(self.provider, 0, f"Network error: {str(e)}")

            response_time = (time.time() - start_time) * 1000
            logger.debug(
                "HTTP request completed",
                provider=self.provider,
                method=method,
                url=url,
                status_code=response.status_code,
                response_time_ms=response_time,
                attempt=attempt,
            )

            if response.status_code in RETRYABLE_STATUS_CODES and attempt < attempts:
                await self._backoff(method, url, attempt, f"status {response.status_code}")
                continue

            return response

    async def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Make GET request."""
        return await self.request("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Make POST request."""
        return await self.request("POST", url, json=json, data=data, headers=headers)

    async def _backoff(self, method: str, url: str, attempt: int, reason: str) -> None:
        delay = self.backoff_factor * (2 ** (attempt - 1))
        logger.warning(
            "HTTP request failed, retrying",
            provider=self.provider,
            method=method,
            url=url,
            attempt=attempt,
            retry_in_seconds=delay,
            reason=reason,
        )
        await asyncio.sleep(delay)
