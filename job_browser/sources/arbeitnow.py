"""Arbeitnow jobs source connector.

Docs: https://www.arbeitnow.com/api/job-board-api

One call fetches one page of the public job board API. Page 1 is requested from
the bare endpoint, later pages add ``?page=N``. Successful payloads are written to
the page cache as-is; parsing them into job records is the store's job.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from ..cache import PageCache
from ..errors import HttpStatusError, MalformedResponseError, NetworkError, RequestTimeoutError
from .base import PageSource

logger = logging.getLogger(__name__)


class ArbeitnowSource(PageSource):
    """Fetch raw job board pages from Arbeitnow."""

    name = "arbeitnow"
    base_url = "https://www.arbeitnow.com/api/job-board-api"

    def __init__(
        self,
        cache: PageCache,
        base_url: Optional[str] = None,
        timeout_s: float = 10.0,
        max_retries: int = 0,
        backoff_s: float = 2.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.cache = cache
        if base_url:
            self.base_url = base_url
        self._timeout = timeout_s
        self._max_retries = max_retries
        self._backoff_s = backoff_s
        self._client = client
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @staticmethod
    def _params(page: int) -> Optional[Dict[str, Any]]:
        if page < 1:
            raise ValueError(f"page must be >= 1 (got {page})")
        # The first page is always requested without a query string.
        return {"page": page} if page > 1 else None

    def page_url(self, page: int) -> str:
        params = self._params(page)
        if params is None:
            return self.base_url
        return str(httpx.URL(self.base_url, params=params))

    async def fetch(self, page: int) -> Optional[Dict[str, Any]]:
        """Fetch `page`, cache the payload and return it."""
        params = self._params(page)
        if self._in_flight:
            logger.debug("Fetch for page %s dropped: another request is in flight", page)
            return None

        self._in_flight = True
        try:
            payload = await self._fetch_with_timeout(page, params)
        finally:
            self._in_flight = False

        try:
            self.cache.put(page, payload)
        except OSError as exc:
            logger.warning("Could not cache page %s: %s", page, exc)
        return payload

    async def _fetch_with_timeout(self, page: int, params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        try:
            return await asyncio.wait_for(self._request(params), timeout=self._timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise RequestTimeoutError(f"page {page} timed out after {self._timeout:g}s") from exc

    async def _request(self, params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        if self._client is not None:
            return await self._get(self._client, params)
        async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
            return await self._get(client, params)

    async def _get(self, client: httpx.AsyncClient, params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        retries = 0
        while True:
            try:
                resp = await client.get(self.base_url, params=params)
                resp.raise_for_status()
                break
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                if status == 429 and retries < self._max_retries:
                    sleep_s = self._backoff_s * (2**retries)
                    logger.info("Rate limited by %s, retrying in %.1fs", self.name, sleep_s)
                    await asyncio.sleep(sleep_s)
                    retries += 1
                    continue
                raise HttpStatusError(status) from exc
            except httpx.TimeoutException:
                raise
            except httpx.RequestError as exc:
                raise NetworkError(str(exc) or exc.__class__.__name__) from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            raise MalformedResponseError("response body is not JSON") from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
            raise MalformedResponseError("response is not an object with a 'data' array")
        return payload
