"""HTTP client helper."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import aiohttp

from ...core.exceptions import APIResponseError
from ...core.headers import ETAG_HEADER

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RESTResponse:
    """Decoded response.

    Attributes:
        status: HTTP status code
        data: Decoded JSON body (None for 204 or an empty body)
        etag: ETag response header ("" if absent)
    """

    status: int
    data: Any
    etag: str = ""


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        service: str = "api",
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.service = service
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def url(self, path: str) -> str:
        """Join a relative path to base_url; absolute URLs are returned as-is."""
        if self.base_url and not path.startswith("http"):
            return f"{self.base_url}{path}"
        return path

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Any = None,
        headers: dict[str, str] | None = None,
        json_body: Any = None,
        expected_status: Iterable[int] = (200,),
    ) -> RESTResponse:
        """Send a request and decode its JSON body.

        Args:
            method: HTTP method
            url: Absolute URL, or path relative to base_url
            params: Query parameters (mapping or list of pairs)
            headers: Request headers
            json_body: Body to JSON encode
            expected_status: Accepted status codes; the first is reported on failure

        Raises:
            APIResponseError: If the response status is not expected
        """
        url = self.url(url)
        expected = tuple(expected_status)
        logger.debug("http_request", extra={"method": method, "url": url, "service": self.service})

        async with self.session.request(
            method, url, params=params, headers=headers, json=json_body
        ) as response:
            if response.status not in expected:
                raise APIResponseError.from_status(self.service, expected[0], response.status, url)
            etag = response.headers.get(ETAG_HEADER, "")
            if response.status == 204:
                return RESTResponse(status=response.status, data=None, etag=etag)
            data = await response.json(content_type=None)
            return RESTResponse(status=response.status, data=data, etag=etag)

    async def get(
        self,
        url: str,
        params: Any = None,
        headers: dict[str, str] | None = None,
        expected_status: Iterable[int] = (200,),
    ) -> RESTResponse:
        """GET request."""
        return await self.request(
            "GET", url, params=params, headers=headers, expected_status=expected_status
        )

    async def patch(
        self,
        url: str,
        json_body: Any,
        headers: dict[str, str] | None = None,
        expected_status: Iterable[int] = (200,),
    ) -> RESTResponse:
        """PATCH request."""
        return await self.request(
            "PATCH", url, json_body=json_body, headers=headers, expected_status=expected_status
        )

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
