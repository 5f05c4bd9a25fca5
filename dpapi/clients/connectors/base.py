"""Base class shared by the service connectors."""

from __future__ import annotations

from ..runtime.rest import HTTPClient


class BaseClient:
    """Owns (or borrows) the HTTPClient used to talk to one service.

    A client created without an ``http_client`` builds its own and closes it
    on ``close()``; a borrowed one is left open for its owner.
    """

    service = "api"

    def __init__(
        self,
        base_url: str,
        *,
        http_client: HTTPClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url
        self._owns_http = http_client is None
        self._http = http_client or HTTPClient(
            base_url=base_url, timeout=timeout, service=self.service
        )

    async def close(self) -> None:
        if self._owns_http:
            await self._http.close()

    async def __aenter__(self) -> BaseClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
