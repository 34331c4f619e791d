"""
HTTP client for the upstream product/order service.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from shared.errors import UpstreamUnavailableError
from shared.logging import get_logger
from shared.metrics import MetricsCollector

UPSTREAM_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class UpstreamResponse:
    """Status and raw body of a completed upstream call."""

    url: str
    status_code: int
    content: bytes

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    def json(self) -> Any:
        """Decode the body; raises ValueError when it is not JSON."""
        return json.loads(self.content)


class UpstreamClient:
    """Single-attempt, bounded-timeout client for the upstream service.

    Transport failures (refused connections, DNS errors, timeouts) raise
    ``UpstreamUnavailableError``. Any HTTP response, whatever its status,
    is returned to the caller to classify.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = UPSTREAM_TIMEOUT_SECONDS,
        metrics: Optional[MetricsCollector] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.metrics = metrics
        self.logger = get_logger("gateway.upstream_client")
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def get(self, path: str) -> UpstreamResponse:
        """Issue a GET against the upstream."""
        return await self._send("GET", path)

    async def post_json(self, path: str, payload: Dict[str, Any]) -> UpstreamResponse:
        """POST a JSON document to the upstream."""
        return await self._send(
            "POST",
            path,
            content=json.dumps(payload).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )

    async def _send(self, method: str, path: str, **kwargs: Any) -> UpstreamResponse:
        url = self.url_for(path)
        self.logger.info("Calling upstream service", method=method, url=url)

        try:
            # httpx limits each read separately; the whole call gets one deadline
            response = await asyncio.wait_for(
                self._request(method, url, path, **kwargs), timeout=self.timeout
            )
        except (httpx.HTTPError, asyncio.TimeoutError) as exc:
            self.logger.error(
                "Upstream request failed",
                method=method,
                url=url,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            self._record(path, "transport_error")
            raise UpstreamUnavailableError(
                details={"url": url, "method": method, "cause": repr(exc)}
            ) from exc

        self._record(path, "success" if response.is_success else "error_status")
        if not response.is_success:
            self.logger.warning(
                "Upstream returned non-success status",
                method=method,
                url=url,
                status_code=response.status_code,
            )

        return UpstreamResponse(url=url, status_code=response.status_code, content=response.content)

    async def _request(self, method: str, url: str, path: str, **kwargs: Any) -> httpx.Response:
        if self.metrics:
            with self.metrics.time_operation("upstream_request_duration_seconds", endpoint=path):
                return await self._client.request(method, url, **kwargs)
        return await self._client.request(method, url, **kwargs)

    def _record(self, path: str, outcome: str) -> None:
        if self.metrics:
            self.metrics.record_upstream_call(path, outcome)
