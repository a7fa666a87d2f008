"""
HTTP seam for JSON-RPC.

``JsonRpcClient`` talks to a ``JsonRpcTransport``; ``HttpxTransport``
is the production one. Tests pass a fake, or drive HttpxTransport
through pytest-httpx.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)


@runtime_checkable
class JsonRpcTransport(Protocol):
    """Async transport for JSON-RPC POST requests."""

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST ``payload`` and return the decoded JSON object.

        Raises:
            Exception: Connection refused, timeout, TLS failure, non-2xx
                status, or a body that is not a JSON object.
        """
        ...


class HttpxTransport:
    """Transport backed by httpx.AsyncClient, one client per request."""

    def __init__(self, timeout: float = 30.0) -> None:
        self._timeout = timeout

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
            logger.debug(
                "POST %s method=%s status=%s",
                url,
                payload.get("method"),
                response.status_code,
            )
            response.raise_for_status()
            body = response.json()
        if not isinstance(body, dict):
            raise ValueError(f"expected a JSON object from {url}, got {type(body).__name__}")
        return body
