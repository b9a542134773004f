"""
RPC client for the remote endpoint.

Every tool call becomes exactly one authenticated POST to the endpoint's
single RPC path. No retries: a failed call is reported to the caller
immediately.

Wire format:
    ::

        POST {base_url}/rpc
        Authorization: Bearer <64-char shared secret>
        Content-Type: application/json

        {"method": "generateImage", "args": ["a cat", null]}
"""

from __future__ import annotations

from typing import Any

import httpx

from docbridge.core.errors import RpcTransportError
from docbridge.core.logging import get_logger
from docbridge.core.secrets import SecretValue

logger = get_logger(__name__)


class RpcClient:
    """Dispatch tool calls to the remote endpoint.

    Args:
        base_url: Endpoint base URL (``https://worker.example.dev``)
        secret: Shared bearer secret
        rpc_path: Path of the RPC route
        timeout: Seconds per call; None waits indefinitely
        transport: Optional httpx transport (tests use MockTransport/ASGITransport)
    """

    def __init__(
        self,
        base_url: str,
        secret: SecretValue,
        *,
        rpc_path: str = "/rpc",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = base_url.rstrip("/") + rpc_path
        self._secret = secret
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._secret.get_secret()}",
            "Content-Type": "application/json",
        }

    async def call(self, method: str, args: list[Any]) -> httpx.Response:
        """POST ``{method, args}`` and return the fully read response.

        Raises:
            RpcTransportError: If the request cannot be completed
        """
        logger.debug("rpc_call_started", method=method, url=self.url, args=len(args))
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.url,
                    json={"method": method, "args": args},
                    headers=self._headers(),
                )
        except httpx.HTTPError as e:
            raise RpcTransportError(
                f"Fetch failed. {type(e).__name__}: {e}", cause=e
            ).with_context(tool=method, url=self.url) from e

        logger.debug(
            "rpc_call_completed",
            method=method,
            status=response.status_code,
            content_type=response.headers.get("content-type"),
            bytes=len(response.content),
        )
        return response


__all__ = ["RpcClient"]
