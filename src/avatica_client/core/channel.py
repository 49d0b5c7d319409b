"""RPC channel for the Avatica JSON protocol.

Every request is a JSON object POSTed to a single endpoint; the "request"
field selects the operation. HttpChannel wraps an httpx.AsyncClient and
maps transport, status and body failures onto the NetworkError family.
"""

from __future__ import annotations

import json
import time
from typing import Any, Protocol

import httpx
import sentry_sdk

from avatica_client.core.exceptions import (
    NetworkError,
    ProtocolError,
    ServerError,
    TimeoutError,
)
from avatica_client.core.logging import get_logger

_JSON_HEADERS = {"Content-Type": "application/json"}


class RpcChannel(Protocol):
    """POST(JSON) -> JSON. Implementations must be safe to share."""

    async def post(self, request: dict[str, Any]) -> dict[str, Any]: ...


def _server_error(payload: dict[str, Any]) -> ServerError:
    message = payload.get("errorMessage") or "Avatica server error"
    return ServerError(
        f"Server error: {message}",
        error_code=payload.get("errorCode"),
        sql_state=payload.get("sqlState"),
        severity=payload.get("severity"),
    )


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        msg = f"Malformed response body (HTTP {response.status_code}): {e}"
        raise ProtocolError(msg) from e


def _decode_error(response: httpx.Response) -> dict[str, Any] | None:
    """Return the Avatica error payload of a failed response, if it has one."""
    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if isinstance(payload, dict) and payload.get("response") == "error":
        return payload
    return None


class HttpChannel:
    """Avatica channel over HTTP using httpx."""

    def __init__(
        self,
        url: str,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self.url = url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers=_JSON_HEADERS, timeout=httpx.Timeout(timeout)
        )

    async def __aenter__(self) -> HttpChannel:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def post(self, request: dict[str, Any]) -> dict[str, Any]:
        """POST one request and return the decoded JSON object."""
        log = get_logger("channel")
        name = request.get("request", "unknown")
        if self._client.is_closed:
            msg = f"Request '{name}' to {self.url} failed: channel is closed"
            raise NetworkError(msg)

        with sentry_sdk.start_span(op="rpc.post", name=name) as span:
            start_time = time.monotonic()
            try:
                response = await self._client.post(
                    self.url, json=request, headers=_JSON_HEADERS
                )
            except httpx.TimeoutException as e:
                span.set_status("deadline_exceeded")
                log.error("rpc timeout", request=name, error=str(e))
                msg = f"Request '{name}' to {self.url} timed out: {e}"
                raise TimeoutError(msg) from e
            except httpx.HTTPError as e:
                span.set_status("unavailable")
                log.error("rpc transport error", request=name, error=str(e))
                msg = f"Request '{name}' to {self.url} failed: {e}"
                raise NetworkError(msg) from e

            duration_ms = (time.monotonic() - start_time) * 1000
            span.set_data("duration_ms", duration_ms)
            span.set_data("status_code", response.status_code)

            if response.is_error:
                span.set_status("internal_error")
                payload = _decode_error(response)
                if payload is not None:
                    raise _server_error(payload)
                msg = f"Request '{name}' failed with HTTP {response.status_code}"
                raise NetworkError(msg)

            payload = _decode(response)
            if not isinstance(payload, dict):
                span.set_status("internal_error")
                msg = f"Expected JSON object for '{name}', got {type(payload).__name__}"
                raise ProtocolError(msg)
            if payload.get("response") == "error":
                span.set_status("internal_error")
                raise _server_error(payload)

            log.debug(
                "rpc complete",
                request=name,
                duration_ms=f"{duration_ms:.1f}",
            )
            return payload

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this channel created it."""
        if self._owns_client:
            await self._client.aclose()
