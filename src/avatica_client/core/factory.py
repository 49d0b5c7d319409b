"""Connection factory for the Avatica client."""

from __future__ import annotations

import asyncio
import uuid
from typing import TYPE_CHECKING, Any

from avatica_client.core.channel import HttpChannel
from avatica_client.core.config import (
    DEFAULT_CLIENT_HOST,
    DEFAULT_MAX_FRAME_SIZE,
    DEFAULT_MAX_ROW_COUNT,
)
from avatica_client.core.connection import Connection
from avatica_client.core.exceptions import TimeoutError
from avatica_client.core.logging import get_logger

if TYPE_CHECKING:
    from avatica_client.core.channel import RpcChannel
    from avatica_client.core.config import ClientConfig


class ConnectionFactory:
    """Opens Connections against one Avatica endpoint.

    The factory owns the HTTP channel it creates; close it with aclose() or
    use the factory as an async context manager. Connections returned by
    connect() should be closed by the caller once no longer needed.
    """

    def __init__(
        self,
        url: str,
        user: str | None = None,
        password: str | None = None,
        *,
        max_frame_size: int = DEFAULT_MAX_FRAME_SIZE,
        max_row_count: int = DEFAULT_MAX_ROW_COUNT,
        timeout: float | None = None,
        client_host: str = DEFAULT_CLIENT_HOST,
        channel: RpcChannel | None = None,
    ) -> None:
        self.url = url
        self.client_host = client_host
        self.max_frame_size = max_frame_size
        self.max_row_count = max_row_count
        self.timeout = timeout
        self._user = user
        self._password = password
        self._owns_channel = channel is None
        self._channel: RpcChannel = channel or HttpChannel(url)

    @classmethod
    def from_config(
        cls, config: ClientConfig, channel: RpcChannel | None = None
    ) -> ConnectionFactory:
        return cls(
            config.url,
            config.user,
            config.password,
            max_frame_size=config.max_frame_size,
            max_row_count=config.max_row_count,
            timeout=config.default_timeout,
            client_host=config.client_host,
            channel=channel,
        )

    async def __aenter__(self) -> ConnectionFactory:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    def new_connection_id(self) -> str:
        """Time-ordered unique id qualified with the client host label."""
        return f"{uuid.uuid1()}@{self.client_host}"

    def _connection_info(self) -> dict[str, Any]:
        info: dict[str, Any] = {}
        if self._user is not None:
            info["user"] = self._user
        if self._password is not None:
            info["password"] = self._password
        return info

    async def connect(self, *, timeout: float | None = None) -> Connection:
        """Open a new connection on the server and return it bound to this channel."""
        log = get_logger("factory")
        connection_id = self.new_connection_id()
        deadline = timeout if timeout is not None else self.timeout

        log.debug("opening connection", url=self.url, connection_id=connection_id)
        try:
            async with asyncio.timeout(deadline):
                await self._channel.post(
                    {
                        "request": "openConnection",
                        "connectionId": connection_id,
                        "info": self._connection_info(),
                    }
                )
        except asyncio.TimeoutError as e:
            msg = f"openConnection timed out after {deadline}s"
            raise TimeoutError(msg) from e

        return Connection(
            connection_id,
            self._channel,
            max_frame_size=self.max_frame_size,
            max_row_count=self.max_row_count,
            timeout=self.timeout,
        )

    async def aclose(self) -> None:
        """Close the HTTP channel if this factory created it."""
        if self._owns_channel and isinstance(self._channel, HttpChannel):
            await self._channel.aclose()
