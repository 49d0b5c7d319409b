"""Avatica connection: statements, metadata lookups and transactions.

A Connection is bound to one server-side connection id. It tracks its own
closed state and rejects calls made after close(). Statements close
themselves in the background once their rows are drained; close() waits
for those notifications before releasing the connection.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import sentry_sdk

from avatica_client.core.config import DEFAULT_MAX_FRAME_SIZE, DEFAULT_MAX_ROW_COUNT
from avatica_client.core.exceptions import (
    AvaticaError,
    InterfaceError,
    ProtocolError,
    TimeoutError,
)
from avatica_client.core.filters import FilterLike, build_filter_request, strip_fields
from avatica_client.core.frames import FrameReader
from avatica_client.core.logging import connection_context, get_logger
from avatica_client.core.models import ResultSet
from avatica_client.core.results import ResultNormalizer
from avatica_client.core.statement import StatementSession

if TYPE_CHECKING:
    from avatica_client.core.channel import RpcChannel


class Connection:
    """An open Avatica connection. Create one with ConnectionFactory.connect()."""

    def __init__(
        self,
        connection_id: str,
        channel: RpcChannel,
        *,
        max_frame_size: int = DEFAULT_MAX_FRAME_SIZE,
        max_row_count: int = DEFAULT_MAX_ROW_COUNT,
        timeout: float | None = None,
    ) -> None:
        self._connection_id = connection_id
        self._channel = channel
        self._max_frame_size = max_frame_size
        self._max_row_count = max_row_count
        self._timeout = timeout
        self._closed = False
        self._pending_closes: set[asyncio.Task[None]] = set()
        self._normalizer = ResultNormalizer(
            FrameReader(
                channel, connection_id, max_frame_size, self._schedule_statement_close
            )
        )

    @property
    def connection_id(self) -> str:
        return self._connection_id

    @property
    def max_frame_size(self) -> int:
        return self._max_frame_size

    @property
    def max_row_count(self) -> int:
        return self._max_row_count

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> Connection:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # -----------------------------------------------------------------------
    # Call plumbing
    # -----------------------------------------------------------------------

    def _check_open(self) -> None:
        if self._closed:
            msg = f"Connection {self._connection_id} is closed"
            raise InterfaceError(msg)

    @asynccontextmanager
    async def _call(self, operation: str, timeout: float | None) -> AsyncIterator[None]:
        """Run one public operation under the connection's log context and deadline."""
        self._check_open()
        deadline = timeout if timeout is not None else self._timeout
        with connection_context(self._connection_id):
            try:
                async with asyncio.timeout(deadline):
                    yield
            except asyncio.TimeoutError as e:
                get_logger("connection").error(
                    "operation timed out", operation=operation, timeout=deadline
                )
                msg = f"{operation} timed out after {deadline}s"
                raise TimeoutError(msg) from e

    def _session(self) -> StatementSession:
        return StatementSession(
            self._channel,
            self._connection_id,
            self._normalizer,
            max_frame_size=self._max_frame_size,
            max_row_count=self._max_row_count,
        )

    def _schedule_statement_close(self, statement_id: int) -> None:
        task = asyncio.get_running_loop().create_task(
            self._close_statement(statement_id)
        )
        self._pending_closes.add(task)
        task.add_done_callback(self._pending_closes.discard)

    async def _close_statement(self, statement_id: int) -> None:
        """Best-effort statement release; failures are reported, not raised."""
        log = get_logger("connection")
        try:
            await self._channel.post(
                {
                    "request": "closeStatement",
                    "connectionId": self._connection_id,
                    "statementId": statement_id,
                }
            )
        except AvaticaError as e:
            log.warning(
                "close statement failed", statement_id=statement_id, error=str(e)
            )
            sentry_sdk.capture_exception(e)
        except Exception as e:
            log.warning(
                "close statement failed",
                statement_id=statement_id,
                error=f"{type(e).__name__}: {e}",
            )
            sentry_sdk.capture_exception(e)
        else:
            log.debug("statement closed", statement_id=statement_id)

    async def _metadata(self, request: dict[str, Any]) -> ResultSet:
        response = await self._channel.post(request)
        return await self._normalizer.normalize(response)

    # -----------------------------------------------------------------------
    # Statements
    # -----------------------------------------------------------------------

    async def query(self, sql: str, *, timeout: float | None = None) -> ResultSet:
        """Execute SQL directly and return all of its rows."""
        async with self._call("query", timeout):
            return await self._session().query(sql)

    async def execute(
        self, sql: str, *parameters: Any, timeout: float | None = None
    ) -> ResultSet:
        """Prepare and execute SQL with positional StatementParameter values.

        Parameters may be given as one list or as separate arguments.
        """
        async with self._call("execute", timeout):
            return await self._session().execute(sql, *parameters)

    async def batch(
        self, sqls: Sequence[str], *, timeout: float | None = None
    ) -> ResultSet:
        """Execute update statements as a batch; see ResultSet.update_counts."""
        async with self._call("batch", timeout):
            return await self._session().batch(sqls)

    # -----------------------------------------------------------------------
    # Metadata
    # -----------------------------------------------------------------------

    async def database_info(self, *, timeout: float | None = None) -> dict[str, Any]:
        """Return the server's database property map."""
        async with self._call("databaseProperties", timeout):
            response = await self._channel.post(
                {"request": "databaseProperties", "connectionId": self._connection_id}
            )
        properties = response.get("map")
        if not isinstance(properties, dict):
            msg = "databaseProperties response has no map"
            raise ProtocolError(msg)
        return properties

    async def catalogs(self, *, timeout: float | None = None) -> ResultSet:
        async with self._call("getCatalogs", timeout):
            return await self._metadata(
                {"request": "getCatalogs", "connectionId": self._connection_id}
            )

    async def schemas(
        self, search: FilterLike = None, *, timeout: float | None = None
    ) -> ResultSet:
        """Search schemas by catalog and schema pattern."""
        request = strip_fields(
            build_filter_request("getSchemas", self._connection_id, search),
            "tableNamePattern",
            "columnNamePattern",
        )
        async with self._call("getSchemas", timeout):
            return await self._metadata(request)

    async def tables(
        self,
        search: FilterLike = None,
        *,
        types: Sequence[str] | None = None,
        timeout: float | None = None,
    ) -> ResultSet:
        """Search tables by catalog, schema and table pattern.

        types restricts the result to table types such as "TABLE" or "VIEW".
        """
        request = strip_fields(
            build_filter_request("getTables", self._connection_id, search),
            "columnNamePattern",
        )
        if types is not None:
            request["typeList"] = list(types)
        async with self._call("getTables", timeout):
            return await self._metadata(request)

    async def columns(
        self, search: FilterLike = None, *, timeout: float | None = None
    ) -> ResultSet:
        """Search columns by catalog, schema, table and column pattern."""
        request = build_filter_request("getColumns", self._connection_id, search)
        async with self._call("getColumns", timeout):
            return await self._metadata(request)

    async def table_types(self, *, timeout: float | None = None) -> ResultSet:
        async with self._call("getTableTypes", timeout):
            return await self._metadata(
                {"request": "getTableTypes", "connectionId": self._connection_id}
            )

    # -----------------------------------------------------------------------
    # Transactions and lifecycle
    # -----------------------------------------------------------------------

    async def commit(self, *, timeout: float | None = None) -> ResultSet:
        async with self._call("commit", timeout):
            await self._channel.post(
                {"request": "commit", "connectionId": self._connection_id}
            )
        return ResultSet.empty()

    async def rollback(self, *, timeout: float | None = None) -> ResultSet:
        async with self._call("rollback", timeout):
            await self._channel.post(
                {"request": "rollback", "connectionId": self._connection_id}
            )
        return ResultSet.empty()

    async def close(self, *, timeout: float | None = None) -> None:
        """Release the connection on the server.

        Calling close() again is a no-op.
        """
        log = get_logger("connection")
        if self._closed:
            log.debug("connection already closed", connection_id=self._connection_id)
            return

        async with self._call("closeConnection", timeout):
            self._closed = True
            if self._pending_closes:
                await asyncio.gather(*self._pending_closes, return_exceptions=True)
            await self._channel.post(
                {"request": "closeConnection", "connectionId": self._connection_id}
            )
            log.debug("connection closed")
