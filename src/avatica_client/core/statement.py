"""Statement lifecycle: direct queries, prepared execution and batches."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from avatica_client.core.exceptions import ProtocolError
from avatica_client.core.logging import get_logger
from avatica_client.core.parameters import StatementParameter

if TYPE_CHECKING:
    from avatica_client.core.channel import RpcChannel
    from avatica_client.core.models import ResultSet
    from avatica_client.core.results import ResultNormalizer


def normalize_parameters(parameters: tuple[Any, ...]) -> list[Any]:
    """Accept execute(sql, [p1, p2]) as well as execute(sql, p1, p2)."""
    if (
        len(parameters) == 1
        and isinstance(parameters[0], Sequence)
        and not isinstance(parameters[0], (str, bytes, bytearray))
    ):
        return list(parameters[0])
    return list(parameters)


def _parameter_values(parameters: list[Any]) -> list[Any]:
    # Other values are sent unchanged; arity and types are checked server-side.
    return [
        p.to_wire() if isinstance(p, StatementParameter) else p for p in parameters
    ]


def _sql_preview(sql: str) -> str:
    return " ".join(sql.split())[:100]


class StatementSession:
    """Issues the request sequence for one statement call."""

    def __init__(
        self,
        channel: RpcChannel,
        connection_id: str,
        normalizer: ResultNormalizer,
        *,
        max_frame_size: int,
        max_row_count: int,
    ) -> None:
        self._channel = channel
        self._connection_id = connection_id
        self._normalizer = normalizer
        self._max_frame_size = max_frame_size
        self._max_row_count = max_row_count

    async def _create_statement(self) -> int:
        response = await self._channel.post(
            {"request": "createStatement", "connectionId": self._connection_id}
        )
        statement_id = response.get("statementId")
        if statement_id is None:
            msg = "createStatement response has no statementId"
            raise ProtocolError(msg)
        return statement_id

    async def query(self, sql: str) -> ResultSet:
        """Run a SQL statement directly: createStatement, prepareAndExecute."""
        log = get_logger("statement")
        statement_id = await self._create_statement()
        log.debug("query", statement_id=statement_id, sql=_sql_preview(sql))

        response = await self._channel.post(
            {
                "request": "prepareAndExecute",
                "connectionId": self._connection_id,
                "statementId": statement_id,
                "sql": sql,
                "maxRowsInFirstFrame": self._max_frame_size,
                "maxRowCount": self._max_row_count,
                "maxRowsTotal": self._max_row_count,
            }
        )
        return await self._normalizer.normalize(response)

    async def execute(self, sql: str, *parameters: Any) -> ResultSet:
        """Prepare SQL and execute it with positional parameters."""
        log = get_logger("statement")
        params = normalize_parameters(parameters)
        log.debug("prepare", sql=_sql_preview(sql), parameter_count=len(params))

        prepared = await self._channel.post(
            {
                "request": "prepare",
                "connectionId": self._connection_id,
                "sql": sql,
                "maxRowCount": self._max_row_count,
            }
        )
        handle = prepared.get("statement")
        if handle is None:
            msg = "prepare response has no statement handle"
            raise ProtocolError(msg)

        response = await self._channel.post(
            {
                "request": "execute",
                "statementHandle": handle,
                "parameterValues": _parameter_values(params),
                "maxRowCount": self._max_row_count,
            }
        )
        return await self._normalizer.normalize(response)

    async def batch(self, sqls: Sequence[str]) -> ResultSet:
        """Run update statements as one batch.

        Only update statements are supported; row-returning statements are
        rejected by the server, not here.
        """
        log = get_logger("statement")
        statement_id = await self._create_statement()
        log.debug("batch", statement_id=statement_id, statement_count=len(sqls))

        response = await self._channel.post(
            {
                "request": "prepareAndExecuteBatch",
                "connectionId": self._connection_id,
                "statementId": statement_id,
                "sqlCommands": list(sqls),
            }
        )
        return await self._normalizer.normalize_batch(response)
