"""Frame fetch loop for paginated statement results."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from avatica_client.core.exceptions import ProtocolError
from avatica_client.core.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from avatica_client.core.channel import RpcChannel
    from avatica_client.core.models import ResultSet


def _frame_rows(frame: dict[str, Any]) -> list[list[Any]]:
    rows = frame.get("rows") or []
    if not isinstance(rows, list):
        msg = f"Frame rows must be a list, got {type(rows).__name__}"
        raise ProtocolError(msg)
    return rows


class FrameReader:
    """Drains every frame of one executed statement.

    Pagination is positional: each fetch asks for the rows after the
    cumulative count received so far. Fetches run strictly in sequence.
    Once the last frame arrives, on_exhausted(statement_id) is called so the
    owner can close the statement without holding up the result.
    """

    def __init__(
        self,
        channel: RpcChannel,
        connection_id: str,
        max_frame_size: int,
        on_exhausted: Callable[[int], None],
    ) -> None:
        self._channel = channel
        self._connection_id = connection_id
        self._max_frame_size = max_frame_size
        self._on_exhausted = on_exhausted

    async def read(
        self,
        statement_id: int,
        first_frame: dict[str, Any],
        accumulator: ResultSet,
    ) -> ResultSet:
        log = get_logger("frames")
        frame = first_frame
        offset = 0
        fetches = 0

        while True:
            rows = _frame_rows(frame)
            accumulator.rows.extend(rows)

            if frame.get("done"):
                log.debug(
                    "statement exhausted",
                    statement_id=statement_id,
                    row_count=len(accumulator.rows),
                    fetches=fetches,
                )
                self._on_exhausted(statement_id)
                return accumulator

            offset += len(rows)
            log.debug("fetching frame", statement_id=statement_id, offset=offset)
            response = await self._channel.post(
                {
                    "request": "fetch",
                    "connectionId": self._connection_id,
                    "statementId": statement_id,
                    "offset": offset,
                    "fetchMaxRowCount": self._max_frame_size,
                }
            )
            fetches += 1
            frame = response.get("frame")
            if not isinstance(frame, dict):
                msg = f"fetch response for statement {statement_id} has no frame"
                raise ProtocolError(msg)
