"""Response classification and normalization.

Avatica answers execute-style requests in several shapes: a results list,
the same fields bare at the top level, or a batch of update counts. Each
payload is first classified into one of the variants below and only then
turned into a ResultSet.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from avatica_client.core.exceptions import ProtocolError
from avatica_client.core.logging import get_logger
from avatica_client.core.models import QUERY_UPDATE_COUNT, ColumnMeta, ResultSet

if TYPE_CHECKING:
    from avatica_client.core.frames import FrameReader

# ---------------------------------------------------------------------------
# Response envelopes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BatchResponse:
    update_counts: list[int]


@dataclass(frozen=True)
class ExecuteResponse:
    results: list[dict[str, Any]]


def classify_response(payload: dict[str, Any]) -> BatchResponse | ExecuteResponse:
    """Classify a raw response envelope.

    A payload without a results list is a single result equal to itself.
    """
    update_counts = payload.get("updateCounts")
    if isinstance(update_counts, list):
        return BatchResponse(update_counts=list(update_counts))

    results = payload.get("results")
    if isinstance(results, list) and results:
        return ExecuteResponse(results=results)
    return ExecuteResponse(results=[payload])


# ---------------------------------------------------------------------------
# Logical results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FramedResult:
    statement_id: int
    columns: list[ColumnMeta]
    first_frame: dict[str, Any]


@dataclass(frozen=True)
class UpdateResult:
    update_count: int


@dataclass(frozen=True)
class EmptyResult:
    pass


def _signature_columns(result: dict[str, Any]) -> list[ColumnMeta]:
    signature = result.get("signature") or {}
    return [ColumnMeta.model_validate(c) for c in signature.get("columns") or []]


def classify_result(result: Any) -> FramedResult | UpdateResult | EmptyResult:
    if not isinstance(result, dict):
        msg = f"Expected result object, got {type(result).__name__}"
        raise ProtocolError(msg)

    first_frame = result.get("firstFrame")
    if first_frame:
        return FramedResult(
            statement_id=result.get("statementId"),
            columns=_signature_columns(result),
            first_frame=first_frame,
        )

    update_count = result.get("updateCount")
    if update_count:
        return UpdateResult(update_count=update_count)
    return EmptyResult()


class ResultNormalizer:
    """Turns raw execute/metadata responses into a canonical ResultSet."""

    def __init__(self, frame_reader: FrameReader) -> None:
        self._frame_reader = frame_reader

    async def normalize(self, payload: dict[str, Any]) -> ResultSet:
        """Normalize a response, surfacing only its first logical result."""
        log = get_logger("results")
        envelope = classify_response(payload)

        match envelope:
            case BatchResponse(update_counts=update_counts):
                return ResultSet.for_batch(update_counts)
            case ExecuteResponse(results=results):
                if len(results) > 1:
                    log.debug("discarding extra results", discarded=len(results) - 1)
                return await self._normalize_result(results[0])

    async def normalize_batch(self, payload: dict[str, Any]) -> ResultSet:
        """Normalize a prepareAndExecuteBatch response."""
        envelope = classify_response(payload)
        if not isinstance(envelope, BatchResponse):
            msg = "Batch response carries no updateCounts"
            raise ProtocolError(msg)
        return ResultSet.for_batch(envelope.update_counts)

    async def _normalize_result(self, result: Any) -> ResultSet:
        match classify_result(result):
            case FramedResult(
                statement_id=statement_id, columns=columns, first_frame=first_frame
            ):
                accumulator = ResultSet(
                    columns=columns, rows=[], update_count=QUERY_UPDATE_COUNT
                )
                return await self._frame_reader.read(
                    statement_id, first_frame, accumulator
                )
            case UpdateResult(update_count=update_count):
                return ResultSet(columns=[], rows=[], update_count=update_count)
            case EmptyResult():
                return ResultSet.empty()
