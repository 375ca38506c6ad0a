"""
Call Record Repository

Data access for the sales_calls table: uploading transcripts, reading them
back, fetching the analyzed calls of a cohort and writing an analysis bundle.

Every database failure is re-raised as StorageError so that handlers can
report it uniformly. The analysis write is one UPDATE statement, which keeps
the "all analysis fields or none" invariant without an explicit transaction.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from call_insights.core.database import get_db_pool
from call_insights.core.errors import RecordNotFoundError, StorageError
from call_insights.models import CallRecord, DatasetType, Scorecard
from call_insights.sql import (
    ANALYSIS_COLUMNS,
    get_analyzed_calls_query,
    get_call_by_id_query,
    get_insert_call_query,
    get_list_calls_query,
    get_update_analysis_query,
)


logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT: int = 100


def _parse_call_id(call_id: str) -> UUID:
    """Validate a record id; anything that is not a uuid cannot exist."""
    try:
        return UUID(str(call_id))
    except ValueError:
        raise RecordNotFoundError(f"Sales call {call_id} not found")


def _rows_affected(status: Optional[str]) -> int:
    """Row count from an asyncpg command status such as 'UPDATE 1'."""
    if not status:
        return 0
    try:
        return int(status.split()[-1])
    except ValueError:
        return 0


async def create_call(
    filename: str,
    dataset_type: DatasetType,
    transcript: str,
) -> CallRecord:
    """
    Store a freshly uploaded transcript with no analysis fields.

    Returns:
        The created CallRecord (id and timestamps assigned by the database).

    Raises:
        StorageError: If the insert fails.
    """
    try:
        pool = await get_db_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                get_insert_call_query(),
                filename,
                DatasetType(dataset_type).value,
                transcript,
            )
    except Exception as e:
        logger.exception("Failed to insert sales call")
        raise StorageError(f"Database insert error: {e}") from e

    if row is None:
        raise StorageError("Database insert error: no row returned")

    record = CallRecord.from_record(row)
    logger.info(f"Stored call {record.id} ({filename}) in {record.dataset_type}")
    return record


async def get_call(call_id: str) -> CallRecord:
    """
    Fetch one call by id.

    Raises:
        RecordNotFoundError: If no call has this id.
        StorageError: If the query fails.
    """
    record_id = _parse_call_id(call_id)

    try:
        pool = await get_db_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(get_call_by_id_query(), record_id)
    except Exception as e:
        logger.exception(f"Failed to fetch sales call {call_id}")
        raise StorageError(f"Database read error: {e}") from e

    if row is None:
        raise RecordNotFoundError(f"Sales call {call_id} not found")

    return CallRecord.from_record(row)


async def list_calls(
    dataset_type: Optional[DatasetType] = None,
    limit: int = DEFAULT_LIST_LIMIT,
) -> List[CallRecord]:
    """
    List calls newest upload first, optionally restricted to one cohort.

    Raises:
        StorageError: If the query fails.
    """
    args: list = [limit]
    if dataset_type is not None:
        args.append(DatasetType(dataset_type).value)

    try:
        pool = await get_db_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(
                get_list_calls_query(dataset_type.value if dataset_type else None),
                *args,
            )
    except Exception as e:
        logger.exception("Failed to list sales calls")
        raise StorageError(f"Database read error: {e}") from e

    return [CallRecord.from_record(row) for row in rows]


async def fetch_analyzed_calls(dataset_type: DatasetType) -> List[CallRecord]:
    """
    Fetch every analyzed call of one cohort, in upload order.

    Raises:
        StorageError: If the query fails or a row cannot be read back.
    """
    try:
        pool = await get_db_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(
                get_analyzed_calls_query(),
                DatasetType(dataset_type).value,
            )
        return [CallRecord.from_record(row) for row in rows]
    except Exception as e:
        logger.exception(f"Failed to fetch analyzed calls for {dataset_type}")
        raise StorageError("Error fetching call data") from e


def scorecard_column_values(scorecard: Scorecard) -> list:
    """Scorecard fields in ANALYSIS_COLUMNS order, ready to bind."""
    values = scorecard.model_dump()
    return [values[column] for column in ANALYSIS_COLUMNS]


async def save_analysis(
    call_id: str,
    scorecard: Scorecard,
    analyzed_at: Optional[datetime] = None,
) -> datetime:
    """
    Write a complete analysis bundle onto a call.

    Every analysis column and analyzed_at are set by one UPDATE, so the
    record moves from unanalyzed to analyzed atomically.

    Returns:
        The analyzed_at timestamp written.

    Raises:
        RecordNotFoundError: If the call disappeared before the write.
        StorageError: If the update fails.
    """
    record_id = _parse_call_id(call_id)
    analyzed_at = analyzed_at or datetime.now(timezone.utc)

    try:
        pool = await get_db_pool()
        async with pool.acquire() as conn:
            status = await conn.execute(
                get_update_analysis_query(),
                record_id,
                *scorecard_column_values(scorecard),
                analyzed_at,
            )
    except Exception as e:
        logger.exception(f"Failed to store analysis for call {call_id}")
        raise StorageError(f"Database update error: {e}") from e

    if _rows_affected(status) == 0:
        raise RecordNotFoundError(f"Sales call {call_id} not found")

    return analyzed_at
