"""
Cohort Comparison Service

Recomputes the Set A / Set B comparison over the whole store and records it
as an immutable snapshot.

Flow:
    1. Fail fast when no model credential is configured (before any read)
    2. Read the analyzed calls of each cohort
    3. Refuse with InsufficientDataError if either cohort is empty
    4. Compute cohort statistics
    5. oracle.compare(set_a, set_b) -> ComparisonResult
    6. Rank top / bottom performers per cohort
    7. Insert a snapshot row

Snapshot persistence is the one failure that is deliberately not surfaced:
it is logged and the computed comparison is still returned, so the caller
never loses a finished analysis to a storage hiccup. Concurrent runs are not
serialized and may each write a snapshot.
"""

import logging
from typing import List, Optional

from call_insights.core.database import get_db_pool
from call_insights.core.errors import (
    ConfigurationError,
    InsufficientDataError,
    StorageError,
)
from call_insights.models import (
    CohortStats,
    ComparisonResponse,
    ComparisonResult,
    ComparisonSnapshot,
    DatasetType,
    PerformerLists,
)
from call_insights.services.call_analysis import MISSING_CREDENTIAL_MESSAGE
from call_insights.services.call_records import fetch_analyzed_calls
from call_insights.services.cohort_stats import (
    DEFAULT_PERFORMER_LIMIT,
    bottom_performers,
    build_cohort_data,
    calculate_cohort_stats,
    top_performers,
)
from call_insights.services.oracle import ScoringOracle
from call_insights.sql import get_insert_snapshot_query, get_list_snapshots_query


logger = logging.getLogger(__name__)

INSUFFICIENT_DATA_MESSAGE = "Insufficient data for comparison. Both sets need analyzed calls."


# =============================================================================
# Orchestration
# =============================================================================

async def compare_datasets(
    oracle: Optional[ScoringOracle],
    performer_limit: int = DEFAULT_PERFORMER_LIMIT,
) -> ComparisonResponse:
    """
    Compare the two cohorts and store a snapshot of the result.

    Args:
        oracle: Language model capability, or None when not configured.
        performer_limit: Size of each top / bottom performer list.

    Returns:
        ComparisonResponse with both cohorts' statistics, the model's
        comparison, and the performer lists.

    Raises:
        ConfigurationError: No model credential configured.
        StorageError: A cohort could not be read.
        InsufficientDataError: A cohort has no analyzed calls.
        UpstreamError: Model unreachable or returned an error status.
        FormatError: Model reply was not a usable comparison.
    """
    if oracle is None:
        raise ConfigurationError(MISSING_CREDENTIAL_MESSAGE)

    logger.info("Starting dataset comparison analysis")

    set_a_calls = await fetch_analyzed_calls(DatasetType.SET_A)
    set_b_calls = await fetch_analyzed_calls(DatasetType.SET_B)

    if not set_a_calls or not set_b_calls:
        logger.info(
            f"Comparison refused: set_a={len(set_a_calls)} set_b={len(set_b_calls)} analyzed calls"
        )
        raise InsufficientDataError(INSUFFICIENT_DATA_MESSAGE)

    set_a_stats = calculate_cohort_stats(set_a_calls)
    set_b_stats = calculate_cohort_stats(set_b_calls)

    comparison = await oracle.compare(
        build_cohort_data(DatasetType.SET_A, set_a_calls, set_a_stats),
        build_cohort_data(DatasetType.SET_B, set_b_calls, set_b_stats),
    )

    await persist_snapshot(set_a_stats, set_b_stats, comparison)

    logger.info("Dataset comparison analysis completed successfully")

    return ComparisonResponse(
        success=True,
        setAStats=set_a_stats,
        setBStats=set_b_stats,
        comparison=comparison,
        topPerformers=PerformerLists(
            setA=top_performers(set_a_calls, performer_limit),
            setB=top_performers(set_b_calls, performer_limit),
        ),
        bottomPerformers=PerformerLists(
            setA=bottom_performers(set_a_calls, performer_limit),
            setB=bottom_performers(set_b_calls, performer_limit),
        ),
    )


# =============================================================================
# Snapshot Persistence
# =============================================================================

async def persist_snapshot(
    set_a_stats: CohortStats,
    set_b_stats: CohortStats,
    comparison: ComparisonResult,
) -> Optional[str]:
    """
    Insert one comparison snapshot.

    Returns:
        The snapshot id, or None if the insert failed. Failures are logged
        and not raised.
    """
    try:
        pool = await get_db_pool()
        async with pool.acquire() as conn:
            snapshot_id = await conn.fetchval(
                get_insert_snapshot_query(),
                set_a_stats.totalCalls,
                set_a_stats.conversionRate,
                set_a_stats.avgSentiment,
                set_a_stats.avgEngagement,
                set_b_stats.totalCalls,
                set_b_stats.conversionRate,
                set_b_stats.avgSentiment,
                set_b_stats.avgEngagement,
                comparison.performance_difference_analysis,
                comparison.correlation_patterns,
                comparison.statistical_significance,
                comparison.actionable_insights,
            )
    except Exception as e:
        # Log error but don't raise - the caller still gets the computed comparison
        logger.error(f"Error storing comparison results: {e}")
        return None

    return str(snapshot_id) if snapshot_id is not None else None


async def list_snapshots(limit: int = 10) -> List[ComparisonSnapshot]:
    """
    Stored snapshots, newest first.

    Raises:
        StorageError: If the query fails.
    """
    try:
        pool = await get_db_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(get_list_snapshots_query(), limit)
    except Exception as e:
        logger.exception("Failed to list comparison snapshots")
        raise StorageError(f"Database read error: {e}") from e

    return [ComparisonSnapshot.from_record(row) for row in rows]


async def get_latest_snapshot() -> Optional[ComparisonSnapshot]:
    """The most recently stored snapshot, or None if none exist."""
    snapshots = await list_snapshots(limit=1)
    return snapshots[0] if snapshots else None
