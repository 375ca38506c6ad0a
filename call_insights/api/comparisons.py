"""
FastAPI router for cohort comparisons.

Implements POST /compare-datasets (recompute the Set A / Set B comparison and
store a snapshot), its OPTIONS pre-flight, and read access to stored
snapshots for the dashboard:

- GET /comparisons          snapshot history, newest first
- GET /comparisons/latest   most recently stored snapshot

API Contract (POST /compare-datasets):
- 200: { success, setAStats, setBStats, comparison, topPerformers, bottomPerformers }
- 400: { error }                      (a cohort has no analyzed calls)
- 500: { error: "Comparison analysis failed", details }
"""

import logging

from fastapi import APIRouter, Query, Response

from call_insights.api.responses import CORS_HEADERS, error_response, preflight_response
from call_insights.core.dependencies import OracleDep, SettingsDep
from call_insights.core.errors import CallInsightsError, RecordNotFoundError
from call_insights.models import (
    ComparisonResponse,
    ComparisonSnapshot,
    ErrorResponse,
    SnapshotListResponse,
)
from call_insights.services.comparison import (
    compare_datasets,
    get_latest_snapshot,
    list_snapshots,
)


logger = logging.getLogger(__name__)

COMPARISON_ERROR = "Comparison analysis failed"

router = APIRouter()


@router.options("/compare-datasets", include_in_schema=False)
async def compare_datasets_preflight() -> Response:
    return preflight_response()


@router.post(
    "/compare-datasets",
    response_model=ComparisonResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def compare_datasets_endpoint(
    response: Response,
    oracle: OracleDep,
    settings: SettingsDep,
):
    """
    Compare the analyzed calls of Set A and Set B.

    Takes no parameters: every run recomputes over the whole store. A failure
    to store the snapshot does not fail the request.
    """
    try:
        result = await compare_datasets(
            oracle=oracle,
            performer_limit=settings.performer_limit,
        )
    except CallInsightsError as e:
        logger.error(f"Error in compare-datasets: {e.message}")
        return error_response(COMPARISON_ERROR, e, status_code=500)
    except Exception as e:
        logger.exception("Unexpected error in compare-datasets")
        return error_response(COMPARISON_ERROR, e, status_code=500)

    response.headers.update(CORS_HEADERS)
    return result


@router.get("/comparisons", response_model=SnapshotListResponse)
async def list_comparisons(
    limit: int = Query(default=10, ge=1, le=100, description="Maximum number of snapshots to return"),
):
    """Stored comparison snapshots, newest first."""
    try:
        snapshots = await list_snapshots(limit=limit)
    except CallInsightsError as e:
        return error_response("Failed to list comparisons", e)

    return SnapshotListResponse(snapshots=snapshots)


@router.get(
    "/comparisons/latest",
    response_model=ComparisonSnapshot,
    responses={404: {"model": ErrorResponse}},
)
async def latest_comparison():
    """The most recently stored comparison snapshot."""
    try:
        snapshot = await get_latest_snapshot()
        if snapshot is None:
            raise RecordNotFoundError("No comparison has been stored yet")
    except CallInsightsError as e:
        return error_response("Failed to load comparison", e)

    return snapshot
