"""
FastAPI router for per-call analysis.

Implements POST /analyze-sales-call (score one transcript with the language
model and store the scorecard on its record) and the matching OPTIONS
pre-flight.

API Contract:
- Request:  { callId, transcript, datasetType }
- 200:      { success: true, message, analysis }
- 500:      { error: "Analysis failed", details }  (every failure, including an
            unknown callId or a malformed body)
"""

import logging

from fastapi import APIRouter, Body, Response

from call_insights.api.responses import CORS_HEADERS, error_response, preflight_response
from call_insights.core.dependencies import OracleDep
from call_insights.core.errors import CallInsightsError
from call_insights.models import AnalysisRequest, AnalysisResponse, ErrorResponse
from call_insights.services.call_analysis import analyze_call


logger = logging.getLogger(__name__)

ANALYSIS_ERROR = "Analysis failed"

router = APIRouter()


@router.options("/analyze-sales-call", include_in_schema=False)
async def analyze_sales_call_preflight() -> Response:
    return preflight_response()


@router.post(
    "/analyze-sales-call",
    response_model=AnalysisResponse,
    responses={500: {"model": ErrorResponse}},
)
async def analyze_sales_call(
    response: Response,
    oracle: OracleDep,
    request: AnalysisRequest = Body(...),
):
    """
    Score one sales call transcript and store the result.

    The record is either fully analyzed or left untouched: nothing is
    written unless the model returns a complete, valid scorecard.
    """
    try:
        scorecard = await analyze_call(
            oracle=oracle,
            call_id=request.callId,
            transcript=request.transcript,
            dataset_type=request.datasetType,
        )
    except CallInsightsError as e:
        logger.error(f"Error in analyze-sales-call for {request.callId}: {e.message}")
        return error_response(ANALYSIS_ERROR, e, status_code=500)
    except Exception as e:
        logger.exception(f"Unexpected error in analyze-sales-call for {request.callId}")
        return error_response(ANALYSIS_ERROR, e, status_code=500)

    response.headers.update(CORS_HEADERS)
    return AnalysisResponse(
        success=True,
        message="Call analyzed successfully",
        analysis=scorecard,
    )
