"""
FastAPI router for call record management.

Implements POST /calls (upload a transcript into a cohort), GET /calls (list
records for the dashboard) and GET /calls/{call_id} (one record).

Uploaded records start unanalyzed; POST /analyze-sales-call fills in the
analysis bundle.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Query

from call_insights.api.responses import error_response
from call_insights.core.errors import CallInsightsError, InvalidRequestError
from call_insights.models import (
    CallListResponse,
    CallRecord,
    CallUploadRequest,
    DatasetType,
    ErrorResponse,
)
from call_insights.services.call_records import create_call, get_call, list_calls


logger = logging.getLogger(__name__)

# Transcripts are uploaded as plain text files
ALLOWED_EXTENSIONS = ('.txt',)

router = APIRouter()


@router.post(
    "",
    response_model=CallRecord,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_call(upload: CallUploadRequest = Body(...)):
    """
    Store a transcript in Set A or Set B.

    Only plain-text transcripts (.txt) are accepted.
    """
    try:
        if not upload.filename.lower().endswith(ALLOWED_EXTENSIONS):
            raise InvalidRequestError(
                f"Unsupported file type for {upload.filename}: please upload a .txt transcript"
            )

        record = await create_call(
            filename=upload.filename,
            dataset_type=upload.datasetType,
            transcript=upload.transcript,
        )
    except InvalidRequestError as e:
        return error_response("Invalid upload", e)
    except CallInsightsError as e:
        return error_response("Upload failed", e)

    return record


@router.get("", response_model=CallListResponse)
async def list_call_records(
    datasetType: Optional[DatasetType] = Query(default=None, description="Restrict to one cohort"),
    limit: int = Query(default=100, ge=1, le=1000, description="Maximum number of calls to return"),
):
    """List calls, newest upload first."""
    try:
        calls = await list_calls(dataset_type=datasetType, limit=limit)
    except CallInsightsError as e:
        return error_response("Failed to list calls", e)

    logger.info(f"Listed {len(calls)} sales calls")
    return CallListResponse(calls=calls)


@router.get(
    "/{call_id}",
    response_model=CallRecord,
    responses={404: {"model": ErrorResponse}},
)
async def get_call_record(call_id: str):
    """One call record by id."""
    try:
        return await get_call(call_id)
    except CallInsightsError as e:
        return error_response("Failed to load call", e)
