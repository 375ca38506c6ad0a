"""
Shared response helpers for the API routers.

Every handled failure is returned as {"error": <fixed label>, "details":
<underlying message>} with the status code of its error kind. Insufficient
data is a client condition and carries no details.
"""

from typing import Dict, Optional

from fastapi import Response
from fastapi.responses import JSONResponse

from call_insights.core.errors import CallInsightsError, InsufficientDataError


CORS_HEADERS: Dict[str, str] = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'authorization, x-client-info, apikey, content-type',
}


def preflight_response() -> Response:
    """Empty-bodied answer to an OPTIONS pre-flight request."""
    return Response(status_code=200, headers=CORS_HEADERS)


def error_response(
    error: str,
    exc: Exception,
    status_code: Optional[int] = None,
) -> JSONResponse:
    """
    Convert an exception into the JSON error envelope.

    Args:
        error: Fixed top-level label for the endpoint (e.g. "Analysis failed").
        exc: The exception caught at the handler boundary.
        status_code: Fixed status for every failure other than insufficient
            data; defaults to the status of the error kind.
    """
    if isinstance(exc, InsufficientDataError):
        return JSONResponse(
            status_code=exc.status_code,
            content={'error': exc.message},
            headers=CORS_HEADERS,
        )

    if status_code is None:
        status_code = exc.status_code if isinstance(exc, CallInsightsError) else 500
    return JSONResponse(
        status_code=status_code,
        content={'error': error, 'details': str(exc)},
        headers=CORS_HEADERS,
    )
