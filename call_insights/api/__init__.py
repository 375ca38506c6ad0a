"""
Backend API package initialization.

This package contains FastAPI router modules for the Sales Call Insights service:
- calls: Transcript upload and call record reads
- analysis: Per-call scoring with the language model
- comparisons: Set A / Set B comparison and stored snapshots
"""

from fastapi import APIRouter

from call_insights.api.calls import router as calls_router
from call_insights.api.analysis import router as analysis_router
from call_insights.api.comparisons import router as comparisons_router

# Create main API router
api_router = APIRouter()

api_router.include_router(calls_router, prefix="/calls", tags=["calls"])
api_router.include_router(analysis_router, tags=["analysis"])  # Has its own /analyze-sales-call path
api_router.include_router(comparisons_router, tags=["comparisons"])  # Has its own paths

__all__ = [
    "api_router",
    "calls_router",
    "analysis_router",
    "comparisons_router",
]
