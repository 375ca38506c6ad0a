"""
Package initialization file for the Sales Call Insights models.

Re-exports every enum and Pydantic schema so other modules can import them
from call_insights.models directly:

    from call_insights.models import DatasetType, CallRecord, Scorecard
"""

# =============================================================================
# Enums
# =============================================================================

from call_insights.models.enums import (
    DatasetType,
    ConversionLikelihood,
)

# =============================================================================
# Schemas
# =============================================================================

from call_insights.models.schemas import (
    # Call records
    CallRecord,
    CallUploadRequest,
    CallListResponse,
    # Scorecard
    Scorecard,
    AnalysisRequest,
    AnalysisResponse,
    # Comparison
    CohortStats,
    CallSummary,
    CohortData,
    ComparisonResult,
    PerformerLists,
    ComparisonResponse,
    # Snapshots
    ComparisonSnapshot,
    SnapshotListResponse,
    # Errors
    ErrorResponse,
)

__all__ = [
    'DatasetType',
    'ConversionLikelihood',
    'CallRecord',
    'CallUploadRequest',
    'CallListResponse',
    'Scorecard',
    'AnalysisRequest',
    'AnalysisResponse',
    'CohortStats',
    'CallSummary',
    'CohortData',
    'ComparisonResult',
    'PerformerLists',
    'ComparisonResponse',
    'ComparisonSnapshot',
    'SnapshotListResponse',
    'ErrorResponse',
]
