"""
Pydantic request/response models for the Sales Call Insights backend.

This module provides type-safe validation and serialization for:
- Call records as stored in sales_calls (snake_case, mirroring the columns)
- The per-call scorecard returned by the language model
- Cohort statistics, condensed call summaries and the comparison result
- Comparison snapshots as stored in dataset_comparisons
- API request and response envelopes (camelCase, matching the dashboard)

All models use Pydantic v2 syntax.
"""

from datetime import datetime
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from call_insights.models.enums import ConversionLikelihood, DatasetType


# =============================================================================
# Call Records (sales_calls)
# =============================================================================


class CallRecord(BaseModel):
    """
    One uploaded transcript and, once analyzed, its analysis bundle.

    Analysis fields are all None until the per-call handler writes them in a
    single statement; ``analyzed_at`` alone decides whether a record counts
    as analyzed.
    """
    model_config = ConfigDict(use_enum_values=True)

    id: str = Field(..., description="Unique record identifier (uuid)")
    filename: str = Field(..., description="Original transcript filename")
    dataset_type: DatasetType = Field(..., description="Cohort tag")
    transcript_content: str = Field(..., description="Raw transcript text")
    uploaded_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Analysis bundle
    conversion_likelihood: Optional[ConversionLikelihood] = None
    conversion_score: Optional[float] = None
    total_duration_minutes: Optional[float] = None
    sales_rep_talk_ratio: Optional[float] = None
    customer_talk_ratio: Optional[float] = None
    sentiment_score: Optional[float] = None
    engagement_score: Optional[float] = None
    # Free-form JSON blocks, stored as whatever shape the model returned
    key_insights: Any = None
    statistical_data: Any = None
    improvement_suggestions: Any = None
    customer_demographics: Any = None
    sales_rep_performance: Any = None
    analyzed_at: Optional[datetime] = None

    @property
    def is_analyzed(self) -> bool:
        return self.analyzed_at is not None

    @classmethod
    def from_record(cls, row: Mapping[str, Any]) -> "CallRecord":
        """Build from an asyncpg Record (or any mapping of column -> value)."""
        data = dict(row)
        data['id'] = str(data['id'])
        return cls(**data)


class CallUploadRequest(BaseModel):
    """Request body for uploading a transcript into a cohort."""
    model_config = ConfigDict(str_strip_whitespace=True)

    filename: str = Field(..., min_length=1, description="Transcript filename (.txt)")
    datasetType: DatasetType = Field(..., description="Cohort to store the call in")
    transcript: str = Field(..., min_length=1, description="Transcript text")


class CallListResponse(BaseModel):
    """Response model for listing call records."""
    calls: List[CallRecord] = Field(default_factory=list)


# =============================================================================
# Scorecard (language model output for one call)
# =============================================================================


class Scorecard(BaseModel):
    """
    Structured analysis of a single sales call.

    The core scores are required: a reply missing any of them is treated as
    unparsable so that a record never ends up half analyzed. The free-form
    blocks accept any JSON shape and default to empty containers.
    """
    model_config = ConfigDict(extra='ignore', use_enum_values=True)

    conversion_likelihood: ConversionLikelihood
    conversion_score: float = Field(..., ge=0, le=100)
    total_duration_minutes: Optional[float] = Field(default=None, ge=0)
    sales_rep_talk_ratio: float = Field(..., ge=0, le=100)
    customer_talk_ratio: float = Field(..., ge=0, le=100)
    sentiment_score: float = Field(..., ge=-100, le=100)
    engagement_score: float = Field(..., ge=0, le=100)
    key_insights: Any = Field(default_factory=dict)
    statistical_data: Any = Field(default_factory=dict)
    improvement_suggestions: Any = Field(default_factory=list)
    customer_demographics: Any = Field(default_factory=dict)
    sales_rep_performance: Any = Field(default_factory=dict)

    @field_validator('conversion_likelihood', mode='before')
    @classmethod
    def _normalize_likelihood(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class AnalysisRequest(BaseModel):
    """Request body for the per-call analysis endpoint."""
    callId: str = Field(..., min_length=1, description="Record to analyze")
    transcript: str = Field(..., description="Transcript text to score")
    datasetType: DatasetType = Field(..., description="Cohort of the record")


class AnalysisResponse(BaseModel):
    """Successful per-call analysis response."""
    success: bool = True
    message: str = "Call analyzed successfully"
    analysis: Scorecard


# =============================================================================
# Cohort Comparison
# =============================================================================


class CohortStats(BaseModel):
    """Aggregate statistics for one cohort, all rounded to 2 decimals."""
    totalCalls: int = Field(..., ge=0)
    conversionRate: float = Field(..., description="Share of 'high' calls, in percent")
    avgSentiment: float
    avgEngagement: float
    avgConversionScore: float
    highConversionCount: int = Field(..., ge=0)


class CallSummary(BaseModel):
    """Condensed view of an analyzed call, embedded in the comparison prompt."""
    id: str
    filename: str
    conversion_likelihood: Optional[str] = None
    conversion_score: Optional[float] = None
    sentiment_score: Optional[float] = None
    engagement_score: Optional[float] = None
    key_insights: Any = None
    customer_demographics: Any = None
    sales_rep_performance: Any = None
    statistical_data: Any = None


class CohortData(BaseModel):
    """Everything the language model is told about one cohort."""
    datasetType: DatasetType
    stats: CohortStats
    calls: List[CallSummary] = Field(default_factory=list)


class ComparisonResult(BaseModel):
    """
    Structured cohort comparison produced by the language model.

    Each block is kept as free-form JSON; unknown top-level keys are kept so
    that the caller receives the model's full answer.
    """
    model_config = ConfigDict(extra='allow')

    performance_difference_analysis: Any = Field(default_factory=dict)
    correlation_patterns: Any = Field(default_factory=dict)
    statistical_significance: Any = Field(default_factory=dict)
    root_cause_analysis: Any = Field(default_factory=dict)
    actionable_insights: Any = Field(default_factory=list)


class PerformerLists(BaseModel):
    """Top or bottom performers per cohort."""
    setA: List[CallRecord] = Field(default_factory=list)
    setB: List[CallRecord] = Field(default_factory=list)


class ComparisonResponse(BaseModel):
    """Successful comparison response returned to the dashboard."""
    success: bool = True
    setAStats: CohortStats
    setBStats: CohortStats
    comparison: ComparisonResult
    topPerformers: PerformerLists
    bottomPerformers: PerformerLists


# =============================================================================
# Comparison Snapshots (dataset_comparisons)
# =============================================================================


class ComparisonSnapshot(BaseModel):
    """One stored comparison run. Snapshots are never updated."""
    id: str
    analysis_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    set_a_total_calls: int
    set_a_conversion_rate: Optional[float] = None
    set_a_avg_sentiment: Optional[float] = None
    set_a_avg_engagement: Optional[float] = None
    set_b_total_calls: int
    set_b_conversion_rate: Optional[float] = None
    set_b_avg_sentiment: Optional[float] = None
    set_b_avg_engagement: Optional[float] = None
    performance_difference_analysis: Any = None
    correlation_patterns: Any = None
    statistical_significance: Any = None
    ai_recommendations: Any = None

    @classmethod
    def from_record(cls, row: Mapping[str, Any]) -> "ComparisonSnapshot":
        data = dict(row)
        data['id'] = str(data['id'])
        return cls(**data)


class SnapshotListResponse(BaseModel):
    """Response model for the snapshot history endpoint."""
    snapshots: List[ComparisonSnapshot] = Field(default_factory=list)


# =============================================================================
# Error Envelope
# =============================================================================


class ErrorResponse(BaseModel):
    """JSON body of every handled failure."""
    error: str
    details: Optional[str] = None
