"""
Cohort Statistics Service

Pure, deterministic functions over a list of analyzed CallRecords:

- calculate_cohort_stats: conversion rate and mean scores for one cohort
- summarize_call / build_cohort_data: condensed records for the comparison prompt
- top_performers / bottom_performers: ranking by conversion score

Conversion Rate:
    conversionRate = high_count / total_calls * 100

Means:
    avgSentiment, avgEngagement, avgConversionScore are arithmetic means in
    which a missing score counts as 0.

Every reported figure is rounded to 2 decimals with round-half-up semantics
(floor(x * 100 + 0.5) / 100), not Python's banker's rounding, so dashboards
see the same figures the scores would produce in JavaScript.
"""

import math
from typing import Iterable, List, Optional

from call_insights.models import (
    CallRecord,
    CallSummary,
    CohortData,
    CohortStats,
    ConversionLikelihood,
    DatasetType,
)


DEFAULT_PERFORMER_LIMIT: int = 5


# =============================================================================
# Helpers
# =============================================================================

def round2(value: float) -> float:
    """Round to 2 decimals, halves rounding toward positive infinity."""
    return math.floor(value * 100 + 0.5) / 100


def _score_or_zero(value: Optional[float]) -> float:
    return value if value is not None else 0.0


def _mean_or_zero(values: Iterable[Optional[float]], count: int) -> float:
    return sum(_score_or_zero(v) for v in values) / count


# =============================================================================
# Statistics
# =============================================================================

def calculate_cohort_stats(calls: List[CallRecord]) -> CohortStats:
    """
    Compute aggregate statistics for one cohort.

    Args:
        calls: Analyzed calls of the cohort. Must not be empty.

    Returns:
        CohortStats with every rate and mean rounded to 2 decimals.

    Raises:
        ValueError: If calls is empty (a rate over zero calls is undefined).
    """
    total = len(calls)
    if total == 0:
        raise ValueError("Cannot compute statistics for an empty cohort")

    high_count = sum(
        1 for call in calls
        if call.conversion_likelihood == ConversionLikelihood.HIGH.value
    )

    return CohortStats(
        totalCalls=total,
        conversionRate=round2(high_count / total * 100),
        avgSentiment=round2(_mean_or_zero((c.sentiment_score for c in calls), total)),
        avgEngagement=round2(_mean_or_zero((c.engagement_score for c in calls), total)),
        avgConversionScore=round2(_mean_or_zero((c.conversion_score for c in calls), total)),
        highConversionCount=high_count,
    )


# =============================================================================
# Summaries
# =============================================================================

def summarize_call(call: CallRecord) -> CallSummary:
    """Condense a call to the fields the comparison prompt needs."""
    return CallSummary(
        id=call.id,
        filename=call.filename,
        conversion_likelihood=call.conversion_likelihood,
        conversion_score=call.conversion_score,
        sentiment_score=call.sentiment_score,
        engagement_score=call.engagement_score,
        key_insights=call.key_insights,
        customer_demographics=call.customer_demographics,
        sales_rep_performance=call.sales_rep_performance,
        statistical_data=call.statistical_data,
    )


def build_cohort_data(
    dataset_type: DatasetType,
    calls: List[CallRecord],
    stats: Optional[CohortStats] = None,
) -> CohortData:
    """Bundle a cohort's statistics and call summaries."""
    return CohortData(
        datasetType=dataset_type,
        stats=stats or calculate_cohort_stats(calls),
        calls=[summarize_call(call) for call in calls],
    )


# =============================================================================
# Ranking
# =============================================================================

def top_performers(
    calls: List[CallRecord],
    limit: int = DEFAULT_PERFORMER_LIMIT,
) -> List[CallRecord]:
    """
    Highest conversion scores first.

    The sort is stable, so equal scores keep their store order; a missing
    score ranks as 0. The input list is not modified.
    """
    ranked = sorted(calls, key=lambda call: -_score_or_zero(call.conversion_score))
    return ranked[:limit]


def bottom_performers(
    calls: List[CallRecord],
    limit: int = DEFAULT_PERFORMER_LIMIT,
) -> List[CallRecord]:
    """Lowest conversion scores first; same tie and missing-score rules as top_performers."""
    ranked = sorted(calls, key=lambda call: _score_or_zero(call.conversion_score))
    return ranked[:limit]
