"""
Prompt for comparing the two transcript cohorts.

Both cohorts' statistics and their condensed call summaries are embedded as
JSON so the model can cite evidence from individual calls.
"""

import json
from typing import Any, Dict, List

from call_insights.models import CohortData


COMPARISON_PROMPT = """You are an expert sales performance analyst. Analyze and compare these two sets of sales call data to provide comprehensive insights.

## SET A STATISTICS
{set_a_stats}

## SET B STATISTICS
{set_b_stats}

## SET A DETAILED DATA
{set_a_calls}

## SET B DETAILED DATA
{set_b_calls}

## RESPONSE FORMAT
Respond with a single JSON object matching this structure exactly:
```json
{{
  "performance_difference_analysis": {{
    "better_performing_set": "set_a" | "set_b",
    "performance_gap_percentage": number,
    "key_differentiating_factors": [string],
    "statistical_significance": "high" | "medium" | "low",
    "primary_drivers": {{
      "sales_rep_factors": [string],
      "customer_demographic_factors": [string],
      "process_factors": [string],
      "external_factors": [string]
    }}
  }},
  "correlation_patterns": {{
    "strong_correlations": [
      {{
        "variables": [string, string],
        "correlation_strength": number (-1 to 1),
        "description": string,
        "business_impact": string
      }}
    ],
    "customer_behavior_patterns": [string],
    "sales_rep_behavior_patterns": [string],
    "demographic_influences": [string]
  }},
  "statistical_significance": {{
    "sample_size_adequacy": "adequate" | "limited" | "insufficient",
    "confidence_level": string,
    "p_value_estimation": string,
    "effect_size": "large" | "medium" | "small",
    "reliability_assessment": string
  }},
  "root_cause_analysis": {{
    "primary_hypothesis": string,
    "supporting_evidence": [string],
    "alternative_hypotheses": [string],
    "confounding_variables": [string]
  }},
  "actionable_insights": [
    {{
      "insight": string,
      "evidence": string,
      "recommended_action": string,
      "expected_impact": "high" | "medium" | "low",
      "implementation_priority": "high" | "medium" | "low"
    }}
  ]
}}
```

Focus on:
1. Identifying specific performance drivers
2. Understanding customer demographic differences
3. Analyzing sales rep performance variations
4. Finding correlation patterns
5. Providing statistical significance assessment
6. Offering actionable recommendations

Be specific with evidence from the data provided.
"""


def format_stats_block(cohort: CohortData) -> str:
    """Bullet list of a cohort's headline statistics."""
    stats = cohort.stats
    lines = [
        f"- Total Calls: {stats.totalCalls}",
        f"- Conversion Rate: {stats.conversionRate}%",
        f"- Average Sentiment: {stats.avgSentiment}",
        f"- Average Engagement: {stats.avgEngagement}",
        f"- Average Conversion Score: {stats.avgConversionScore}",
    ]
    return "\n".join(lines)


def format_calls_block(cohort: CohortData) -> str:
    """Pretty-printed JSON array of a cohort's call summaries."""
    summaries: List[Dict[str, Any]] = [call.model_dump() for call in cohort.calls]
    return json.dumps(summaries, indent=2, default=str)


def build_comparison_prompt(set_a: CohortData, set_b: CohortData) -> str:
    """Render the comparison prompt for both cohorts."""
    return COMPARISON_PROMPT.format(
        set_a_stats=format_stats_block(set_a),
        set_b_stats=format_stats_block(set_b),
        set_a_calls=format_calls_block(set_a),
        set_b_calls=format_calls_block(set_b),
    )
