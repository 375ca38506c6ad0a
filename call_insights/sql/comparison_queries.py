"""
Parameterized SQL queries for the dataset_comparisons snapshot table.

Snapshots are insert-only: there is no UPDATE or DELETE query here.
"""

from typing import List


SNAPSHOT_COLUMNS: List[str] = [
    'set_a_total_calls',
    'set_a_conversion_rate',
    'set_a_avg_sentiment',
    'set_a_avg_engagement',
    'set_b_total_calls',
    'set_b_conversion_rate',
    'set_b_avg_sentiment',
    'set_b_avg_engagement',
    'performance_difference_analysis',
    'correlation_patterns',
    'statistical_significance',
    'ai_recommendations',
]

_SELECT_LIST = ",\n        ".join(['id', 'analysis_date', 'created_at', *SNAPSHOT_COLUMNS])


def get_insert_snapshot_query() -> str:
    """INSERT one snapshot; parameters follow SNAPSHOT_COLUMNS order."""
    columns = ", ".join(SNAPSHOT_COLUMNS)
    placeholders = ", ".join(f"${index}" for index in range(1, len(SNAPSHOT_COLUMNS) + 1))

    return f"""
    INSERT INTO dataset_comparisons ({columns})
    VALUES ({placeholders})
    RETURNING id
    """


def get_list_snapshots_query() -> str:
    """SELECT snapshots newest first ($1 limit)."""
    return f"""
    SELECT
        {_SELECT_LIST}
    FROM dataset_comparisons
    ORDER BY analysis_date DESC, created_at DESC
    LIMIT $1
    """
