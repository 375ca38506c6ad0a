"""
Parameterized SQL queries for the sales_calls table.

Analysis columns are written by a single UPDATE so that a record is either
fully analyzed (every analysis column plus analyzed_at set) or not analyzed
at all. ``analyzed_at IS NOT NULL`` is the only test for "analyzed".
"""

from typing import List, Optional


# Columns written by the per-call analysis handler, in bind order ($2 .. $13).
# analyzed_at is bound last ($14).
ANALYSIS_COLUMNS: List[str] = [
    'conversion_likelihood',
    'conversion_score',
    'total_duration_minutes',
    'sales_rep_talk_ratio',
    'customer_talk_ratio',
    'sentiment_score',
    'engagement_score',
    'key_insights',
    'statistical_data',
    'improvement_suggestions',
    'customer_demographics',
    'sales_rep_performance',
]

CALL_COLUMNS: List[str] = [
    'id',
    'filename',
    'dataset_type',
    'transcript_content',
    'uploaded_at',
    'created_at',
    'updated_at',
    *ANALYSIS_COLUMNS,
    'analyzed_at',
]

_SELECT_LIST = ",\n        ".join(CALL_COLUMNS)


def get_insert_call_query() -> str:
    """
    INSERT for a freshly uploaded transcript.

    Parameters: $1 filename, $2 dataset_type, $3 transcript_content.
    Analysis columns are left NULL.
    """
    return f"""
    INSERT INTO sales_calls (filename, dataset_type, transcript_content)
    VALUES ($1, $2, $3)
    RETURNING
        {_SELECT_LIST}
    """


def get_call_by_id_query() -> str:
    """SELECT a single call by id ($1)."""
    return f"""
    SELECT
        {_SELECT_LIST}
    FROM sales_calls
    WHERE id = $1
    """


def get_list_calls_query(dataset_type: Optional[str] = None) -> str:
    """
    SELECT calls newest upload first.

    Parameters: $1 limit, and $2 dataset_type when a filter is requested.
    """
    where_clause = "WHERE dataset_type = $2" if dataset_type is not None else ""

    return f"""
    SELECT
        {_SELECT_LIST}
    FROM sales_calls
    {where_clause}
    ORDER BY uploaded_at DESC
    LIMIT $1
    """


def get_analyzed_calls_query() -> str:
    """
    SELECT every analyzed call of one cohort ($1 dataset_type).

    Ordered by upload time so that ranking ties resolve the same way on
    every run.
    """
    return f"""
    SELECT
        {_SELECT_LIST}
    FROM sales_calls
    WHERE dataset_type = $1
      AND analyzed_at IS NOT NULL
    ORDER BY uploaded_at ASC, id ASC
    """


def get_update_analysis_query() -> str:
    """
    UPDATE that writes the complete analysis bundle in one statement.

    Parameters: $1 id, $2..$13 ANALYSIS_COLUMNS in order, $14 analyzed_at.
    """
    assignments = ",\n        ".join(
        f"{column} = ${index}"
        for index, column in enumerate(ANALYSIS_COLUMNS, start=2)
    )
    analyzed_at_param = len(ANALYSIS_COLUMNS) + 2

    return f"""
    UPDATE sales_calls SET
        {assignments},
        analyzed_at = ${analyzed_at_param},
        updated_at = ${analyzed_at_param}
    WHERE id = $1
    """
