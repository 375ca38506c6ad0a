"""
SQL Query Module for the Sales Call Insights backend.

Provides parameterized SQL queries for:
- Call records: upload, lookup, listing, cohort reads, analysis write (call_queries)
- Comparison snapshots: insert and history reads (comparison_queries)
- Table and enum type definitions (schema)

Follows the Repository Pattern: services build nothing but parameters, the
SQL text lives here.
"""

from call_insights.sql.call_queries import (
    get_insert_call_query,
    get_call_by_id_query,
    get_list_calls_query,
    get_analyzed_calls_query,
    get_update_analysis_query,
    ANALYSIS_COLUMNS,
    CALL_COLUMNS,
)

from call_insights.sql.comparison_queries import (
    get_insert_snapshot_query,
    get_list_snapshots_query,
    SNAPSHOT_COLUMNS,
)

from call_insights.sql.schema import SCHEMA_STATEMENTS

__all__ = [
    # Call record queries
    'get_insert_call_query',
    'get_call_by_id_query',
    'get_list_calls_query',
    'get_analyzed_calls_query',
    'get_update_analysis_query',
    'ANALYSIS_COLUMNS',
    'CALL_COLUMNS',
    # Snapshot queries
    'get_insert_snapshot_query',
    'get_list_snapshots_query',
    'SNAPSHOT_COLUMNS',
    # DDL
    'SCHEMA_STATEMENTS',
]
