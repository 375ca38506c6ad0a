"""
Backend Services Module

Business logic for the Sales Call Insights service. Services are stateless;
database access goes through get_db_pool() and language model access through
the ScoringOracle capability, so both can be replaced with mocks in tests.

Services:
- oracle: Language model client and tolerant JSON extraction
- call_records: sales_calls repository (upload, read, analysis write)
- call_analysis: Per-call scoring and persistence
- cohort_stats: Cohort statistics, summaries and performer ranking
- comparison: Cohort comparison orchestration and snapshot persistence
"""

from call_insights.services.oracle import (
    ScoringOracle,
    OpenAIOracle,
    close_oracles,
    extract_json_object,
    get_shared_oracle,
)

from call_insights.services.call_records import (
    create_call,
    get_call,
    list_calls,
    fetch_analyzed_calls,
    save_analysis,
)

from call_insights.services.call_analysis import analyze_call

from call_insights.services.cohort_stats import (
    round2,
    calculate_cohort_stats,
    summarize_call,
    build_cohort_data,
    top_performers,
    bottom_performers,
)

from call_insights.services.comparison import (
    compare_datasets,
    persist_snapshot,
    list_snapshots,
    get_latest_snapshot,
)

__all__ = [
    # Oracle
    'ScoringOracle',
    'OpenAIOracle',
    'close_oracles',
    'extract_json_object',
    'get_shared_oracle',
    # Call records
    'create_call',
    'get_call',
    'list_calls',
    'fetch_analyzed_calls',
    'save_analysis',
    # Analysis
    'analyze_call',
    # Cohort statistics
    'round2',
    'calculate_cohort_stats',
    'summarize_call',
    'build_cohort_data',
    'top_performers',
    'bottom_performers',
    # Comparison
    'compare_datasets',
    'persist_snapshot',
    'list_snapshots',
    'get_latest_snapshot',
]
