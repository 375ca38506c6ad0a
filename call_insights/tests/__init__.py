'''
Sales Call Insights Backend Test Suite

Test Modules:
-------------
- test_cohort_stats.py: Conversion rate, rounded means, performer ranking
- test_oracle.py: Tolerant JSON extraction and the OpenAI-backed oracle
- test_call_analysis.py: Per-call scoring and the all-or-nothing analysis write
- test_comparison.py: Cohort comparison flow and snapshot persistence
- test_api.py: Endpoint contracts (status codes, envelopes, pre-flight)

No test touches the network or a real database: the asyncpg pool and the
language model are replaced with mocks from conftest.py.

Running Tests:
--------------
    pip install -e ".[test]"
    pytest call_insights/tests -v
'''

__all__ = []
