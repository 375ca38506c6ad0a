"""
Sales Call Insights Backend Package.

FastAPI service layer that scores uploaded sales-call transcripts with an
external language model and compares two transcript cohorts (Set A / Set B).

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration, database, dependencies and error taxonomy
    - models: Pydantic schemas and enums
    - prompts: Prompt templates sent to the language model
    - services: Oracle client, call records, analysis and comparison logic
    - sql: Parameterized SQL queries and table definitions
"""

__version__ = "1.0.0"
