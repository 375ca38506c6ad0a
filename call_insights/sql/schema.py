"""
Table and enum type definitions for the Sales Call Insights store.

Two tables back the service:
    - sales_calls: one row per uploaded transcript, with the analysis bundle
      filled in once the transcript has been scored
    - dataset_comparisons: one insert-only snapshot per cohort comparison run

Enum creation is wrapped in DO blocks because PostgreSQL has no
CREATE TYPE IF NOT EXISTS.
"""

from typing import List


CREATE_DATASET_TYPE_ENUM = """
DO $$ BEGIN
    CREATE TYPE dataset_type AS ENUM ('set_a', 'set_b');
EXCEPTION
    WHEN duplicate_object THEN NULL;
END $$;
"""

CREATE_CONVERSION_LIKELIHOOD_ENUM = """
DO $$ BEGIN
    CREATE TYPE conversion_likelihood AS ENUM ('high', 'medium', 'low');
EXCEPTION
    WHEN duplicate_object THEN NULL;
END $$;
"""

CREATE_SALES_CALLS_TABLE = """
CREATE TABLE IF NOT EXISTS sales_calls (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    filename TEXT NOT NULL,
    dataset_type dataset_type NOT NULL,
    transcript_content TEXT NOT NULL,
    uploaded_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),

    -- Analysis bundle: all NULL until analyzed_at is set
    conversion_likelihood conversion_likelihood,
    conversion_score DOUBLE PRECISION,
    total_duration_minutes DOUBLE PRECISION,
    sales_rep_talk_ratio DOUBLE PRECISION,
    customer_talk_ratio DOUBLE PRECISION,
    sentiment_score DOUBLE PRECISION,
    engagement_score DOUBLE PRECISION,
    key_insights JSONB,
    statistical_data JSONB,
    improvement_suggestions JSONB,
    customer_demographics JSONB,
    sales_rep_performance JSONB,
    analyzed_at TIMESTAMPTZ
);
"""

CREATE_SALES_CALLS_INDEX = """
CREATE INDEX IF NOT EXISTS idx_sales_calls_dataset_analyzed
    ON sales_calls (dataset_type, analyzed_at);
"""

CREATE_DATASET_COMPARISONS_TABLE = """
CREATE TABLE IF NOT EXISTS dataset_comparisons (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    analysis_date TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    set_a_total_calls INTEGER NOT NULL,
    set_a_conversion_rate DOUBLE PRECISION,
    set_a_avg_sentiment DOUBLE PRECISION,
    set_a_avg_engagement DOUBLE PRECISION,
    set_b_total_calls INTEGER NOT NULL,
    set_b_conversion_rate DOUBLE PRECISION,
    set_b_avg_sentiment DOUBLE PRECISION,
    set_b_avg_engagement DOUBLE PRECISION,
    performance_difference_analysis JSONB,
    correlation_patterns JSONB,
    statistical_significance JSONB,
    ai_recommendations JSONB
);
"""

SCHEMA_STATEMENTS: List[str] = [
    CREATE_DATASET_TYPE_ENUM,
    CREATE_CONVERSION_LIKELIHOOD_ENUM,
    CREATE_SALES_CALLS_TABLE,
    CREATE_SALES_CALLS_INDEX,
    CREATE_DATASET_COMPARISONS_TABLE,
]
