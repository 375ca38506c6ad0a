"""
Enumeration definitions for the Sales Call Insights backend.

All enums inherit from both `str` and `Enum` so they serialize as plain
strings in Pydantic models and bind directly to the PostgreSQL enum types
``dataset_type`` and ``conversion_likelihood``.
"""

from enum import Enum


class DatasetType(str, Enum):
    """
    Cohort a transcript belongs to.

    Values: 'set_a' | 'set_b'

    The two cohorts are compared against each other by the comparison
    endpoint; every uploaded call belongs to exactly one of them.
    """
    SET_A = "set_a"
    SET_B = "set_b"


class ConversionLikelihood(str, Enum):
    """
    Ordered likelihood that the prospect converts.

    Values: 'high' | 'medium' | 'low'

    Only 'high' counts toward a cohort's conversion rate.
    """
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


__all__ = [
    "DatasetType",
    "ConversionLikelihood",
]
