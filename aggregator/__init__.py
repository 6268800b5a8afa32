"""
Aggregator Module
"""
from .budget import (
    even_split,
    plan_category_budget,
    estimate_reported_totals,
    validate_count,
    resolve_category,
)
from .data_aggregator import ArchiveSearchAggregator, run_search

__all__ = [
    # Budget
    "even_split",
    "plan_category_budget",
    "estimate_reported_totals",
    "validate_count",
    "resolve_category",
    # Aggregator
    "ArchiveSearchAggregator",
    "run_search",
]
