"""Traversal engine: bounded enumeration plus unbounded disk-usage aggregation."""

from __future__ import annotations

from .enumeration import Candidate, enumerate_candidates, passes_filters
from .scanner import (
    AGGREGATION_BATCH_SIZE,
    AggregationStrategy,
    ScanOptions,
    Scanner,
    measure_candidate,
    scan,
)
from .usage import UsageIndex, directory_usage

__all__ = [
    "AGGREGATION_BATCH_SIZE",
    "AggregationStrategy",
    "Candidate",
    "ScanOptions",
    "Scanner",
    "UsageIndex",
    "directory_usage",
    "enumerate_candidates",
    "measure_candidate",
    "passes_filters",
    "scan",
]
