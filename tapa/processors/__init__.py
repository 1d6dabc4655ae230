"""Processors for run data loading and analysis."""

from .file_processor import RecordFileProcessor, LoadResult
from .concurrency import ConcurrencyAnalyzer
from .ranker import DurationRanker
from .ownership import OwnershipMatcher
from .aggregator import HierarchicalAggregator

__all__ = [
    "RecordFileProcessor",
    "LoadResult",
    "ConcurrencyAnalyzer",
    "DurationRanker",
    "OwnershipMatcher",
    "HierarchicalAggregator",
]
