"""Core components for run analysis."""

from .analyzer import RunAnalyzer, AnalysisReport
from .context import AnalysisContext, KindState
from .errors import TapaError, InputAccessError, RecordDecodeError
from .types import AnalysisConfig, AggregateResult, ChildAttribution, FlatResult, Interval, RunRecord

__all__ = [
    "RunAnalyzer",
    "AnalysisReport",
    "AnalysisContext",
    "KindState",
    "TapaError",
    "InputAccessError",
    "RecordDecodeError",
    "AnalysisConfig",
    "AggregateResult",
    "ChildAttribution",
    "FlatResult",
    "Interval",
    "RunRecord",
]
