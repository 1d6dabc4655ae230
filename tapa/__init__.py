"""
Tapa - Tekton Artifact Performance Analysis
"""

__version__ = "1.0.0"

from .core.analyzer import RunAnalyzer, AnalysisReport
from .core.errors import TapaError, InputAccessError
from .core.types import AnalysisConfig, AggregateResult, FlatResult

__all__ = [
    "RunAnalyzer",
    "AnalysisReport",
    "TapaError",
    "InputAccessError",
    "AnalysisConfig",
    "AggregateResult",
    "FlatResult",
]
