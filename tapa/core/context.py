"""
Per-invocation state for one analysis run.
"""

from datetime import datetime
from typing import Dict, Optional, Set

from .types import ALL_KINDS, Interval


class KindState:
    """Lookup maps for the eligible entities of a single kind."""
    
    def __init__(self, kind: str):
        self.kind = kind
        self.durations: Dict[str, float] = {}
        self.starts: Dict[str, datetime] = {}
        self.ends: Dict[str, datetime] = {}
        self.distinct_durations: Set[float] = set()
        self.concurrency: Dict[str, int] = {}
    
    def record(self, interval: Interval) -> bool:
        """
        Store an eligible interval.
        
        The first interval seen for a key wins; later ones with the same key
        are ignored so a cached duration is never recomputed.
        
        Returns:
            True if the interval was stored
        """
        if not interval.eligible or interval.key in self.durations:
            return False
        
        duration = interval.duration
        self.durations[interval.key] = duration
        self.starts[interval.key] = interval.start
        self.ends[interval.key] = interval.end
        self.distinct_durations.add(duration)
        return True
    
    def __contains__(self, key: str) -> bool:
        return key in self.durations
    
    def __len__(self) -> int:
        return len(self.durations)
    
    def duration(self, key: str) -> Optional[float]:
        return self.durations.get(key)


class AnalysisContext:
    """
    Owns every per-kind structure of one analysis invocation.
    
    A new context is built for each analysis and dropped once results are
    produced, so nothing leaks between analyses run in the same process.
    """
    
    def __init__(self):
        self._states: Dict[str, KindState] = {kind: KindState(kind) for kind in ALL_KINDS}
    
    def state(self, kind: str) -> KindState:
        return self._states[kind]
