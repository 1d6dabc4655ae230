"""
Concurrency scoring for entities of one kind.
"""

from typing import Dict

from ..core.context import KindState


class ConcurrencyAnalyzer:
    """
    Counts, for each eligible entity, how many entities of the same kind
    were running at some point during its window (itself included).
    
    Every query is tested pairwise against all other windows, so a full pass
    is quadratic in the number of eligible entities. That is fine for the
    fan-out of a pipeline run; a sweep over sorted endpoints is the way to
    scale it to whole clusters.
    """
    
    def __init__(self, state: KindState):
        """
        Initialize with the lookup maps of one kind.
        
        Args:
            state: KindState holding eligible start/end windows
        """
        self.state = state
    
    @staticmethod
    def overlaps(start, end, other_start, other_end) -> bool:
        """
        Decide whether two windows overlap.
        
        Identical windows always overlap, even when zero-length; otherwise
        windows are half-open, so touching endpoints do not count.
        """
        if start == other_start and end == other_end:
            return True
        return start < other_end and other_start < end
    
    def concurrency(self, key: str) -> int:
        """
        Concurrency of one eligible entity.
        
        Args:
            key: Entity key
            
        Returns:
            Number of overlapping entities including the entity itself
            
        Raises:
            KeyError: If the key is not an eligible entity of this kind
        """
        cached = self.state.concurrency.get(key)
        if cached is not None:
            return cached
        
        start = self.state.starts[key]
        end = self.state.ends[key]
        count = 1
        for other_key, other_start in self.state.starts.items():
            if other_key == key:
                continue
            if self.overlaps(start, end, other_start, self.state.ends[other_key]):
                count += 1
        
        self.state.concurrency[key] = count
        return count
    
    def calculate_all(self) -> Dict[str, int]:
        """Concurrency of every eligible entity of the kind."""
        return {key: self.concurrency(key) for key in self.state.starts}
