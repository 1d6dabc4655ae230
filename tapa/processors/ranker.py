"""
Duration ordering of analysis results.
"""

from typing import List, Tuple

from ..core.context import KindState


class DurationRanker:
    """Orders the eligible entities of one kind by duration."""
    
    @staticmethod
    def distinct_durations(state: KindState) -> List[float]:
        """Every observed duration value once, ascending."""
        return sorted(state.distinct_durations)
    
    @staticmethod
    def ordered_keys(state: KindState) -> List[str]:
        """
        Keys sorted by (duration, key).
        
        Entities with equal durations come out in lexicographic key order.
        """
        return [key for _, key in sorted((duration, key) for key, duration in state.durations.items())]
    
    @classmethod
    def group_by_duration(cls, state: KindState) -> List[Tuple[float, List[str]]]:
        """
        Group keys under each distinct duration value.
        
        Returns:
            List of (duration, keys) in ascending duration order; keys sorted
        """
        groups: List[Tuple[float, List[str]]] = []
        for key in cls.ordered_keys(state):
            duration = state.durations[key]
            if groups and groups[-1][0] == duration:
                groups[-1][1].append(key)
            else:
                groups.append((duration, [key]))
        return groups
