"""
Parent/child matching between pipeline runs, task runs and pods.
"""

from typing import Iterable, List

from ..core.types import RunRecord


class OwnershipMatcher:
    """Matches child entities to parents by naming convention."""
    
    @staticmethod
    def is_child_of(candidate: RunRecord, parent: RunRecord) -> bool:
        """
        Decide whether candidate belongs to parent.
        
        The candidate must live in the same namespace and its name must start
        with the parent's name. No separator is required after the prefix, so
        'build' also owns 'buildx-2'.
        
        Args:
            candidate: Possible child record
            parent: Possible parent record
            
        Returns:
            True if candidate is a child of parent
        """
        return (candidate.namespace == parent.namespace
                and candidate.name.startswith(parent.name))
    
    @classmethod
    def children_of(cls, parent: RunRecord, candidates: Iterable[RunRecord]) -> List[RunRecord]:
        """All candidates that are children of parent, in input order."""
        return [candidate for candidate in candidates if cls.is_child_of(candidate, parent)]
