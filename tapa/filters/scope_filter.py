"""
Scope filtering for analysis results.
"""

from typing import Optional

from ..core.types import KIND_PIPELINE_RUN


class ScopeFilter:
    """Restricts emitted rows to one pipeline run or to a key prefix."""
    
    def __init__(self, scope: Optional[str] = None):
        """
        Args:
            scope: 'namespace:name' key or key prefix; None keeps everything
        """
        self.scope = scope
    
    def matches(self, key: str, kind: str) -> bool:
        """
        Determine if a result row for the given kind should be emitted.
        
        Pipeline runs are top-level and need an exact key match; task runs,
        pods and containers are matched by prefix so that the children of a
        scoped pipeline run are kept.
        
        Args:
            key: Entity key
            kind: Entity kind
            
        Returns:
            True if the row is in scope
        """
        if not self.scope:
            return True
        if kind == KIND_PIPELINE_RUN:
            return key == self.scope
        return key.startswith(self.scope)
