"""
Interval merging utility for calculating effective (wall-clock) time
from overlapping execution windows.
"""
from datetime import datetime
from typing import List, Tuple


def merge_intervals(intervals: List[Tuple[datetime, datetime]]) -> List[Tuple[datetime, datetime]]:
    """
    Merge overlapping windows into non-overlapping ones.
    
    Example:
        Input: [(0s, 100s), (50s, 150s), (200s, 300s)]
        After merge: [(0s, 150s), (200s, 300s)]
    
    Args:
        intervals: List of (start, end) tuples
        
    Returns:
        Merged windows sorted by start; windows with end < start are dropped
    """
    valid = sorted((s, e) for s, e in intervals if s is not None and e is not None and e >= s)
    if not valid:
        return []
    
    merged = [valid[0]]
    for start, end in valid[1:]:
        last_start, last_end = merged[-1]
        if start <= last_end:
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))
    return merged


def calculate_wall_clock(intervals: List[Tuple[datetime, datetime]]) -> float:
    """
    Total seconds covered by at least one window.
    
    Args:
        intervals: List of (start, end) tuples
        
    Returns:
        Covered time in seconds
    """
    return sum((end - start).total_seconds() for start, end in merge_intervals(intervals))


def calculate_parallelism_factor(cumulative: float, wall_clock: float) -> float:
    """
    Calculate the parallelism factor (how much parallelism was achieved).
    
    Args:
        cumulative: Sum of all individual durations
        wall_clock: Covered time (merged windows)
        
    Returns:
        Parallelism factor (>1 means parallel execution occurred)
    """
    if wall_clock <= 0:
        return 1.0
    return cumulative / wall_clock
