"""
Time formatting utilities for human-readable output.
"""


def format_duration(seconds: float) -> str:
    """
    Format a duration in seconds to a human-readable string.
    
    Args:
        seconds: Duration in seconds
        
    Returns:
        Formatted time string (e.g., "850.00 ms", "2.34 s", "1m 30.50s")
    """
    if abs(seconds) < 1:
        return f"{seconds * 1000:.2f} ms"
    elif abs(seconds) < 60:
        return f"{seconds:.2f} s"
    else:
        sign = '-' if seconds < 0 else ''
        minutes = int(abs(seconds) // 60)
        remainder = abs(seconds) % 60
        return f"{sign}{minutes}m {remainder:.2f}s"
