"""
Exception types raised during run analysis.
"""


class TapaError(Exception):
    """Base class for analysis errors."""


class InputAccessError(TapaError):
    """An input file or directory could not be read."""
    
    def __init__(self, source: str, reason: str = ''):
        self.source = source
        self.reason = reason
        message = f"cannot read input '{source}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class RecordDecodeError(TapaError, ValueError):
    """A single record did not match the expected structure."""
