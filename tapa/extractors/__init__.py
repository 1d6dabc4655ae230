"""Record decoding and interval extraction."""

from .record_decoder import RecordDecoder
from .interval_extractor import IntervalExtractor

__all__ = ["RecordDecoder", "IntervalExtractor"]
