"""
Rendering of analysis results as a text report or delimited rows.
"""

import csv
import io
from typing import List

from ..core.types import AggregateResult, AnalysisConfig, FlatResult, KIND_PIPELINE_RUN
from .time_formatter import format_duration


CHILD_LABELS = {
    'TaskRun': 'taskruns',
    'Pod': 'pods',
}


def _percentage_text(child) -> str:
    return f"{child.percentage:f}" if child.has_percentage else 'n/a'


class ReportFormatter:
    """Renders flat and aggregate results according to the configured output format."""
    
    def __init__(self, config: AnalysisConfig):
        """
        Args:
            config: AnalysisConfig carrying output_format, include_header and delimiter
        """
        self.config = config
    
    def render_flat(self, kind: str, results: List[FlatResult]) -> str:
        if self.config.output_format == 'csv':
            return self._delimited_flat(kind, results)
        return self._text_flat(kind, results)
    
    def render_aggregate(self, results: List[AggregateResult]) -> str:
        if self.config.output_format == 'csv':
            return self._delimited_aggregate(results)
        return self._text_aggregate(results)
    
    @staticmethod
    def _text_flat(kind: str, results: List[FlatResult]) -> str:
        lines = [
            f"{kind} {result.key}\t\ttook {result.duration} seconds "
            f"({format_duration(result.duration)}) concurrency {result.concurrency}"
            for result in results
        ]
        return ''.join(line + '\n' for line in lines)
    
    @staticmethod
    def _text_aggregate(results: List[AggregateResult]) -> str:
        lines = []
        for result in results:
            parts = [
                f"{KIND_PIPELINE_RUN} {result.key}\t\ttook {result.duration} seconds "
                f"({format_duration(result.duration)}) concurrency {result.concurrency}"
            ]
            for child_kind, child in result.children.items():
                parts.append(
                    f"{CHILD_LABELS.get(child_kind, child_kind)} {child.total_duration} "
                    f"delta {child.delta} percent {_percentage_text(child)} "
                    f"max concurrency {child.max_concurrency}"
                )
            lines.append(parts[0] + ' with ' + ' and '.join(parts[1:]) if len(parts) > 1 else parts[0])
        return ''.join(line + '\n' for line in lines)
    
    def _writer(self, buffer):
        return csv.writer(buffer, delimiter=self.config.delimiter, lineterminator='\n')
    
    def _delimited_flat(self, kind: str, results: List[FlatResult]) -> str:
        buffer = io.StringIO()
        writer = self._writer(buffer)
        if self.config.include_header:
            writer.writerow([kind.lower(), 'duration_seconds', 'concurrency'])
        for result in results:
            writer.writerow([result.key, result.duration, result.concurrency])
        return buffer.getvalue()
    
    def _delimited_aggregate(self, results: List[AggregateResult]) -> str:
        buffer = io.StringIO()
        writer = self._writer(buffer)
        child_kinds = list(results[0].children) if results else list(CHILD_LABELS)
        
        if self.config.include_header:
            header = [KIND_PIPELINE_RUN.lower(), 'duration_seconds', 'concurrency']
            for child_kind in child_kinds:
                prefix = child_kind.lower()
                header.extend([
                    f"{prefix}_total_seconds",
                    f"{prefix}_delta_seconds",
                    f"{prefix}_percentage",
                    f"{prefix}_max_concurrency",
                ])
            writer.writerow(header)
        
        for result in results:
            row = [result.key, result.duration, result.concurrency]
            for child_kind in child_kinds:
                child = result.children[child_kind]
                row.extend([
                    child.total_duration,
                    child.delta,
                    child.percentage if child.has_percentage else '',
                    child.max_concurrency,
                ])
            writer.writerow(row)
        return buffer.getvalue()
