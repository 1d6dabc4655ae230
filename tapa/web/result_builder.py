"""
Result builder for JSON output.
"""

from ..formatters import format_duration


def _child_to_dict(child):
    return {
        'kind': child.kind,
        'count': child.child_count,
        'total_seconds': child.total_duration,
        'total_formatted': format_duration(child.total_duration),
        'delta_seconds': child.delta,
        'delta_formatted': format_duration(child.delta),
        # NaN for zero-length parents is not valid JSON
        'percentage': child.percentage if child.has_percentage else None,
        'max_concurrency': child.max_concurrency,
        'wall_clock_seconds': child.wall_clock,
        'parallelism_factor': round(child.parallelism_factor, 2),
    }


def prepare_results(report):
    """
    Convert an analysis report to a structured format for JSON output.
    
    Args:
        report: AnalysisReport from RunAnalyzer
        
    Returns:
        Dictionary with structured results for rendering
    """
    inputs = {
        kind: {
            'sources': load.sources,
            'records': len(load.records),
            'skipped_documents': load.skipped_documents,
            'skipped_records': load.skipped_records,
            'dropped_records': load.dropped_records,
        }
        for kind, load in report.loads.items()
    }
    
    if report.is_aggregate:
        rows = [
            {
                'key': result.key,
                'duration_seconds': result.duration,
                'duration_formatted': format_duration(result.duration),
                'concurrency': result.concurrency,
                'children': {
                    kind.lower(): _child_to_dict(child)
                    for kind, child in result.children.items()
                },
            }
            for result in report.aggregate_results
        ]
    else:
        rows = [
            {
                'key': result.key,
                'duration_seconds': result.duration,
                'duration_formatted': format_duration(result.duration),
                'concurrency': result.concurrency,
            }
            for result in report.flat_results
        ]
    
    durations = [row['duration_seconds'] for row in rows]
    summary = {
        'kind': report.kind,
        'count': len(rows),
        'total_seconds': sum(durations),
        'max_seconds': max(durations) if durations else 0.0,
        'max_concurrency': max((row['concurrency'] for row in rows), default=0),
        'complete': all(load.is_complete for load in report.loads.values()),
    }
    
    return {
        'summary': summary,
        'inputs': inputs,
        'results': rows,
    }
