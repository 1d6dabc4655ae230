"""
Unit tests for tapa.formatters.report_formatter module.
"""
from tapa.core.types import AggregateResult, AnalysisConfig, ChildAttribution, FlatResult
from tapa.formatters.report_formatter import ReportFormatter


FLAT = [FlatResult('ci:fast', 10.0, 1), FlatResult('ci:slow', 90.0, 2)]


def make_aggregate(percentage=0.7):
    return [AggregateResult(
        key='ci:run',
        duration=100.0,
        concurrency=1,
        children={
            'TaskRun': ChildAttribution('TaskRun', 70.0, 30.0, percentage, 2),
            'Pod': ChildAttribution('Pod', 60.0, 40.0, 0.6, 3),
        },
    )]


class TestTextReport:
    """Tests for the fixed-column text report."""
    
    def test_flat_lines(self):
        output = ReportFormatter(AnalysisConfig()).render_flat('PipelineRun', FLAT)
        lines = output.splitlines()
        assert lines[0] == "PipelineRun ci:fast\t\ttook 10.0 seconds (10.00 s) concurrency 1"
        assert lines[1].startswith("PipelineRun ci:slow\t\ttook 90.0 seconds (1m 30.00s)")
    
    def test_aggregate_line(self):
        output = ReportFormatter(AnalysisConfig()).render_aggregate(make_aggregate())
        assert output == (
            "PipelineRun ci:run\t\ttook 100.0 seconds (1m 40.00s) concurrency 1 with "
            "taskruns 70.0 delta 30.0 percent 0.700000 max concurrency 2 and "
            "pods 60.0 delta 40.0 percent 0.600000 max concurrency 3\n"
        )
    
    def test_undefined_percentage(self):
        output = ReportFormatter(AnalysisConfig()).render_aggregate(make_aggregate(float('nan')))
        assert "percent n/a" in output
    
    def test_empty(self):
        assert ReportFormatter(AnalysisConfig()).render_flat('Pod', []) == ''


class TestDelimitedReport:
    """Tests for delimited rows."""
    
    def test_flat_with_header(self):
        output = ReportFormatter(AnalysisConfig(output_format='csv')).render_flat('TaskRun', FLAT)
        assert output.splitlines() == [
            'taskrun,duration_seconds,concurrency',
            'ci:fast,10.0,1',
            'ci:slow,90.0,2',
        ]
    
    def test_flat_without_header_custom_delimiter(self):
        config = AnalysisConfig(output_format='csv', include_header=False, delimiter='\t')
        output = ReportFormatter(config).render_flat('TaskRun', FLAT)
        assert output.splitlines() == ['ci:fast\t10.0\t1', 'ci:slow\t90.0\t2']
    
    def test_aggregate_rows(self):
        output = ReportFormatter(AnalysisConfig(output_format='csv')).render_aggregate(make_aggregate())
        header, row = output.splitlines()
        assert header == (
            'pipelinerun,duration_seconds,concurrency,'
            'taskrun_total_seconds,taskrun_delta_seconds,taskrun_percentage,taskrun_max_concurrency,'
            'pod_total_seconds,pod_delta_seconds,pod_percentage,pod_max_concurrency'
        )
        assert row == 'ci:run,100.0,1,70.0,30.0,0.7,2,60.0,40.0,0.6,3'
    
    def test_undefined_percentage_left_empty(self):
        config = AnalysisConfig(output_format='csv', include_header=False)
        output = ReportFormatter(config).render_aggregate(make_aggregate(float('nan')))
        assert output.splitlines()[0].split(',')[5] == ''
