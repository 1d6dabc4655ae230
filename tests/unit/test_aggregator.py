"""
Unit tests for tapa.processors.aggregator module.
"""
import math
import pytest

from helpers import make_pod, make_run
from tapa.core.context import AnalysisContext
from tapa.core.types import AnalysisConfig
from tapa.extractors import IntervalExtractor, RecordDecoder
from tapa.processors.aggregator import HierarchicalAggregator


def decode_all(raws):
    return [RecordDecoder.decode(raw, raw['kind']) for raw in raws]


def aggregate(pipeline_runs, task_runs, pods, mode='chained'):
    prs, trs, pds = decode_all(pipeline_runs), decode_all(task_runs), decode_all(pods)
    context = AnalysisContext()
    extractor = IntervalExtractor(AnalysisConfig(verbose=False))
    extractor.populate(prs, context.state('PipelineRun'))
    extractor.populate(trs, context.state('TaskRun'))
    extractor.populate(pds, context.state('Pod'))
    return HierarchicalAggregator(context).aggregate(prs, trs, pds, mode=mode)


class TestAttribution:
    """Tests for child time attribution."""
    
    def test_sum_delta_percentage(self):
        (result,) = aggregate(
            [make_run('PipelineRun', 'run', 0, 100)],
            [make_run('TaskRun', 'run-a', 0, 30), make_run('TaskRun', 'run-b', 50, 90)],
            [],
        )
        task_runs = result.children['TaskRun']
        assert result.duration == 100.0
        assert task_runs.total_duration == 70.0
        assert task_runs.delta == 30.0
        assert task_runs.percentage == pytest.approx(0.70)
        assert task_runs.child_count == 2
        assert result.as_tuple('TaskRun') == ('ci:run', 100.0, 1, 70.0, 30.0, pytest.approx(0.70), 1)
    
    def test_no_children(self):
        (result,) = aggregate([make_run('PipelineRun', 'run', 0, 100)], [], [])
        task_runs = result.children['TaskRun']
        assert task_runs.total_duration == 0.0
        assert task_runs.delta == 100.0
        assert task_runs.percentage == 0.0
        assert task_runs.max_concurrency == 0
    
    def test_negative_delta_not_clamped(self):
        (result,) = aggregate(
            [make_run('PipelineRun', 'run', 0, 10)],
            [make_run('TaskRun', 'run-a', 0, 10), make_run('TaskRun', 'run-b', 0, 10)],
            [],
        )
        assert result.children['TaskRun'].delta == -10.0
        assert result.children['TaskRun'].percentage == pytest.approx(2.0)
    
    def test_zero_duration_parent_percentage_is_nan(self):
        (result,) = aggregate(
            [make_run('PipelineRun', 'run', 5, 5)],
            [make_run('TaskRun', 'run-a', 5, 5)],
            [],
        )
        task_runs = result.children['TaskRun']
        assert math.isnan(task_runs.percentage)
        assert not task_runs.has_percentage
        assert task_runs.delta == 0.0
    
    def test_max_child_concurrency(self):
        (result,) = aggregate(
            [make_run('PipelineRun', 'run', 0, 100)],
            [
                make_run('TaskRun', 'run-a', 0, 50),
                make_run('TaskRun', 'run-b', 10, 60),
                make_run('TaskRun', 'run-c', 20, 70),
                make_run('TaskRun', 'run-d', 80, 90),
            ],
            [],
        )
        assert result.children['TaskRun'].max_concurrency == 3
    
    def test_wall_clock_and_parallelism(self):
        (result,) = aggregate(
            [make_run('PipelineRun', 'run', 0, 100)],
            [make_run('TaskRun', 'run-a', 0, 40), make_run('TaskRun', 'run-b', 0, 40)],
            [],
        )
        task_runs = result.children['TaskRun']
        assert task_runs.wall_clock == 40.0
        assert task_runs.parallelism_factor == 2.0
    
    def test_ineligible_children_ignored(self):
        (result,) = aggregate(
            [make_run('PipelineRun', 'run', 0, 100)],
            [make_run('TaskRun', 'run-a', 0, 30), make_run('TaskRun', 'run-b', 0, None, succeeded='Unknown')],
            [],
        )
        assert result.children['TaskRun'].child_count == 1
    
    def test_ineligible_parents_have_no_row(self):
        results = aggregate(
            [make_run('PipelineRun', 'done', 0, 10), make_run('PipelineRun', 'busy', 0, None, succeeded='Unknown')],
            [],
            [],
        )
        assert [r.key for r in results] == ['ci:done']
    
    def test_rows_in_parent_duration_order(self):
        results = aggregate(
            [
                make_run('PipelineRun', 'slow', 0, 300),
                make_run('PipelineRun', 'fast', 0, 10),
                make_run('PipelineRun', 'mid', 0, 100),
            ],
            [],
            [],
        )
        assert [r.key for r in results] == ['ci:fast', 'ci:mid', 'ci:slow']
    
    def test_invalid_mode(self):
        with pytest.raises(ValueError):
            aggregate([], [], [], mode='sideways')


class TestHierarchyModes:
    """Chained and independent pod attribution."""
    
    @pytest.fixture
    def records(self):
        pipeline_runs = [make_run('PipelineRun', 'run', 0, 100)]
        task_runs = [make_run('TaskRun', 'run-a', 0, 40)]
        pods = [
            make_pod('run-a-pod', 1, [('step', 1, 39)]),
            # belongs to the pipeline run by name but to no eligible task run
            make_pod('run-orphan-pod', 50, [('step', 50, 60)]),
        ]
        return pipeline_runs, task_runs, pods
    
    def test_chained_walks_through_task_runs(self, records):
        (result,) = aggregate(*records, mode='chained')
        pods = result.children['Pod']
        assert pods.child_count == 1
        assert pods.total_duration == 38.0
    
    def test_independent_matches_pipeline_run_directly(self, records):
        (result,) = aggregate(*records, mode='independent')
        pods = result.children['Pod']
        assert pods.child_count == 2
        assert pods.total_duration == 48.0
        assert result.children['TaskRun'].total_duration == 40.0
    
    def test_chained_counts_shared_pod_once(self):
        """With prefix matching a pod can match two task runs; it is counted once."""
        (result,) = aggregate(
            [make_run('PipelineRun', 'run', 0, 100)],
            [make_run('TaskRun', 'run-a', 0, 40), make_run('TaskRun', 'run-a-2', 0, 40)],
            [make_pod('run-a-2-pod', 0, [('step', 0, 30)])],
        )
        assert result.children['Pod'].child_count == 1
        assert result.children['Pod'].total_duration == 30.0
