"""
Attribution of pipeline run time to its task runs and pods.
"""

from typing import Dict, Iterable, List

from ..core.context import AnalysisContext
from ..core.types import (
    AggregateResult,
    ChildAttribution,
    RunRecord,
    HIERARCHY_CHAINED,
    HIERARCHY_INDEPENDENT,
    KIND_PIPELINE_RUN,
    KIND_POD,
    KIND_TASK_RUN,
)
from ..formatters.interval_merger import calculate_parallelism_factor, calculate_wall_clock
from .concurrency import ConcurrencyAnalyzer
from .ownership import OwnershipMatcher
from .ranker import DurationRanker


class HierarchicalAggregator:
    """Sums child durations under each eligible pipeline run."""
    
    def __init__(self, context: AnalysisContext, matcher: OwnershipMatcher = None):
        """
        Initialize with a populated analysis context.
        
        Args:
            context: AnalysisContext whose pipeline run, task run and pod
                     states have already been filled by the extractor
            matcher: OwnershipMatcher instance (default: OwnershipMatcher())
        """
        self.context = context
        self.matcher = matcher or OwnershipMatcher()
        self.concurrency = {
            kind: ConcurrencyAnalyzer(context.state(kind))
            for kind in (KIND_PIPELINE_RUN, KIND_TASK_RUN, KIND_POD)
        }
    
    def _eligible(self, records: Iterable[RunRecord], kind: str) -> List[RunRecord]:
        """Eligible records of a kind, one per key, in input order."""
        state = self.context.state(kind)
        seen = set()
        eligible = []
        for record in records:
            if record.key in state and record.key not in seen:
                seen.add(record.key)
                eligible.append(record)
        return eligible
    
    def attribute(self, parent_duration: float, child_keys: List[str], child_kind: str) -> ChildAttribution:
        """
        Attribute a parent's duration to a set of children.
        
        Delta is reported as-is and can be negative when children overrun the
        parent. Percentage is NaN when the parent took zero seconds.
        
        Args:
            parent_duration: Duration of the parent in seconds
            child_keys: Keys of eligible children of child_kind
            child_kind: Kind of the children
            
        Returns:
            ChildAttribution for the children
        """
        state = self.context.state(child_kind)
        analyzer = self.concurrency[child_kind]
        
        child_total = sum(state.durations[key] for key in child_keys)
        delta = parent_duration - child_total
        percentage = child_total / parent_duration if parent_duration != 0 else float('nan')
        max_concurrency = max((analyzer.concurrency(key) for key in child_keys), default=0)
        
        wall_clock = calculate_wall_clock([(state.starts[key], state.ends[key]) for key in child_keys])
        
        return ChildAttribution(
            kind=child_kind,
            total_duration=child_total,
            delta=delta,
            percentage=percentage,
            max_concurrency=max_concurrency,
            child_count=len(child_keys),
            wall_clock=wall_clock,
            parallelism_factor=calculate_parallelism_factor(child_total, wall_clock),
        )
    
    def aggregate(
        self,
        pipeline_runs: Iterable[RunRecord],
        task_runs: Iterable[RunRecord],
        pods: Iterable[RunRecord],
        mode: str = HIERARCHY_CHAINED
    ) -> List[AggregateResult]:
        """
        Build one AggregateResult per eligible pipeline run.
        
        In chained mode pods are attributed through the task runs that own
        them; in independent mode task runs and pods are each matched against
        the pipeline run directly. The two modes can disagree on pod totals.
        
        Args:
            pipeline_runs: PipelineRun records
            task_runs: TaskRun records
            pods: Pod records
            mode: 'chained' or 'independent'
            
        Returns:
            Results in ascending (duration, key) order of the pipeline runs
        """
        if mode not in (HIERARCHY_CHAINED, HIERARCHY_INDEPENDENT):
            raise ValueError(f"Invalid hierarchy mode '{mode}'")
        
        parents: Dict[str, RunRecord] = {
            record.key: record for record in self._eligible(pipeline_runs, KIND_PIPELINE_RUN)
        }
        eligible_task_runs = self._eligible(task_runs, KIND_TASK_RUN)
        eligible_pods = self._eligible(pods, KIND_POD)
        
        pr_state = self.context.state(KIND_PIPELINE_RUN)
        results = []
        for key in DurationRanker.ordered_keys(pr_state):
            parent = parents.get(key)
            if parent is None:
                continue
            
            children = self.matcher.children_of(parent, eligible_task_runs)
            task_run_keys = [child.key for child in children]
            
            if mode == HIERARCHY_CHAINED:
                pod_keys = []
                seen = set()
                for task_run in children:
                    for pod in self.matcher.children_of(task_run, eligible_pods):
                        if pod.key not in seen:
                            seen.add(pod.key)
                            pod_keys.append(pod.key)
            else:
                pod_keys = [pod.key for pod in self.matcher.children_of(parent, eligible_pods)]
            
            duration = pr_state.durations[key]
            results.append(AggregateResult(
                key=key,
                duration=duration,
                concurrency=self.concurrency[KIND_PIPELINE_RUN].concurrency(key),
                children={
                    KIND_TASK_RUN: self.attribute(duration, task_run_keys, KIND_TASK_RUN),
                    KIND_POD: self.attribute(duration, pod_keys, KIND_POD),
                },
            ))
        return results
