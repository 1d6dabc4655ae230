"""
Execution window extraction for pipeline runs, task runs, pods and containers.
"""

from typing import Iterable, List

from ..core.context import KindState
from ..core.types import (
    AnalysisConfig,
    Interval,
    RunRecord,
    KIND_PIPELINE_RUN,
    KIND_POD,
    KIND_TASK_RUN,
)


class IntervalExtractor:
    """Derives (key, start, end, eligible) windows from decoded records."""
    
    def __init__(self, config: AnalysisConfig):
        """
        Initialize with analysis configuration.
        
        Args:
            config: AnalysisConfig instance
        """
        self.config = config
    
    @staticmethod
    def extract_run(record: RunRecord) -> Interval:
        """
        Window of a PipelineRun or TaskRun: startTime to completionTime.
        
        Only runs that started and reached a terminal condition are eligible.
        """
        eligible = (record.has_started and record.is_done
                    and record.completion_time is not None)
        if not eligible:
            return Interval(record.key, None, None, False)
        return Interval(record.key, record.start_time, record.completion_time, True)
    
    def is_owned_pod(self, record: RunRecord) -> bool:
        """True if the pod carries the pipeline run ownership label (or the check is off)."""
        if not self.config.require_owner_label:
            return True
        return self.config.owner_label in record.labels
    
    def extract_pod(self, record: RunRecord) -> Interval:
        """
        Window of a Pod: its startTime to the latest container finishedAt.
        
        The pod ends when its last container finishes, whatever the declared
        order of the containers.
        """
        if not (record.has_started and record.is_done and self.is_owned_pod(record)):
            return Interval(record.key, None, None, False)
        
        finished = [c.finished_at for c in record.containers
                    if c.terminated and c.finished_at is not None]
        if not finished:
            return Interval(record.key, None, None, False)
        return Interval(record.key, record.start_time, max(finished), True)
    
    def extract_containers(self, record: RunRecord) -> List[Interval]:
        """
        Windows of every container of a pod.
        
        Containers in a pod are admitted together but run one after another in
        spec order, so the first container is measured from its own startedAt
        and every later one from the finishedAt of the container declared
        before it.
        
        Args:
            record: Pod record with containers in spec order
            
        Returns:
            One Interval per container, keyed 'namespace:pod-container'
        """
        intervals = []
        owned = self.is_owned_pod(record)
        previous_finished = None
        
        for position, container in enumerate(record.containers):
            key = f"{record.key}-{container.name}"
            start = container.started_at if position == 0 else previous_finished
            end = container.finished_at if container.terminated else None
            
            if owned and start is not None and end is not None:
                intervals.append(Interval(key, start, end, True))
            else:
                intervals.append(Interval(key, None, None, False))
            previous_finished = end
        
        return intervals
    
    def extract(self, record: RunRecord) -> List[Interval]:
        """Dispatch on record kind; containers are handled by extract_containers."""
        if record.kind in (KIND_PIPELINE_RUN, KIND_TASK_RUN):
            return [self.extract_run(record)]
        if record.kind == KIND_POD:
            return [self.extract_pod(record)]
        raise ValueError(f"Unsupported record kind '{record.kind}'")
    
    def populate(self, records: Iterable[RunRecord], state: KindState,
                 containers: bool = False) -> List[Interval]:
        """
        Extract windows for a batch of records and store the eligible ones.
        
        Args:
            records: Decoded records of one kind
            state: KindState receiving the durations and windows
            containers: If True, records are pods and their containers are extracted
            
        Returns:
            List of every extracted interval, eligible or not
        """
        intervals = []
        for record in records:
            extracted = self.extract_containers(record) if containers else self.extract(record)
            for interval in extracted:
                state.record(interval)
                intervals.append(interval)
        return intervals
