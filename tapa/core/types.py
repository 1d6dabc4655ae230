"""
Type definitions for run analysis.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterator, NamedTuple, Optional, Tuple


KIND_PIPELINE_RUN = 'PipelineRun'
KIND_TASK_RUN = 'TaskRun'
KIND_POD = 'Pod'
KIND_CONTAINER = 'Container'

ALL_KINDS = (KIND_PIPELINE_RUN, KIND_TASK_RUN, KIND_POD, KIND_CONTAINER)

STATUS_NOT_STARTED = 'not-started'
STATUS_RUNNING = 'running'
STATUS_COMPLETED = 'completed'
STATUS_FAILED = 'failed'

TERMINAL_STATUSES = (STATUS_COMPLETED, STATUS_FAILED)

PIPELINE_RUN_LABEL = 'tekton.dev/pipelineRun'

OUTPUT_FORMATS = ('text', 'csv')
HIERARCHY_CHAINED = 'chained'
HIERARCHY_INDEPENDENT = 'independent'
HIERARCHY_MODES = (HIERARCHY_CHAINED, HIERARCHY_INDEPENDENT)


@dataclass(frozen=True)
class ContainerRecord:
    """One container of a pod, as declared in the pod spec."""
    name: str
    terminated: bool = False
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None


@dataclass(frozen=True)
class RunRecord:
    """A decoded PipelineRun, TaskRun or Pod."""
    kind: str
    namespace: str
    name: str
    start_time: Optional[datetime] = None
    completion_time: Optional[datetime] = None
    status: str = STATUS_NOT_STARTED
    labels: Dict[str, str] = field(default_factory=dict)
    containers: Tuple[ContainerRecord, ...] = ()
    
    @property
    def key(self) -> str:
        return f"{self.namespace}:{self.name}"
    
    @property
    def has_started(self) -> bool:
        return self.start_time is not None
    
    @property
    def is_done(self) -> bool:
        return self.status in TERMINAL_STATUSES


class Interval(NamedTuple):
    """Execution window of one entity; start/end are None when ineligible."""
    key: str
    start: Optional[datetime]
    end: Optional[datetime]
    eligible: bool
    
    @property
    def duration(self) -> float:
        if self.start is None or self.end is None:
            return 0.0
        return (self.end - self.start).total_seconds()


class FlatResult(NamedTuple):
    """One row of a single-kind analysis."""
    key: str
    duration: float
    concurrency: int


@dataclass(frozen=True)
class ChildAttribution:
    """How much of a parent's time one kind of children accounts for."""
    kind: str
    total_duration: float
    delta: float
    percentage: float
    max_concurrency: int
    child_count: int = 0
    wall_clock: float = 0.0
    parallelism_factor: float = 1.0
    
    @property
    def has_percentage(self) -> bool:
        return not math.isnan(self.percentage)


@dataclass(frozen=True)
class AggregateResult:
    """One top-level entity with its per-kind child attribution."""
    key: str
    duration: float
    concurrency: int
    children: Dict[str, ChildAttribution] = field(default_factory=dict)
    
    def as_tuple(self, child_kind: str) -> Tuple[str, float, int, float, float, float, int]:
        """
        Flatten the attribution for one child kind.
        
        Returns:
            (parentKey, parentDuration, parentConcurrency, childTotalDuration,
             delta, percentage, maxChildConcurrency)
        """
        child = self.children[child_kind]
        return (
            self.key,
            self.duration,
            self.concurrency,
            child.total_duration,
            child.delta,
            child.percentage,
            child.max_concurrency,
        )
    
    def as_rows(self) -> Iterator[Tuple[str, float, int, float, float, float, int]]:
        for child_kind in self.children:
            yield self.as_tuple(child_kind)


class AnalysisConfig:
    """Configuration for run analysis."""
    
    def __init__(
        self,
        output_format: str = 'text',
        include_header: bool = True,
        delimiter: str = ',',
        require_owner_label: bool = True,
        owner_label: str = PIPELINE_RUN_LABEL,
        scope: Optional[str] = None,
        hierarchy_mode: str = HIERARCHY_CHAINED,
        verbose: bool = True
    ):
        """
        Initialize run analysis configuration.
        
        Args:
            output_format: 'text' for the fixed-column report, 'csv' for delimited rows.
            
            include_header: If True, delimited output starts with a header row.
            
            delimiter: Field separator for delimited output.
            
            require_owner_label: If True, pods that do not carry the pipeline run
                                 ownership label are excluded from every pod-based
                                 analysis. Default: True
            
            owner_label: Label key marking a pod as part of a pipeline run hierarchy.
            
            scope: Restricts emitted rows. Pipeline runs (flat and as aggregate
                   parents) must match it exactly as 'namespace:name'; task runs,
                   pods and containers must start with it.
            
            hierarchy_mode: 'chained' walks pipeline run -> task run -> pod;
                            'independent' matches task runs and pods directly
                            against the pipeline run.
            
            verbose: If True, progress lines are printed to stderr.
        
        Raises:
            ValueError: If output_format, hierarchy_mode or delimiter is invalid
        """
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Invalid output format '{output_format}'. Must be one of: {list(OUTPUT_FORMATS)}")
        if hierarchy_mode not in HIERARCHY_MODES:
            raise ValueError(f"Invalid hierarchy mode '{hierarchy_mode}'. Must be one of: {list(HIERARCHY_MODES)}")
        if len(delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character, got '{delimiter}'")
        
        self.output_format = output_format
        self.include_header = include_header
        self.delimiter = delimiter
        self.require_owner_label = require_owner_label
        self.owner_label = owner_label
        self.scope = scope
        self.hierarchy_mode = hierarchy_mode
        self.verbose = verbose
