"""
Main run analyzer orchestrator.
"""

import sys
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..core.context import AnalysisContext
from ..core.types import (
    AggregateResult,
    AnalysisConfig,
    FlatResult,
    RunRecord,
    KIND_CONTAINER,
    KIND_PIPELINE_RUN,
    KIND_POD,
    KIND_TASK_RUN,
)
from ..extractors import IntervalExtractor
from ..filters import ScopeFilter
from ..processors import (
    ConcurrencyAnalyzer,
    DurationRanker,
    HierarchicalAggregator,
    LoadResult,
    OwnershipMatcher,
    RecordFileProcessor,
)


@dataclass
class AnalysisReport:
    """Results of one file-based analysis together with what was loaded."""
    kind: str
    flat_results: List[FlatResult] = field(default_factory=list)
    aggregate_results: List[AggregateResult] = field(default_factory=list)
    loads: Dict[str, LoadResult] = field(default_factory=dict)
    
    @property
    def is_aggregate(self) -> bool:
        return self.kind == 'hierarchy'
    
    @property
    def skipped_sources(self) -> List[str]:
        return [source for load in self.loads.values() for source in load.skipped_documents]
    
    @property
    def skipped_records(self) -> int:
        return sum(load.skipped_records for load in self.loads.values())


class RunAnalyzer:
    """Main orchestrator for run analysis."""
    
    def __init__(self, config: Optional[AnalysisConfig] = None):
        """
        Initialize the RunAnalyzer.
        
        Args:
            config: AnalysisConfig instance (default: AnalysisConfig())
        """
        self.config = config or AnalysisConfig()
        
        self.extractor = IntervalExtractor(self.config)
        self.scope_filter = ScopeFilter(self.config.scope)
        self.matcher = OwnershipMatcher()
        self.file_processor = RecordFileProcessor(verbose=self.config.verbose)
    
    def _log(self, message: str) -> None:
        if self.config.verbose:
            print(message, file=sys.stderr)
    
    def analyze_flat(self, kind: str, records: Iterable[RunRecord]) -> List[FlatResult]:
        """
        Duration and concurrency of every eligible entity of one kind.
        
        Args:
            kind: PipelineRun, TaskRun, Pod, or Container (records are then pods)
            records: Decoded records
            
        Returns:
            FlatResult rows in ascending (duration, key) order
        """
        context = AnalysisContext()
        state = context.state(kind)
        
        # Pass 1: extract windows and fill the per-kind maps
        self.extractor.populate(records, state, containers=(kind == KIND_CONTAINER))
        
        # Pass 2: score concurrency against every eligible window of the kind
        analyzer = ConcurrencyAnalyzer(state)
        
        # Pass 3: emit rows in duration order
        results = [
            FlatResult(key, state.durations[key], analyzer.concurrency(key))
            for key in DurationRanker.ordered_keys(state)
            if self.scope_filter.matches(key, kind)
        ]
        
        self._log(f"Found {len(state)} eligible {kind} entities, {len(results)} in scope")
        return results
    
    def analyze_pipeline_runs(self, records: Iterable[RunRecord]) -> List[FlatResult]:
        return self.analyze_flat(KIND_PIPELINE_RUN, records)
    
    def analyze_task_runs(self, records: Iterable[RunRecord]) -> List[FlatResult]:
        return self.analyze_flat(KIND_TASK_RUN, records)
    
    def analyze_pods(self, records: Iterable[RunRecord]) -> List[FlatResult]:
        return self.analyze_flat(KIND_POD, records)
    
    def analyze_containers(self, pods: Iterable[RunRecord]) -> List[FlatResult]:
        return self.analyze_flat(KIND_CONTAINER, pods)
    
    def analyze_hierarchy(
        self,
        pipeline_runs: Iterable[RunRecord],
        task_runs: Iterable[RunRecord],
        pods: Iterable[RunRecord],
        mode: Optional[str] = None
    ) -> List[AggregateResult]:
        """
        Attribute each pipeline run's duration to its task runs and pods.
        
        Args:
            pipeline_runs: PipelineRun records
            task_runs: TaskRun records
            pods: Pod records
            mode: 'chained' or 'independent' (default: config.hierarchy_mode)
            
        Returns:
            AggregateResult rows in ascending (duration, key) order
        """
        pipeline_runs, task_runs, pods = list(pipeline_runs), list(task_runs), list(pods)
        context = AnalysisContext()
        
        self.extractor.populate(pipeline_runs, context.state(KIND_PIPELINE_RUN))
        self.extractor.populate(task_runs, context.state(KIND_TASK_RUN))
        self.extractor.populate(pods, context.state(KIND_POD))
        
        aggregator = HierarchicalAggregator(context, self.matcher)
        results = aggregator.aggregate(
            pipeline_runs, task_runs, pods,
            mode=mode or self.config.hierarchy_mode
        )
        results = [r for r in results if self.scope_filter.matches(r.key, KIND_PIPELINE_RUN)]
        
        self._log(
            f"Found {len(context.state(KIND_PIPELINE_RUN))} eligible pipeline runs, "
            f"{len(context.state(KIND_TASK_RUN))} task runs, {len(context.state(KIND_POD))} pods"
        )
        return results
    
    def process_files(self, kind: str, path: str) -> AnalysisReport:
        """
        Load one kind from a file or directory and analyze it.
        
        Args:
            kind: PipelineRun, TaskRun, Pod or Container
            path: File or directory path
            
        Returns:
            AnalysisReport with flat results
            
        Raises:
            InputAccessError: If the input cannot be read
        """
        record_kind = KIND_POD if kind == KIND_CONTAINER else kind
        load = self.file_processor.load(path, record_kind)
        return AnalysisReport(
            kind=kind,
            flat_results=self.analyze_flat(kind, load.records),
            loads={record_kind: load},
        )
    
    def process_hierarchy_files(self, pipeline_run_path: str, task_run_path: str,
                                pod_path: str, mode: Optional[str] = None) -> AnalysisReport:
        """
        Load pipeline runs, task runs and pods and attribute parent time.
        
        All three inputs are loaded before any computation, so an unreadable
        input aborts the analysis without partial results.
        
        Raises:
            InputAccessError: If any input cannot be read
        """
        loads = {
            KIND_PIPELINE_RUN: self.file_processor.load(pipeline_run_path, KIND_PIPELINE_RUN),
            KIND_TASK_RUN: self.file_processor.load(task_run_path, KIND_TASK_RUN),
            KIND_POD: self.file_processor.load(pod_path, KIND_POD),
        }
        results = self.analyze_hierarchy(
            loads[KIND_PIPELINE_RUN].records,
            loads[KIND_TASK_RUN].records,
            loads[KIND_POD].records,
            mode=mode
        )
        return AnalysisReport(kind='hierarchy', aggregate_results=results, loads=loads)
