#!/usr/bin/env python3
"""
Tekton Artifact Performance Analysis - command line interface
"""

import argparse
import sys

from tapa import AnalysisConfig, InputAccessError, RunAnalyzer
from tapa.core.types import KIND_CONTAINER, KIND_PIPELINE_RUN, KIND_POD, KIND_TASK_RUN
from tapa.formatters import ReportFormatter


FLAT_COMMANDS = {
    'prlist': (KIND_PIPELINE_RUN, 'Parse a list of Tekton PipelineRuns for duration and concurrency'),
    'trlist': (KIND_TASK_RUN, 'Parse a list of Tekton TaskRuns for duration and concurrency'),
    'podlist': (KIND_POD, 'Parse a list of Pods for duration and concurrency'),
    'containerlist': (KIND_CONTAINER, 'Parse a list of Pods for per-container duration and concurrency'),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='tapa',
        description='Tekton Artifact Performance Analysis inspects lists of Tekton objects or their '
                    'underlying Pods and determines time spent on particular units of work.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tapa prlist pipelineruns.json
  tapa podlist pods/ --format csv --no-header
  tapa all pipelineruns.json taskruns.json pods.json --mode independent
  tapa all prs.json trs.json pods.json --scope ci:build-42
        """
    )
    
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('-f', '--format', dest='output_format', choices=['text', 'csv'], default='text',
                        help='Output format (default: text)')
    common.add_argument('--no-header', action='store_true', help='Omit the header row of csv output')
    common.add_argument('--delimiter', default=',', help='Field separator for csv output (default: ,)')
    common.add_argument('--scope', help='Only report this namespace:name (pipeline runs) or key prefix')
    common.add_argument('--include-unlabeled-pods', action='store_true',
                        help='Include pods without the tekton.dev/pipelineRun label')
    common.add_argument('-q', '--quiet', action='store_true', help='Do not print progress to stderr')
    
    subparsers = parser.add_subparsers(dest='command', required=True)
    for name, (_, help_text) in FLAT_COMMANDS.items():
        sub = subparsers.add_parser(name, parents=[common], help=help_text, description=help_text)
        sub.add_argument('path', help='JSON list file or directory of JSON files')
    
    all_parser = subparsers.add_parser(
        'all', parents=[common],
        help='Parse PipelineRuns, their TaskRuns, and their Pods for time attribution',
        description='Parse PipelineRuns, their TaskRuns, and their Pods for time attribution'
    )
    all_parser.add_argument('pipelineruns', help='PipelineRun list file or directory')
    all_parser.add_argument('taskruns', help='TaskRun list file or directory')
    all_parser.add_argument('pods', help='Pod list file or directory')
    all_parser.add_argument('--mode', choices=['chained', 'independent'], default='chained',
                            help='chained: pods attributed through task runs; '
                                 'independent: task runs and pods matched to the pipeline run directly')
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    
    try:
        config = AnalysisConfig(
            output_format=args.output_format,
            include_header=not args.no_header,
            delimiter=args.delimiter,
            require_owner_label=not args.include_unlabeled_pods,
            scope=args.scope,
            hierarchy_mode=getattr(args, 'mode', 'chained'),
            verbose=not args.quiet
        )
    except ValueError as e:
        parser.error(str(e))
    
    analyzer = RunAnalyzer(config)
    formatter = ReportFormatter(config)
    
    try:
        if args.command == 'all':
            report = analyzer.process_hierarchy_files(args.pipelineruns, args.taskruns, args.pods)
            output = formatter.render_aggregate(report.aggregate_results)
        else:
            kind = FLAT_COMMANDS[args.command][0]
            report = analyzer.process_files(kind, args.path)
            output = formatter.render_flat(kind, report.flat_results)
    except InputAccessError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1
    
    sys.stdout.write(output)
    
    if report.skipped_sources:
        print(f"WARNING: skipped malformed documents: {', '.join(report.skipped_sources)}", file=sys.stderr)
    if report.skipped_records:
        print(f"WARNING: skipped {report.skipped_records} malformed records", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
