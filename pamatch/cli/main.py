# pamatch/cli/main.py
import argparse
import json
import logging
import sys
from typing import List, Optional

from pamatch.config.defaults import SAVE_ARTIFACTS
from pamatch.core.context import ApplicationContext
from pamatch.core.logging_config import LoggingManager
from pamatch.error_handlers import handle_exceptions
from pamatch.models.options import PipelineOptions
from pamatch.pipelines.orchestrator import PresenceAbsencePipeline
from pamatch.utils.fasta import read_fasta_collection, read_subject_collections
from pamatch.utils.writer import ResultWriter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Anchored-alignment presence/absence pipeline')

    parser.add_argument('--config', type=str, help='Path to configuration file')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('--log-file', type=str,
                        help='Log to file in addition to stderr')
    parser.add_argument('--log-dir', type=str,
                        help='Directory for log files')
    parser.add_argument('--json', action='store_true',
                        help='Print run statistics as JSON')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    run_parser = subparsers.add_parser('run', help='Search, align and summarize presence/absence')
    run_parser.add_argument('--query', required=True, help='Query FASTA file')
    run_parser.add_argument('--subject', required=True, nargs='+',
                            help='Subject FASTA files (one per genome)')
    run_parser.add_argument('--k', type=int, help='k-mer length for the seed search')
    run_parser.add_argument('--threshold', type=float, help='Minimum match_pid retained')
    run_parser.add_argument('--seed', type=int, help='Seed for representative sub-sampling')
    run_parser.add_argument('--threads', type=int, help='Worker processes for alignment')
    run_parser.add_argument('--save', nargs='+', choices=SAVE_ARTIFACTS,
                            help='Artifacts to write')
    run_parser.add_argument('--output-dir', type=str, help='Directory for written artifacts')

    return parser


@handle_exceptions(exit_on_error=False)
def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    ApplicationContext.reset()
    context = ApplicationContext(args.config)
    config = context.config

    logger = LoggingManager.configure(
        verbose=args.verbose,
        log_file=args.log_file,
        log_dir=args.log_dir,
        component="pamatch",
        config=config
    )

    if args.command == 'run':
        return run_command(args, context, logger)

    parser.print_help()
    return 1


def run_command(args: argparse.Namespace, context: ApplicationContext, logger: logging.Logger) -> int:
    """Execute the run subcommand"""
    options = options_from_args(args, context)
    if args.output_dir:
        context.update_config('paths', 'output_dir', args.output_dir)
    output_dir = context.config_manager.get_path('output_dir', './output')

    queries = read_fasta_collection(args.query, name='queries')
    subjects = read_subject_collections(args.subject)

    pipeline = PresenceAbsencePipeline(options)
    result = pipeline.run(queries, subjects)

    written = ResultWriter(output_dir, options.save_list).write(result, queries)

    if args.json:
        print(json.dumps({'stats': result.stats, 'written': written,
                          'representative_error': result.representative_error}, indent=2))
    else:
        print(f"Queries with hits: {result.stats['matrix_rows']} of {result.stats['queries']}")
        print(f"Genomes: {result.stats['genomes']}")
        print(f"Alignments retained: {result.stats['retained']} of {result.stats['alignments']}")
        if result.representative is not None:
            print(f"Representative query: {queries.get(result.representative.query_id).label}")
        else:
            print(f"No representative: {result.representative_error}")
        for name, path in written.items():
            print(f"  {name}: {path}")

    logger.info("Run finished")
    return 0


def options_from_args(args: argparse.Namespace, context: ApplicationContext) -> PipelineOptions:
    """Merge command-line flags over the loaded configuration"""
    return PipelineOptions.from_config(
        context.config,
        k=args.k,
        threshold=args.threshold,
        seed=args.seed,
        threads=args.threads,
        save_list=tuple(args.save) if args.save else None,
    )


if __name__ == '__main__':
    sys.exit(main())
