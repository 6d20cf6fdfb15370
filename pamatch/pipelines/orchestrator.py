#!/usr/bin/env python3
"""
End-to-end presence/absence pass.

One synchronous run: seed search, anchoring, alignment, normalization,
grouping, aggregation and representative selection. Nothing is kept
between runs.
"""
import logging
from datetime import datetime
from typing import Optional

from pamatch.engines.base import SearchEngine
from pamatch.engines.kmer import KmerSearchEngine
from pamatch.error_handlers import log_exception
from pamatch.exceptions import NoQualifyingGroup
from pamatch.models.options import PipelineOptions
from pamatch.models.results import PipelineResult
from pamatch.models.sequence import SequenceCollection

from .anchoring import anchor_pairs
from .grouping import group_by_query, summarize_groups
from .normalization import drop_degenerate, normalize_records
from .presence import PresenceAggregator
from .representative import RepresentativeSelector


class PresenceAbsencePipeline:
    """Runs one pass from sequence collections to a PipelineResult"""

    def __init__(self, options: Optional[PipelineOptions] = None,
                 engine: Optional[SearchEngine] = None):
        """
        Args:
            options: Pipeline options (defaults if omitted)
            engine: Seed search / alignment engine; a KmerSearchEngine
                configured from options if omitted
        """
        self.options = options or PipelineOptions()
        self.engine = engine or KmerSearchEngine(
            scoring=self.options.scoring,
            threads=self.options.threads,
            quiet=self.options.quiet,
        )
        self.selector = RepresentativeSelector(
            min_mean_pid=self.options.min_mean_pid,
            min_size=self.options.min_size,
            sample_size=self.options.sample_size,
            seed=self.options.seed,
        )
        self.logger = logging.getLogger("pamatch.pipelines.orchestrator")

    def run(self, queries: SequenceCollection, subjects: SequenceCollection) -> PipelineResult:
        """
        Run the pipeline.

        Raises:
            MalformedLabel: If a subject label lacks genome id or accession
            SearchEngineError: If the engine fails; no partial result is kept
        """
        start_time = datetime.now()
        self.logger.info(f"Starting pass: {len(queries)} queries, {len(subjects)} subjects, "
                         f"k={self.options.k}, threshold={self.options.threshold}")

        # Labels are parsed before any search so malformed input fails fast
        aggregator = PresenceAggregator(subjects)

        seed_pairs = self.engine.find_seeds(queries, subjects, self.options.k)
        if not seed_pairs:
            self.logger.warning("No seed pairs found; continuing with empty input")

        anchored = anchor_pairs(seed_pairs, queries, subjects)
        raw_records = self.engine.align(anchored, queries, subjects)

        usable, degenerate = drop_degenerate(raw_records)
        records = normalize_records(usable)

        groups = group_by_query(records, self.options.threshold, query_ids=queries.ids)
        matrix = aggregator.aggregate(groups)
        summaries = summarize_groups(groups, aggregator.labels)

        representative = None
        representative_error = None
        try:
            representative = self.selector.select(groups, queries, subjects)
        except NoQualifyingGroup as e:
            log_exception(self.logger, e, level=logging.WARNING)
            representative_error = e.message

        elapsed = (datetime.now() - start_time).total_seconds()
        stats = {
            'queries': len(queries),
            'subjects': len(subjects),
            'genomes': len(aggregator.genome_ids),
            'seed_pairs': len(seed_pairs),
            'alignments': len(raw_records),
            'degenerate': degenerate,
            'retained': groups.retained_count,
            'matrix_rows': matrix.counts.shape[0],
            'elapsed_seconds': elapsed,
        }
        self.logger.info(f"Pass completed in {elapsed:.2f}s: {stats['retained']} of "
                         f"{stats['alignments']} alignments retained, {stats['matrix_rows']} matrix rows")

        return PipelineResult(
            records=records,
            groups=groups,
            matrix=matrix,
            summaries=summaries,
            representative=representative,
            representative_error=representative_error,
            stats=stats,
        )
