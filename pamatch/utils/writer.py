#!/usr/bin/env python3
"""
Persistence of pipeline artifacts.

Only the artifacts named in the save list are written. Tables are
tab-separated via pandas; the representative sample is written as FASTA
for the multiple-alignment viewer.
"""
import logging
import os
from typing import Dict, Iterable

import pandas as pd
from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from pamatch.config.defaults import SAVE_ARTIFACTS
from pamatch.exceptions import FileOperationError, ValidationError
from pamatch.models.results import PipelineResult
from pamatch.models.sequence import SequenceCollection

FILE_NAMES = {
    'matrix': 'presence_matrix.tsv',
    'row_order': 'row_order.tsv',
    'summaries': 'query_summaries.tsv',
    'alignments': 'alignments.tsv',
    'representative': 'representative.fasta',
}


class ResultWriter:
    """Writes the requested artifacts of a PipelineResult to a directory"""

    def __init__(self, output_dir: str, save_list: Iterable[str]):
        self.output_dir = output_dir
        self.save_list = tuple(save_list)
        unknown = [name for name in self.save_list if name not in SAVE_ARTIFACTS]
        if unknown:
            raise ValidationError(f"Unknown artifacts requested: {', '.join(unknown)}")
        self.logger = logging.getLogger("pamatch.utils.writer")

    def write(self, result: PipelineResult, queries: SequenceCollection) -> Dict[str, str]:
        """
        Write every requested artifact.

        Args:
            result: Pipeline result
            queries: Query collection, used for row labels

        Returns:
            Mapping of artifact name to written path
        """
        try:
            os.makedirs(self.output_dir, exist_ok=True)
        except OSError as e:
            raise FileOperationError(f"Cannot create output directory {self.output_dir}: {str(e)}") from e

        writers = {
            'matrix': self._write_matrix,
            'row_order': self._write_row_order,
            'summaries': self._write_summaries,
            'alignments': self._write_alignments,
            'representative': self._write_representative,
        }

        written = {}
        for name in self.save_list:
            path = os.path.join(self.output_dir, FILE_NAMES[name])
            try:
                if writers[name](result, queries, path):
                    written[name] = path
                    self.logger.info(f"Wrote {name} to {path}")
            except OSError as e:
                raise FileOperationError(f"Error writing {name} to {path}: {str(e)}",
                                         {'artifact': name, 'path': path}) from e
        return written

    def matrix_frame(self, result: PipelineResult, queries: SequenceCollection) -> pd.DataFrame:
        """Presence matrix in row order, labelled by query label"""
        ordered = result.matrix.ordered().copy()
        ordered.index = pd.Index([queries.get(q).label for q in ordered.index], name='query')
        return ordered

    def _write_matrix(self, result, queries, path) -> bool:
        self.matrix_frame(result, queries).to_csv(path, sep='\t')
        return True

    def _write_row_order(self, result, queries, path) -> bool:
        matrix = result.matrix
        breadth = matrix.breadth()
        frame = pd.DataFrame({
            'position': range(1, len(matrix.row_order) + 1),
            'query_id': matrix.ordered_query_ids,
            'query_label': [queries.get(q).label for q in matrix.ordered_query_ids],
            'breadth': [int(breadth.loc[q]) for q in matrix.ordered_query_ids],
        })
        frame.to_csv(path, sep='\t', index=False)
        return True

    def _write_summaries(self, result, queries, path) -> bool:
        # (accession, score_pid, match_pid) triples keyed by query, genome kept for lookup
        rows = [
            (hit.query_id,) + hit.as_triple() + (hit.genome_id,)
            for hits in result.summaries.values()
            for hit in hits
        ]
        columns = ['query_id', 'accession', 'score_pid', 'match_pid', 'genome_id']
        pd.DataFrame(rows, columns=columns).to_csv(path, sep='\t', index=False)
        return True

    def _write_alignments(self, result, queries, path) -> bool:
        rows = [record.to_dict() for record in result.records]
        columns = ['query_id', 'subject_id', 'score', 'matches', 'mismatches', 'gap_columns',
                   'alignment_length', 'query_length', 'subject_length', 'score_pid', 'match_pid']
        pd.DataFrame(rows, columns=columns).to_csv(path, sep='\t', index=False)
        return True

    def _write_representative(self, result, queries, path) -> bool:
        sample = result.representative
        if sample is None:
            self.logger.warning(f"No representative to write: {result.representative_error}")
            return False

        records = []
        for index, member in zip(sample.member_indices, sample.members):
            kind = 'query' if index == 0 else 'subject'
            records.append(SeqRecord(Seq(member.sequence), id=f"{kind}_{member.id}",
                                     description=member.label))
        with open(path, 'w') as handle:
            SeqIO.write(records, handle, 'fasta')
        return True
