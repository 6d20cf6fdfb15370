#!/usr/bin/env python3
"""
Tests for the pamatch command-line entry point
"""
import json
import logging
import os

import pandas as pd
import pytest
import yaml

from pamatch.cli.main import build_parser, main, options_from_args
from pamatch.core.context import ApplicationContext

QUERY = 'ACGTTGCAACGTGGCATTGA'
UNRELATED = 'CCCCCCCCCCCCCCCCCCCC'


@pytest.fixture(autouse=True)
def restore_root_logging():
    """main() reconfigures the root logger; drop its handlers and restore the level"""
    root = logging.getLogger()
    level, before = root.level, set(root.handlers)
    yield
    for handler in [h for h in root.handlers if h not in before]:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)


@pytest.fixture
def inputs(tmp_path):
    query = tmp_path / "query.fa"
    query.write_text(f">q1 membrane protein\n{QUERY}\n")

    genome_one = tmp_path / "g1.fa"
    genome_one.write_text(f">G1 ACC_1 copy\n{QUERY}\n")

    genome_two = tmp_path / "g2.fa"
    genome_two.write_text(f">G2 ACC_2 unrelated\n{UNRELATED}\n")

    return {
        'query': str(query),
        'subjects': [str(genome_one), str(genome_two)],
        'output': str(tmp_path / "out"),
    }


def run_args(inputs, *extra):
    return ['run', '--query', inputs['query'], '--subject', *inputs['subjects'],
            '--output-dir', inputs['output'], '--k', '4', *extra]


class TestParser:

    def test_run_arguments(self):
        args = build_parser().parse_args(['run', '--query', 'q.fa', '--subject', 'a.fa', 'b.fa',
                                          '--threshold', '0.7', '--save', 'matrix', 'alignments'])
        assert args.subject == ['a.fa', 'b.fa']
        assert args.threshold == 0.7
        assert args.save == ['matrix', 'alignments']

    def test_flags_override_config(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text(yaml.dump({'filter': {'threshold': 0.2}, 'search': {'k': 6}}))
        args = build_parser().parse_args(['--config', str(path), 'run', '--query', 'q.fa',
                                          '--subject', 'a.fa', '--threshold', '0.9'])

        options = options_from_args(args, ApplicationContext(args.config))
        assert options.threshold == 0.9
        assert options.k == 6


class TestRunCommand:

    def test_run_writes_artifacts(self, inputs):
        assert main(run_args(inputs)) == 0

        files = sorted(os.listdir(inputs['output']))
        assert files == ['presence_matrix.tsv', 'query_summaries.tsv', 'row_order.tsv']

        matrix = pd.read_csv(os.path.join(inputs['output'], 'presence_matrix.tsv'), sep='\t', index_col=0)
        assert list(matrix.columns) == ['G1', 'G2']
        assert matrix.loc['q1 membrane protein'].tolist() == [1, 0]

    def test_json_stats(self, inputs, capsys):
        assert main(['--json'] + run_args(inputs, '--save', 'alignments')) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload['stats']['alignments'] == 1
        assert payload['stats']['retained'] == 1
        assert payload['representative_error'] is not None
        assert list(payload['written']) == ['alignments']

        alignments = pd.read_csv(payload['written']['alignments'], sep='\t')
        assert alignments.loc[0, 'match_pid'] == 1.0

    def test_missing_query_file(self, inputs, capsys):
        inputs['query'] = inputs['query'] + '.missing'
        assert main(run_args(inputs)) == 1
        assert "FileOperationError" in capsys.readouterr().err

    def test_malformed_label(self, inputs, tmp_path, capsys):
        bad = tmp_path / "bad.fa"
        bad.write_text(f">lonely\n{QUERY}\n")
        inputs['subjects'] = [str(bad)]

        assert main(run_args(inputs)) == 1
        assert "MalformedLabel" in capsys.readouterr().err

    def test_invalid_threshold(self, inputs):
        assert main(run_args(inputs, '--threshold', '1.5')) == 1

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_verbose_prints_error_details(self, inputs, tmp_path, capsys):
        bad = tmp_path / "bad.fa"
        bad.write_text(f">lonely\n{QUERY}\n")
        inputs['subjects'] = [str(bad)]

        assert main(['-v'] + run_args(inputs)) == 1
        assert "Details: label='lonely'" in capsys.readouterr().err

    def test_output_dir_flag_recorded_in_config(self, inputs):
        assert main(run_args(inputs)) == 0
        assert ApplicationContext().config_manager.get_path('output_dir') == inputs['output']

    def test_output_dir_from_config(self, inputs, tmp_path):
        configured = tmp_path / "configured"
        path = tmp_path / "config.yml"
        path.write_text(yaml.dump({'paths': {'output_dir': str(configured)}}))

        argv = ['--config', str(path), 'run', '--query', inputs['query'],
                '--subject', *inputs['subjects'], '--k', '4']
        assert main(argv) == 0
        assert os.listdir(str(configured))
