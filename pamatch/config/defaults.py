#!/usr/bin/env python3
"""
Default configuration values for the presence/absence pipeline
"""

# Artifacts the persistence layer knows how to write
SAVE_ARTIFACTS = ('matrix', 'row_order', 'summaries', 'alignments', 'representative')

DEFAULT_CONFIG = {
    'paths': {
        'output_dir': './output',
    },
    'search': {
        'k': 5,
        'threads': 1,
        'quiet': True,
    },
    'alignment': {
        'match_score': 1.0,
        'mismatch_score': -1.0,
        'open_gap_score': -2.0,
        'extend_gap_score': -1.0,
    },
    'filter': {
        'threshold': 0.4,
    },
    'representative': {
        'min_mean_pid': 0.5,
        'min_size': 10,
        'sample_size': 10,
        'seed': 42,
    },
    'output': {
        'save_list': ['matrix', 'row_order', 'summaries'],
    },
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    },
}
