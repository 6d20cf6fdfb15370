#!/usr/bin/env python3
"""
Explicit option structure for one pipeline pass.
"""
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Tuple

from pamatch.config.defaults import DEFAULT_CONFIG, SAVE_ARTIFACTS
from pamatch.exceptions import ConfigurationError


@dataclass(frozen=True)
class PipelineOptions:
    """
    Options governing search, filtering, sub-sampling and persistence.

    k trades search sensitivity for speed; threshold is the minimum
    match_pid a record needs to be retained; seed fixes the representative
    sub-sample; save_list names the artifacts handed to the writer.
    """
    k: int = 5
    threshold: float = 0.4
    seed: int = 42
    save_list: Tuple[str, ...] = ('matrix', 'row_order', 'summaries')
    threads: int = 1
    quiet: bool = True
    min_mean_pid: float = 0.5
    min_size: int = 10
    sample_size: int = 10
    scoring: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_CONFIG['alignment']))

    def __post_init__(self):
        object.__setattr__(self, 'save_list', tuple(self.save_list))

        if self.k < 1:
            raise ConfigurationError(f"k must be at least 1, got {self.k}", {'k': self.k})
        if not 0.0 <= self.threshold <= 1.0:
            raise ConfigurationError(f"threshold must lie in [0, 1], got {self.threshold}",
                                     {'threshold': self.threshold})
        if not 0.0 <= self.min_mean_pid <= 1.0:
            raise ConfigurationError(f"min_mean_pid must lie in [0, 1], got {self.min_mean_pid}",
                                     {'min_mean_pid': self.min_mean_pid})
        if self.threads < 1:
            raise ConfigurationError(f"threads must be at least 1, got {self.threads}")
        if self.min_size < 1:
            raise ConfigurationError(f"min_size must be at least 1, got {self.min_size}")
        if self.sample_size < 1:
            raise ConfigurationError(f"sample_size must be at least 1, got {self.sample_size}")

        unknown = [name for name in self.save_list if name not in SAVE_ARTIFACTS]
        if unknown:
            raise ConfigurationError(f"Unknown artifacts in save_list: {', '.join(unknown)}",
                                     {'allowed': list(SAVE_ARTIFACTS)})

    @classmethod
    def from_config(cls, config: Dict[str, Any], **overrides) -> 'PipelineOptions':
        """
        Build options from a configuration dictionary.

        Args:
            config: Configuration as loaded by ConfigManager
            **overrides: Values that win over the configuration (None is ignored)

        Returns:
            Validated PipelineOptions
        """
        search = config.get('search', {})
        filtering = config.get('filter', {})
        representative = config.get('representative', {})
        output = config.get('output', {})

        save_list = output.get('save_list', cls.save_list)
        if isinstance(save_list, str):
            save_list = [save_list]

        values = {
            'k': search.get('k', cls.k),
            'threads': search.get('threads', cls.threads),
            'quiet': search.get('quiet', cls.quiet),
            'threshold': filtering.get('threshold', cls.threshold),
            'seed': representative.get('seed', cls.seed),
            'min_mean_pid': representative.get('min_mean_pid', cls.min_mean_pid),
            'min_size': representative.get('min_size', cls.min_size),
            'sample_size': representative.get('sample_size', cls.sample_size),
            'save_list': tuple(save_list),
            'scoring': {**DEFAULT_CONFIG['alignment'], **config.get('alignment', {})},
        }
        values.update({key: value for key, value in overrides.items() if value is not None})

        try:
            return cls(**values)
        except TypeError as e:
            raise ConfigurationError(f"Invalid pipeline options: {str(e)}") from e

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['save_list'] = list(self.save_list)
        return data
