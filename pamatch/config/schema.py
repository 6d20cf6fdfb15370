#!/usr/bin/env python3
"""
Configuration schema definition for validation
"""
from typing import Dict, Any, List

NUMBER = (int, float)


class ConfigSchema:
    """Configuration schema for validation"""

    SCHEMA = {
        'paths': {
            'output_dir': {'type': str, 'required': True},
        },
        'search': {
            'k': {'type': int, 'required': True},
            'threads': {'type': int, 'required': False},
            'quiet': {'type': bool, 'required': False},
        },
        'alignment': {
            'match_score': {'type': NUMBER, 'required': False},
            'mismatch_score': {'type': NUMBER, 'required': False},
            'open_gap_score': {'type': NUMBER, 'required': False},
            'extend_gap_score': {'type': NUMBER, 'required': False},
        },
        'filter': {
            'threshold': {'type': NUMBER, 'required': True},
        },
        'representative': {
            'min_mean_pid': {'type': NUMBER, 'required': False},
            'min_size': {'type': int, 'required': False},
            'sample_size': {'type': int, 'required': False},
            'seed': {'type': int, 'required': False},
        },
        'output': {
            'save_list': {'type': list, 'required': False},
        },
        'logging': {
            'level': {'type': str, 'required': False},
            'format': {'type': str, 'required': False},
            'log_dir': {'type': str, 'required': False},
        },
    }

    @staticmethod
    def _type_name(expected) -> str:
        if isinstance(expected, tuple):
            return " or ".join(t.__name__ for t in expected)
        return expected.__name__

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> List[str]:
        """Validate configuration against schema

        Args:
            config: Configuration to validate

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        # Check required fields
        for section, fields in cls.SCHEMA.items():
            if any(props.get('required', False) for _, props in fields.items()):
                if section not in config:
                    errors.append(f"Missing required configuration section: {section}")
                    continue

            if section not in config:
                continue

            section_config = config[section]
            for field, props in fields.items():
                if props.get('required', False) and field not in section_config:
                    errors.append(f"Missing required configuration field: {section}.{field}")

        # Validate field types
        for section, fields in cls.SCHEMA.items():
            if section not in config:
                continue

            section_config = config[section]
            for field, props in fields.items():
                if field in section_config and 'type' in props:
                    expected_type = props['type']
                    value = section_config[field]
                    # bool is an int subclass; only accept it where bool is expected
                    wrong_bool = isinstance(value, bool) and expected_type is not bool
                    if wrong_bool or not isinstance(value, expected_type):
                        errors.append(
                            f"Invalid type for {section}.{field}: expected {cls._type_name(expected_type)}, "
                            f"got {type(value).__name__}"
                        )

        return errors
