#!/usr/bin/env python3
"""
Pipeline Configuration Module
"""
from .manager import ConfigManager
from .schema import ConfigSchema
from .defaults import DEFAULT_CONFIG, SAVE_ARTIFACTS

__all__ = ['ConfigManager', 'ConfigSchema', 'DEFAULT_CONFIG', 'SAVE_ARTIFACTS']
