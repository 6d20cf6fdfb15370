"""
context.py -- Provide application context for pyPAMatch
"""
import threading
import logging
from typing import Any, Optional

from pamatch.config import ConfigManager
from pamatch.models.options import PipelineOptions


class ApplicationContext:
    """Application context: one loaded configuration per process"""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls, config_path: Optional[str] = None):
        with cls._lock:
            if cls._instance is None:
                cls._instance = super(ApplicationContext, cls).__new__(cls)
                cls._instance._initialized = False
            return cls._instance

    def __init__(self, config_path: Optional[str] = None):
        """Initialize application context

        Args:
            config_path: Path to configuration file
        """
        if not getattr(self, '_initialized', False):
            self.logger = logging.getLogger("pamatch.context")
            self.config_manager = ConfigManager(config_path)
            self.logger.info("Configuration initialized")
            self._initialized = True
        elif config_path is not None and config_path != self.config_manager.config_path:
            self.logger.info(f"Re-initializing context with new config: {config_path}")
            self.config_manager = ConfigManager(config_path)

    @classmethod
    def reset(cls) -> None:
        """Drop the shared instance (used between CLI invocations and in tests)"""
        with cls._lock:
            cls._instance = None

    @property
    def config(self):
        return self.config_manager.config

    def update_config(self, section: str, key: str, value: Any) -> None:
        """Update configuration value

        Args:
            section: Configuration section
            key: Configuration key
            value: New value
        """
        if section not in self.config_manager.config:
            self.config_manager.config[section] = {}

        self.config_manager.config[section][key] = value
        self.logger.debug(f"Updated config {section}.{key} = {value}")

    def pipeline_options(self) -> PipelineOptions:
        """Build validated pipeline options from the current configuration"""
        return PipelineOptions.from_config(self.config_manager.config)
