#!/usr/bin/env python3
"""
Exception hierarchy for the presence/absence pipeline.
All custom exceptions should inherit from PAMatchError.
"""
from typing import Dict, Any, Optional


class PAMatchError(Exception):
    """Base exception for all pipeline-related errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize with error message and optional details

        Args:
            message: Error message
            details: Optional details dictionary with context
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(PAMatchError):
    """Error related to configuration issues"""
    pass


class ValidationError(PAMatchError):
    """Data validation error"""
    pass


class FileOperationError(PAMatchError):
    """Error during file operations"""
    pass


class PipelineError(PAMatchError):
    """Error in pipeline processing"""
    pass


class DegenerateAlignment(PipelineError):
    """Alignment with zero length reached normalization"""
    pass


class MalformedLabel(PipelineError):
    """Subject label does not split into genome id and accession"""
    pass


class NoQualifyingGroup(PipelineError):
    """No query group satisfies the representative-selection predicates"""
    pass


class SearchEngineError(PipelineError):
    """Seed search or anchored alignment failed"""
    pass
