"""
Exception hierarchy for the manifest pipeline.
"""

from typing import Optional

from .status import PipelineStage


class PipelineError(Exception):
    """Base exception for pipeline errors."""
    def __init__(self, message: str, stage: Optional[PipelineStage] = None):
        super().__init__(message)
        self.stage = stage


class ScanError(PipelineError):
    """Raised when the descriptor directory walk fails."""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, PipelineStage.SCANNING)
        self.path = path


class ManifestWriteError(PipelineError):
    """Raised when a manifest file cannot be written."""
    def __init__(self, message: str, path: str):
        super().__init__(message, PipelineStage.WRITING)
        self.path = path


class PipelineCancelledError(PipelineError):
    """Raised when a requested cancellation is observed between stages."""
    pass
