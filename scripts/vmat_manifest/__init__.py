"""
VMAT Manifest Pipeline

Finds material descriptor files (.vmat), checks which ones have a color
texture next to them, and writes PNG, JPG and material-identifier manifests
for downstream content tooling.
"""

__version__ = "0.1.0"
__author__ = "VMAT Processor Team"

from .config import PipelineConfig
from .errors import PipelineError, ScanError, ManifestWriteError, PipelineCancelledError
from .status import PipelineStage, StatusEvent, StatusSink
from .pipeline import ManifestPipeline, PipelineRunner, PipelineResult

__all__ = [
    "PipelineConfig",
    "PipelineError",
    "ScanError",
    "ManifestWriteError",
    "PipelineCancelledError",
    "PipelineStage",
    "StatusEvent",
    "StatusSink",
    "ManifestPipeline",
    "PipelineRunner",
    "PipelineResult",
]
