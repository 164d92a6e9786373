"""
Pipeline coordinator for the manifest build.
Runs the stages in order, tracks state, publishes status and handles errors.
"""

import time
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Dict, List, Optional, Union
from dataclasses import dataclass, field

from .config import PipelineConfig
from .errors import PipelineError, PipelineCancelledError
from .status import PipelineStage, StatusEvent, StatusSink, STAGE_PERCENT
from .processing.scanner import DescriptorScanner
from .processing.deriver import CompanionPathDeriver
from .processing.existence import ExistenceFilter
from .processing.normalizer import IdentifierNormalizer
from .processing.manifest import ManifestWriter, ManifestPaths


@dataclass
class PipelineResult:
    """Everything a run produced. Lists are rebuilt from scratch on every run."""
    root: str
    descriptors: List[str] = field(default_factory=list)
    companions: List[str] = field(default_factory=list)
    valid_companions: List[str] = field(default_factory=list)
    identifiers: List[str] = field(default_factory=list)
    manifests: Optional[ManifestPaths] = None
    duration: float = 0.0

    @property
    def counts(self) -> Dict[str, int]:
        return {
            "descriptors": len(self.descriptors),
            "valid_companions": len(self.valid_companions),
            "identifiers": len(self.identifiers),
        }


@dataclass
class PipelineState:
    """Current state of the pipeline execution."""
    stage: PipelineStage = PipelineStage.IDLE
    visited: List[PipelineStage] = field(default_factory=list)
    start_time: Optional[float] = None
    error: Optional[str] = None


class ManifestPipeline:
    """
    Runs the four-stage manifest build over one root directory.

    Stages: scanning -> deriving -> filtering -> normalizing -> writing -> done.
    A scan without results goes straight to done and writes nothing. Any
    fatal error ends in the errored state and is re-raised to the caller;
    a cancellation request is honoured between stages.
    """

    def __init__(self, config: Optional[PipelineConfig] = None, sink: Optional[StatusSink] = None):
        """
        Initialize the pipeline.

        Args:
            config: Pipeline configuration, defaults plus env overrides if omitted
            sink: Status channel; a private one is created if omitted
        """
        self.config = config or PipelineConfig.default()
        self.sink = sink or StatusSink()
        self.state = PipelineState()
        self.logger = self._setup_logging()
        self._cancel_event = threading.Event()

        self.scanner = DescriptorScanner(self.config.descriptor_extension)
        self.deriver = CompanionPathDeriver(self.config)
        self.existence_filter = ExistenceFilter(self.config.existence_workers)
        self.normalizer = IdentifierNormalizer(self.deriver, self.config.marker_segment)
        self.writer = ManifestWriter(self.config, self.deriver)

    def _setup_logging(self) -> logging.Logger:
        """Set up logging for the pipeline."""
        logger = logging.getLogger("vmat_manifest")
        logger.setLevel(self.config.log_level)

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger

    def request_cancel(self) -> None:
        """Request cooperative cancellation; takes effect at the next stage boundary."""
        self._cancel_event.set()

    def reset_cancel(self) -> None:
        self._cancel_event.clear()

    @property
    def cancel_requested(self) -> bool:
        return self._cancel_event.is_set()

    def run(self, root: Union[str, Path]) -> PipelineResult:
        """
        Run the pipeline synchronously.

        Args:
            root: Directory to scan; also receives the manifests

        Returns:
            PipelineResult with all intermediate lists and counts

        Raises:
            PipelineError: On scan or write failure, or when cancelled
        """
        root = str(root)
        self.state = PipelineState(start_time=time.time())
        result = PipelineResult(root=root)

        self.logger.info(f"Starting manifest build for {root}")

        try:
            self._enter(PipelineStage.SCANNING, "Finding descriptor files...")
            result.descriptors = self.scanner.scan(root)

            if not result.descriptors:
                self.logger.info("No descriptor files found")
                self._finish(result, "No descriptor files found")
                return result

            self._enter(PipelineStage.DERIVING, "Converting to companion paths...",
                        descriptors=len(result.descriptors))
            result.companions = self.deriver.to_companions(result.descriptors)

            self._enter(PipelineStage.FILTERING, "Validating companion files...")
            filtered = self.existence_filter.filter(result.companions)
            result.valid_companions = filtered.valid

            self._enter(PipelineStage.NORMALIZING, "Creating identifier list...",
                        valid_companions=filtered.retained, missing_companions=filtered.missing)
            result.identifiers = self.normalizer.normalize(result.valid_companions).identifiers

            self._enter(PipelineStage.WRITING, "Saving output files...",
                        identifiers=len(result.identifiers))
            result.manifests = self.writer.write(root, result.valid_companions, result.identifiers)

            self._finish(result, f"Processing complete! Found {len(result.identifiers)} materials.")
            return result

        except PipelineCancelledError as e:
            self._terminate(PipelineStage.CANCELLED, str(e))
            raise
        except PipelineError as e:
            self._terminate(PipelineStage.ERRORED, str(e))
            raise
        except Exception as e:
            stage = self.state.stage
            self._terminate(PipelineStage.ERRORED, str(e))
            raise PipelineError(f"Pipeline failed during {stage.value}: {e}", stage) from e

    def _enter(self, stage: PipelineStage, message: str, **counts: int) -> None:
        """Move to the next stage, honouring a pending cancellation first."""
        if self._cancel_event.is_set():
            raise PipelineCancelledError(f"Cancelled before {stage.value}", stage)

        self.state.stage = stage
        self.state.visited.append(stage)
        self.logger.info(f"=== {stage.value.capitalize()} ===")
        self.sink.publish(StatusEvent(stage, STAGE_PERCENT[stage], message, counts=dict(counts)))

    def _finish(self, result: PipelineResult, message: str) -> None:
        result.duration = time.time() - (self.state.start_time or time.time())
        self.state.stage = PipelineStage.DONE
        self.state.visited.append(PipelineStage.DONE)
        self.logger.info(f"{message} ({result.duration:.2f}s)")
        self.sink.publish(StatusEvent(PipelineStage.DONE, STAGE_PERCENT[PipelineStage.DONE],
                                      message, counts=result.counts))

    def _terminate(self, stage: PipelineStage, error: str) -> None:
        failed_at = self.state.stage
        self.state.stage = stage
        self.state.visited.append(stage)
        self.state.error = error
        percent = STAGE_PERCENT.get(failed_at, 0)

        if stage is PipelineStage.CANCELLED:
            self.logger.warning(f"Pipeline cancelled: {error}")
        else:
            self.logger.error(f"Pipeline failed during {failed_at.value}: {error}")

        self.sink.publish(StatusEvent(stage, percent, f"Error: {error}", error=error))


class PipelineRunner:
    """
    Runs a ManifestPipeline on a background thread.

    ``start`` returns immediately with a Future; status arrives through the
    pipeline's sink. One run at a time.
    """

    def __init__(self, pipeline: ManifestPipeline):
        self.pipeline = pipeline
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="vmat-pipeline")
        self._future: Optional[Future] = None
        self._start_lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._future is not None and not self._future.done()

    def start(self, root: Union[str, Path]) -> Future:
        """Schedule a run over ``root`` and return its Future."""
        with self._start_lock:
            if self.running:
                raise PipelineError("A pipeline run is already in progress")

            self.pipeline.reset_cancel()
            self._future = self._executor.submit(self.pipeline.run, root)
            return self._future

    def cancel(self) -> None:
        """Ask the active run to stop at the next stage boundary."""
        self.pipeline.request_cancel()

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "PipelineRunner":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
