"""
Pipeline stages and the status channel used to report progress to callers.

The pipeline never talks to a UI directly. It publishes ``StatusEvent`` objects
to a ``StatusSink`` and whoever is interested (CLI progress bar, a GUI, tests)
subscribes to it.
"""

import logging
import threading
from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Any

logger = logging.getLogger(__name__)


class PipelineStage(Enum):
    """Enumeration of pipeline stages."""
    IDLE = "idle"
    SCANNING = "scanning"
    DERIVING = "deriving"
    FILTERING = "filtering"
    NORMALIZING = "normalizing"
    WRITING = "writing"
    DONE = "done"
    ERRORED = "errored"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (PipelineStage.DONE, PipelineStage.ERRORED, PipelineStage.CANCELLED)


# Linear progress reported when a stage starts.
STAGE_PERCENT = {
    PipelineStage.IDLE: 0,
    PipelineStage.SCANNING: 0,
    PipelineStage.DERIVING: 20,
    PipelineStage.FILTERING: 40,
    PipelineStage.NORMALIZING: 60,
    PipelineStage.WRITING: 80,
    PipelineStage.DONE: 100,
}


@dataclass
class StatusEvent:
    """A single progress update."""
    stage: PipelineStage
    percent: int
    message: str
    counts: Dict[str, int] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.stage.is_terminal


StatusCallback = Callable[[StatusEvent], Any]


class StatusSink:
    """
    Publish/subscribe channel for status events.

    Events are delivered synchronously on the publishing thread, in publish
    order, and kept in ``history``. Subscribers that need to hop to another
    thread (e.g. a UI loop) do that themselves.
    """

    def __init__(self):
        self._subscribers: List[StatusCallback] = []
        self._lock = threading.Lock()
        self.history: List[StatusEvent] = []

    def subscribe(self, callback: StatusCallback) -> Callable[[], None]:
        """
        Register a callback for future events.

        Returns:
            A function that removes the subscription
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, event: StatusEvent) -> None:
        """Deliver an event to every subscriber."""
        with self._lock:
            self.history.append(event)
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(event)
            except Exception:
                logger.warning("Status subscriber %r failed", callback, exc_info=True)

    def clear(self) -> None:
        """Forget previously published events."""
        with self._lock:
            self.history.clear()
