"""Test fixtures for ValueTree consumers.

These fixtures give tests a stable view of ownership transitions without
reaching into handle internals.
"""

from typing import Any, Dict, List, NamedTuple, Optional

from ..config import LifecycleEvent
from ..diagnostics import LifecycleTracer, tracer as default_tracer


class RecordedEvent(NamedTuple):
    event: LifecycleEvent
    label: str
    strong: int
    observers: int


class LifecycleRecorder:
    """Public test fixture for lifecycle verification.

    Records every lifecycle event emitted while it is active. Use it as a
    context manager so it always unregisters itself.

    Example:
        with LifecycleRecorder() as recorder:
            leaf = create(3)
            leaf.release()

        assert recorder.was_deallocated("Node(value=3)")
        assert recorder.get_summary()['deallocated'] == 1
    """

    def __init__(self, tracer: Optional[LifecycleTracer] = None):
        """Initialize with the tracer to listen on.

        Args:
            tracer: Tracer to attach to (default: the shared tracer)
        """
        self._tracer = tracer or default_tracer
        self.events: List[RecordedEvent] = []
        self._active = False

    def __enter__(self) -> 'LifecycleRecorder':
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return None

    def start(self) -> None:
        if not self._active:
            self._tracer.add_listener(self._record)
            self._active = True

    def stop(self) -> None:
        if self._active:
            self._tracer.remove_listener(self._record)
            self._active = False

    def clear(self) -> None:
        self.events.clear()

    def _record(self, event: LifecycleEvent, label: str, strong: int, observers: int) -> None:
        self.events.append(RecordedEvent(event, label, strong, observers))

    def of_kind(self, event: LifecycleEvent) -> List[RecordedEvent]:
        return [e for e in self.events if e.event == event]

    def for_label(self, label: str) -> List[RecordedEvent]:
        return [e for e in self.events if e.label == label]

    def was_deallocated(self, label: str) -> bool:
        """Check whether a node with this label was dropped while recording."""
        return any(e.label == label for e in self.of_kind(LifecycleEvent.DEALLOCATED))

    def deallocation_order(self) -> List[str]:
        """Labels of dropped nodes in the order they were dropped."""
        return [e.label for e in self.of_kind(LifecycleEvent.DEALLOCATED)]

    def get_summary(self) -> Dict[str, Any]:
        """Returns event totals keyed by event value.

        Returns:
            Dictionary mapping each LifecycleEvent value (e.g. 'created')
            to the number of times it was recorded, plus 'total'
        """
        summary: Dict[str, Any] = {kind.value: 0 for kind in LifecycleEvent}
        for recorded in self.events:
            summary[recorded.event.value] += 1
        summary['total'] = len(self.events)
        return summary
