"""Diagnostic output for ValueTree.

Two collaborators live here:

- LifecycleTracer: receives every ownership transition from the handle
  layer, forwards it to registered listeners and, when tracing is enabled
  in the active TreeConfig, prints it to the trace stream.
- DiagnosticSink: the plain line printer the demonstration routine
  reports through.
"""

import sys
from typing import Any, Callable, List, Optional

from .config import LifecycleEvent, TreeConfig, get_config


Listener = Callable[[LifecycleEvent, str, int, int], None]


class LifecycleTracer:
    """Fan-out point for lifecycle events.

    Listeners are called with (event, label, strong, observers) where
    strong and observers are the allocation's counts after the transition.
    """

    def __init__(self, config: Optional[TreeConfig] = None):
        """Initialize the tracer.

        Args:
            config: Fixed configuration; None follows get_config()
        """
        self._config = config
        self._listeners: List[Listener] = []

    @property
    def config(self) -> TreeConfig:
        return self._config if self._config is not None else get_config()

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Unregister a listener. Unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event: LifecycleEvent, label: str, strong: int, observers: int) -> None:
        for listener in list(self._listeners):
            listener(event, label, strong, observers)

        config = self.config
        if config.should_trace(event):
            stream = config.trace_stream or sys.stderr
            print(format_event(event, label, strong, observers), file=stream)


def format_event(event: LifecycleEvent, label: str, strong: int, observers: int) -> str:
    """Render a lifecycle event as a single trace line."""
    return f"[valuetree] {event.value:<14} {label} (strong={strong}, weak={observers})"


class DiagnosticSink:
    """Consumes human-readable lines and writes them to a stream.

    Example:
        sink = DiagnosticSink()
        sink.report("Strong Leaf: 1, Weak Leaf: 0")
    """

    def __init__(self, stream: Optional[Any] = None, keep_lines: bool = True):
        """Initialize the sink.

        Args:
            stream: Target stream; None resolves the active config's
                output_stream, falling back to sys.stdout
            keep_lines: Keep a copy of every reported line in ``lines``;
                turn off for long-lived sinks
        """
        self._stream = stream
        self.keep_lines = keep_lines
        self.lines: List[str] = []

    @property
    def stream(self) -> Any:
        if self._stream is not None:
            return self._stream
        return get_config().output_stream or sys.stdout

    def report(self, line: str) -> None:
        if self.keep_lines:
            self.lines.append(line)
        print(line, file=self.stream)

    def clear(self) -> None:
        """Forget the lines kept so far."""
        self.lines.clear()


# Shared tracer used by the handle layer
tracer = LifecycleTracer()
