"""Configuration system for ValueTree.

This module defines how users control the diagnostic side of the library:
whether lifecycle transitions are traced, which ones, and where output
goes. Ownership semantics themselves are not configurable.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Set

from .errors import ValueTreeError


class ConfigurationError(ValueTreeError):
    """Raised when a configuration fails validation."""
    pass


class LifecycleEvent(Enum):
    """Observable transitions in the life of a node allocation."""
    CREATED = "created"                 # New node, first owning handle
    CLONED = "cloned"                   # Another owning handle derived
    RELEASED = "released"               # An owning handle dropped
    DEALLOCATED = "deallocated"         # Last owner gone
    DOWNGRADED = "downgraded"           # Weak reference derived
    UPGRADED = "upgraded"               # Weak reference resolved to an owner
    UPGRADE_FAILED = "upgrade_failed"   # Weak reference resolved to absent
    WEAK_DISCARDED = "weak_discarded"   # Weak reference dropped


@dataclass
class TreeConfig:
    """Diagnostic configuration for ValueTree.

    Streams default to None, meaning "resolve sys.stderr / sys.stdout at
    write time", so that output capture in tests keeps working after the
    config was built.
    """

    # Lifecycle tracing
    trace: bool = False                         # Print lifecycle events
    trace_stream: Optional[Any] = None          # None -> sys.stderr
    events: Optional[Set[LifecycleEvent]] = None  # None -> every event

    # Demonstration output
    output_stream: Optional[Any] = None         # None -> sys.stdout

    @classmethod
    def quiet(cls) -> 'TreeConfig':
        """Create a config with tracing disabled."""
        return cls(trace=False)

    @classmethod
    def verbose(cls, events: Optional[Set[LifecycleEvent]] = None) -> 'TreeConfig':
        """Create a config that traces lifecycle events to stderr.

        Args:
            events: Restrict tracing to these events (default: all)

        Returns:
            TreeConfig with tracing enabled
        """
        return cls(trace=True, events=events)

    def should_trace(self, event: LifecycleEvent) -> bool:
        """Check if an event should be written to the trace stream."""
        if not self.trace:
            return False
        if self.events is None:
            return True
        return event in self.events

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        for name in ("trace_stream", "output_stream"):
            stream = getattr(self, name)
            if stream is not None and not callable(getattr(stream, "write", None)):
                errors.append(f"{name} must have a write() method")

        if self.events is not None:
            if not self.events:
                errors.append("events cannot be empty; use trace=False instead")
            bad = [e for e in self.events if not isinstance(e, LifecycleEvent)]
            if bad:
                errors.append(f"events must be LifecycleEvent members, got {bad!r}")

        if self.events is not None and not self.trace:
            errors.append("events given but trace is disabled")

        return errors


_config = TreeConfig()


def get_config() -> TreeConfig:
    """Return the active configuration."""
    return _config


def set_config(config: TreeConfig) -> TreeConfig:
    """Install a new active configuration.

    Args:
        config: Configuration to activate

    Returns:
        The previously active configuration, so callers can restore it

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    global _config
    errors = config.validate()
    if errors:
        raise ConfigurationError(f"Invalid configuration: {'; '.join(errors)}")
    previous = _config
    _config = config
    return previous
