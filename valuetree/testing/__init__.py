"""Testing utilities for ValueTree.

This module provides public test fixtures that allow consumers to verify
ownership behavior without depending on internal implementation details.
"""

from .fixtures import LifecycleRecorder, RecordedEvent

__all__ = ['LifecycleRecorder', 'RecordedEvent']
