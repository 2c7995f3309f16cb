"""Core ValueTree components: cells, counted handles and the node model."""

from .cell import Cell, BorrowError
from .handles import NodeRef, WeakRef, ReleasedHandleError, release_all
from .node import Node

__all__ = [
    'Cell',
    'BorrowError',
    'NodeRef',
    'WeakRef',
    'ReleasedHandleError',
    'release_all',
    'Node',
]
