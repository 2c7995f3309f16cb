"""Node data model for ValueTree.

The Node is intentionally kept simple - it's a data container. Ownership
is carried by the handles in ``handles.py``; the node only stores:

- value: plain int, fixed at construction
- parent: Cell holding a WeakRef to the parent (or None)
- children: Cell holding a list of owning NodeRef handles

Children are owned, the parent is only observed. Keeping that asymmetry
is what stops a parent and child from keeping each other alive.
"""

from typing import List, Optional, Tuple

from .cell import Cell
from .handles import NodeRef, WeakRef


class Node:
    """A tree node holding one integer value."""

    __slots__ = ("_value", "parent", "children")

    def __init__(self, value: int, children: Optional[List[NodeRef]] = None):
        """Create a detached node.

        Args:
            value: Integer payload
            children: Owning handles the node takes over (not cloned)
        """
        self._value = value
        self.parent: Cell[Optional[WeakRef]] = Cell(None)
        self.children: Cell[List[NodeRef]] = Cell(list(children or []))

    @property
    def value(self) -> int:
        return self._value

    def held_weak_count(self) -> int:
        """Number of undiscarded weak references this node holds."""
        link = self.parent.get()
        return 0 if link is None or link.is_discarded else 1

    def owned_references(self) -> List[NodeRef]:
        """Owning handles this node would give up when dropped.

        Raises:
            BorrowError: If either field is borrowed, so it cannot be emptied
        """
        self.parent.ensure_writable()
        self.children.ensure_writable()
        return list(self.children.get())

    def take_references(self) -> Tuple[List[NodeRef], List[WeakRef]]:
        """Hand over every handle this node holds, leaving it empty.

        Called once when the node is dropped.
        """
        link = self.parent.replace(None)
        owned = self.children.replace([])
        return owned, [link] if link is not None else []

    def __repr__(self) -> str:
        return f"Node(value={self._value!r})"
