"""High-level API for ValueTree.

This module provides simple, functional interfaces over the node model
and its counted handles. Every function takes owning handles (NodeRef);
handles returned to the caller are new owners the caller must release,
either explicitly or by using them as context managers.
"""

from typing import Iterable, List, Optional, Tuple

from .core.handles import NodeRef, WeakRef, release_all
from .core.node import Node


def create(value: int, children: Iterable[NodeRef] = ()) -> NodeRef:
    """Allocate a new node and return its first owning handle.

    Args:
        value: Integer payload
        children: Handles to place in the children list; each one is
            cloned, so the caller keeps its own handles

    Returns:
        Owning handle with strong_count == 1

    Example:
        >>> leaf = create(3)
        >>> branch = create(5, children=[leaf])
        >>> strong_count(leaf)
        2
    """
    owned: List[NodeRef] = []
    try:
        for child in children:
            owned.append(child.clone())
    except Exception:
        release_all(owned)
        raise
    return NodeRef.new(Node(value, owned))


def attach_child(parent: NodeRef, child: NodeRef) -> None:
    """Make ``child`` a child of ``parent``.

    Appends a clone of ``child`` to the parent's children and points the
    child's parent link at ``parent`` through a weak reference. The
    child's strong count grows by one; the parent's does not change.

    Nothing stops a node from being attached under several parents or
    under its own descendant. Attaching an ancestor as a child creates
    a strong cycle and is the caller's responsibility to avoid.
    """
    children = parent.payload.children
    child.payload.parent.ensure_writable()
    clone = child.clone()
    try:
        with children.borrow_mut() as items:
            items.append(clone)
    except Exception:
        clone.release()
        raise
    set_parent(child, parent)


def set_parent(child: NodeRef, parent: NodeRef) -> None:
    """Point the child's parent link at ``parent`` without touching children.

    Any previous link is discarded. The link is bound to the parent's
    allocation as it is now; it is not looked up again later.
    """
    cell = child.payload.parent
    cell.ensure_writable()
    link = parent.downgrade()
    previous = cell.replace(link)
    if previous is not None and not previous.is_discarded:
        previous.discard()


def clear_parent(child: NodeRef) -> None:
    """Discard the child's parent link, if any."""
    previous = child.payload.parent.replace(None)
    if previous is not None and not previous.is_discarded:
        previous.discard()


def strong_count(handle: NodeRef) -> int:
    """Number of live owning handles to the node."""
    return handle.strong_count


def weak_count(handle: NodeRef) -> int:
    """Number of undiscarded weak references held through this node.

    This counts the node's own parent back-link. A link whose parent
    has been deallocated still counts until it is discarded, which
    happens when the link is overwritten or cleared, or when this node
    is itself deallocated. For the number of weak references pointing
    *at* the node, see observer_count().
    """
    return handle.payload.held_weak_count()


def observer_count(handle: NodeRef) -> int:
    """Number of live weak references targeting the node."""
    return handle.observer_count


def parent_of(handle: NodeRef) -> Optional[NodeRef]:
    """Resolve the node's parent link.

    Returns:
        A new owning handle to the parent while it is alive (the caller
        must release it), or None if no parent was set or the parent has
        been deallocated
    """
    link = handle.payload.parent.get()
    if link is None or link.is_discarded:
        return None
    return link.upgrade()


def parent_link(handle: NodeRef) -> Optional[WeakRef]:
    """Return the raw weak parent link without resolving it."""
    return handle.payload.parent.get()


def child_values(handle: NodeRef) -> Tuple[int, ...]:
    """Snapshot of the children's values in attachment order."""
    with handle.payload.children.borrow() as items:
        return tuple(child.value for child in items)


def is_alive(link: WeakRef) -> bool:
    """True while the weak reference's target has not been deallocated."""
    return link.is_alive
