"""Counted ownership handles for ValueTree.

An allocation is shared by any number of owning handles (NodeRef) and
observed by any number of non-owning handles (WeakRef). The payload is
dropped exactly when the last owning handle is released. Weak handles
never keep the payload alive; upgrading one after the payload is gone
yields None instead of a dangling handle.

The payload may implement ``take_references()`` returning the owning and
weak handles it holds. They are released when the payload is dropped,
which is how destroying a node cascades into its children. An optional
``owned_references()`` lets a release check, before anything changes,
that every payload it would free can actually be emptied.
"""

from collections import deque
from typing import Any, Deque, Dict, Iterable, List, Optional, Tuple

from ..config import LifecycleEvent
from ..diagnostics import tracer
from ..errors import ValueTreeError


class ReleasedHandleError(ValueTreeError):
    """Raised when a handle is used after it was released or discarded."""
    pass


class _Allocation:
    """Shared bookkeeping behind a group of handles.

    Outlives its payload for as long as weak handles reference it, the
    same way a counted box stays around for its weak observers.
    """

    __slots__ = ("payload", "strong", "observers", "label")

    def __init__(self, payload: Any):
        self.payload = payload
        self.strong = 0
        self.observers = 0
        self.label = repr(payload)

    @property
    def alive(self) -> bool:
        return self.payload is not None

    def emit(self, event: LifecycleEvent) -> None:
        tracer.emit(event, self.label, self.strong, self.observers)


class NodeRef:
    """Owning handle to a shared allocation.

    Every live NodeRef counts toward the allocation's strong count.
    Handles are context managers: leaving the ``with`` block releases
    the handle on every exit path.

    Example:
        with create(5) as branch:
            attach_child(branch, leaf)
        # branch released here
    """

    __slots__ = ("_alloc", "_released")

    def __init__(self, alloc: _Allocation):
        self._alloc = alloc
        self._released = False
        alloc.strong += 1

    @classmethod
    def new(cls, payload: Any) -> 'NodeRef':
        """Allocate a payload and return its first owning handle."""
        handle = cls(_Allocation(payload))
        handle._alloc.emit(LifecycleEvent.CREATED)
        return handle

    @property
    def is_released(self) -> bool:
        return self._released

    @property
    def strong_count(self) -> int:
        self._check()
        return self._alloc.strong

    @property
    def observer_count(self) -> int:
        self._check()
        return self._alloc.observers

    @property
    def payload(self) -> Any:
        """The shared payload. Always present while this handle is live."""
        self._check()
        return self._alloc.payload

    @property
    def value(self) -> Any:
        return self.payload.value

    def clone(self) -> 'NodeRef':
        """Derive another owning handle to the same allocation."""
        self._check()
        handle = NodeRef(self._alloc)
        self._alloc.emit(LifecycleEvent.CLONED)
        return handle

    def downgrade(self) -> 'WeakRef':
        """Derive a non-owning handle to the same allocation."""
        self._check()
        weak = WeakRef(self._alloc)
        self._alloc.emit(LifecycleEvent.DOWNGRADED)
        return weak

    def ptr_eq(self, other: 'NodeRef') -> bool:
        """True when both handles share one allocation."""
        return self._alloc is other._alloc

    def release(self) -> None:
        """Drop this handle's share of ownership.

        Raises:
            ReleasedHandleError: If the handle was already released
            BorrowError: If a node this release would free has a borrowed
                field; nothing is released in that case
        """
        self._check()
        if self._alloc.strong == 1:
            _check_releasable(self._alloc)
        if self._drop():
            _deallocate(self._alloc)

    def _drop(self) -> bool:
        """Decrement the strong count; True if this was the last owner."""
        self._released = True
        alloc = self._alloc
        alloc.strong -= 1
        alloc.emit(LifecycleEvent.RELEASED)
        return alloc.strong == 0

    def _check(self) -> None:
        if self._released:
            raise ReleasedHandleError(f"owning handle to {self._alloc.label} was released")

    def __enter__(self) -> 'NodeRef':
        self._check()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # Released inside the block already counts as leaving scope
        if not self._released:
            self.release()
        return None

    def __repr__(self) -> str:
        if self._released:
            return f"NodeRef(<released {self._alloc.label}>)"
        return f"NodeRef({self._alloc.label}, strong={self._alloc.strong})"


class WeakRef:
    """Non-owning handle to a shared allocation.

    Never keeps the payload alive. Resolve it with ``upgrade()``, which
    returns a fresh NodeRef while the payload lives and None afterwards.
    """

    __slots__ = ("_alloc", "_discarded")

    def __init__(self, alloc: _Allocation):
        self._alloc = alloc
        self._discarded = False
        alloc.observers += 1

    @property
    def is_discarded(self) -> bool:
        return self._discarded

    @property
    def is_alive(self) -> bool:
        """True while the target payload has not been dropped."""
        return self._alloc.alive

    def upgrade(self) -> Optional[NodeRef]:
        """Try to obtain an owning handle to the target.

        Returns:
            A new NodeRef the caller must release, or None if the target
            has been deallocated

        Raises:
            ReleasedHandleError: If this weak handle was discarded
        """
        self._check()
        alloc = self._alloc
        if not alloc.alive:
            alloc.emit(LifecycleEvent.UPGRADE_FAILED)
            return None
        handle = NodeRef(alloc)
        alloc.emit(LifecycleEvent.UPGRADED)
        return handle

    def clone(self) -> 'WeakRef':
        self._check()
        weak = WeakRef(self._alloc)
        self._alloc.emit(LifecycleEvent.DOWNGRADED)
        return weak

    def points_to(self, handle: NodeRef) -> bool:
        """True when this weak handle observes the handle's allocation."""
        return self._alloc is handle._alloc

    def discard(self) -> None:
        """Drop this weak handle.

        Raises:
            ReleasedHandleError: If already discarded
        """
        self._check()
        self._discarded = True
        self._alloc.observers -= 1
        self._alloc.emit(LifecycleEvent.WEAK_DISCARDED)

    def _check(self) -> None:
        if self._discarded:
            raise ReleasedHandleError(f"weak handle to {self._alloc.label} was discarded")

    def __repr__(self) -> str:
        state = "alive" if self._alloc.alive else "dead"
        if self._discarded:
            state = "discarded"
        return f"WeakRef({self._alloc.label}, {state})"


def _check_releasable(alloc: _Allocation) -> None:
    """Verify that every payload freed by dropping ``alloc`` can be emptied.

    Walks the allocations that would reach zero owners, without changing
    any count, so a BorrowError leaves the whole tree untouched.
    """
    drops: Dict[_Allocation, int] = {alloc: 1}
    pending: Deque[_Allocation] = deque([alloc])
    while pending:
        current = pending.popleft()
        peek = getattr(current.payload, "owned_references", None)
        if peek is None:
            continue
        for handle in peek():
            if handle.is_released:
                continue
            target = handle._alloc
            drops[target] = drops.get(target, 0) + 1
            if drops[target] == target.strong:
                pending.append(target)


def _deallocate(alloc: _Allocation) -> None:
    """Drop a payload whose last owner is gone, cascading into its children.

    Runs iteratively so that long chains of sole owners do not hit the
    recursion limit.
    """
    pending: Deque[_Allocation] = deque([alloc])
    while pending:
        current = pending.popleft()
        owned, weak = _take_references(current.payload)
        current.payload = None
        current.emit(LifecycleEvent.DEALLOCATED)

        for ref in weak:
            ref.discard()
        for handle in owned:
            if not handle.is_released and handle._drop():
                pending.append(handle._alloc)


def _take_references(payload: Any) -> Tuple[List[NodeRef], List[WeakRef]]:
    take = getattr(payload, "take_references", None)
    if take is None:
        return [], []
    owned, weak = take()
    return list(owned), [ref for ref in weak if not ref.is_discarded]


def release_all(handles: Iterable[NodeRef]) -> None:
    """Release every live handle in order."""
    for handle in handles:
        if not handle.is_released:
            handle.release()
