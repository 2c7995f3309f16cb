"""Interior-mutability cell for ValueTree.

A Cell wraps a single mutable field so it can be changed even when the
node that owns it is reached through a shared, otherwise read-only handle.
Borrows are tracked at runtime: any number of shared borrows may coexist,
but a mutable borrow must be exclusive.
"""

from contextlib import contextmanager
from typing import Any, Generic, Iterator, TypeVar

from ..errors import ValueTreeError


T = TypeVar("T")


class BorrowError(ValueTreeError):
    """Raised when a Cell borrow conflicts with an outstanding borrow."""
    pass


class Cell(Generic[T]):
    """Mutable container with runtime borrow tracking.

    The cell is single-threaded. It does not lock, it only counts
    borrows so that conflicting access is reported instead of silently
    observing a half-updated value.

    Example:
        children = Cell([])
        with children.borrow_mut() as items:
            items.append(handle)
    """

    __slots__ = ("_value", "_readers", "_writing")

    def __init__(self, value: T):
        self._value = value
        self._readers = 0
        self._writing = False

    def get(self) -> T:
        """Return the contained value.

        Raises:
            BorrowError: If the cell is currently mutably borrowed
        """
        if self._writing:
            raise BorrowError("cell is mutably borrowed")
        return self._value

    def set(self, value: T) -> None:
        """Overwrite the contained value."""
        self.replace(value)

    def replace(self, value: T) -> T:
        """Store a new value and return the previous one.

        Raises:
            BorrowError: If any borrow is outstanding
        """
        self.ensure_writable()
        old = self._value
        self._value = value
        return old

    @contextmanager
    def borrow(self) -> Iterator[T]:
        """Borrow the value for reading.

        Raises:
            BorrowError: If the cell is currently mutably borrowed
        """
        if self._writing:
            raise BorrowError("cell is mutably borrowed")
        self._readers += 1
        try:
            yield self._value
        finally:
            self._readers -= 1

    @contextmanager
    def borrow_mut(self) -> Iterator[T]:
        """Borrow the value exclusively for in-place mutation.

        Raises:
            BorrowError: If any other borrow is outstanding
        """
        self.ensure_writable()
        self._writing = True
        try:
            yield self._value
        finally:
            self._writing = False

    @property
    def is_borrowed(self) -> bool:
        """True while any borrow is outstanding."""
        return self._writing or self._readers > 0

    def ensure_writable(self) -> None:
        """Raise BorrowError unless the cell could be written right now."""
        if self._writing:
            raise BorrowError("cell is already mutably borrowed")
        if self._readers:
            raise BorrowError(f"cell has {self._readers} outstanding shared borrow(s)")

    def __repr__(self) -> str:
        if self._writing:
            return "Cell(<borrowed>)"
        return f"Cell({self._value!r})"
