from __future__ import annotations

import ctypes
import logging
import operator
from typing import Generic, Iterable, Iterator, NamedTuple, Optional, TypeVar, overload

from . import storage
from .errors import EmptyContainer, IndexOutOfRange

T = TypeVar("T")

logger = logging.getLogger(__name__)

# ctypes `_type_` codes of the element types a block may hold. Pointer types
# (c_char_p, c_wchar_p, c_void_p) are excluded: a memmove'd pointer outlives
# the objects the old block kept alive.
_INTEGER_CODES = "bBhHiIlLqQ"
_VALUE_CODES = _INTEGER_CODES + "fdg?cu"
_OBJECT_CODE = "O"


class BufferInfo(NamedTuple):
    """Diagnostic snapshot of a buffer. `address` is for display only."""

    length: int
    capacity: int
    address: int


class GrowableBuffer(Generic[T]):
    """A growable, indexable sequence stored in a raw ctypes block.

    Implementation notes
    --------------------
    • Storage is a fixed-size ctypes array of `ctype` (``c_int`` by default),
      replaced wholesale on every reallocation.
    • Capacity doubles when an append finds the block full (amortized O(1)).
    • After a removal, capacity halves once the buffer is a quarter full,
      never below `min_capacity`.
    • Live elements form a circular window starting at the front cursor, so
      removal from either end is O(1) amortized.
    • Indices are checked against ``[0, length)`` on every access; negative
      indices are rejected, not wrapped.

    Not thread-safe: concurrent use from several threads needs external
    locking.
    """

    __slots__ = (
        "_ctype", "_buf", "_capacity", "_size", "_front",
        "_min_capacity", "_reallocations", "_copied",
    )

    GROWTH_FACTOR = 2
    # Shrink when length <= capacity // SHRINK_RATIO.
    SHRINK_RATIO = 4
    MIN_CAPACITY = 4

    def __init__(
        self,
        initial_capacity: int = 0,
        ctype=ctypes.c_int,
        min_capacity: Optional[int] = None,
        it: Optional[Iterable[T]] = None,
    ) -> None:
        if not isinstance(initial_capacity, int):
            raise TypeError("initial_capacity must be an integer")
        if initial_capacity < 0:
            raise ValueError("initial_capacity must be >= 0")
        if not (isinstance(ctype, type) and issubclass(ctype, ctypes._SimpleCData)):
            raise TypeError(f"ctype must be a ctypes scalar type, not {ctype!r}")
        if ctype._type_ not in _VALUE_CODES and ctype._type_ != _OBJECT_CODE:
            raise TypeError(f"pointer-valued ctype {ctype.__name__} cannot be stored in a buffer")
        if min_capacity is None:
            min_capacity = self.MIN_CAPACITY
        if not isinstance(min_capacity, int):
            raise TypeError("min_capacity must be an integer")
        if min_capacity < 1:
            raise ValueError("min_capacity must be >= 1")

        self._ctype = ctype
        self._min_capacity = min_capacity
        self._buf = storage.allocate(ctype, initial_capacity)
        self._capacity = initial_capacity
        self._size = 0
        self._front = 0
        self._reallocations = 0
        self._copied = 0

        if it is not None:
            self.extend(it)

    # ------------------------------- internals -------------------------------

    def _physical(self, idx: int) -> int:
        return (self._front + idx) % self._capacity

    def _check_index(self, index: int) -> int:
        """Return `index` as an int if it lies in [0, length), else raise."""
        try:
            i = operator.index(index)
        except TypeError:
            raise TypeError(f"buffer indices must be integers, not {type(index).__name__}") from None
        if i < 0 or i >= self._size:
            raise IndexOutOfRange(i, self._size)
        return i

    def _coerce(self, value: T) -> T:
        """Return `value` if the block stores it unchanged, else raise.

        Integer types raise OverflowError; bool, float and char types that
        would round or truncate raise ValueError.
        """
        code = self._ctype._type_
        if code == _OBJECT_CODE:
            return value
        stored = self._ctype(value).value
        # NaN never equals itself but still round-trips.
        if stored != value and not (stored != stored and value != value):
            if code in _INTEGER_CODES:
                raise OverflowError(f"{value!r} does not fit in {self._ctype.__name__}")
            raise ValueError(f"{value!r} is not exactly representable as {self._ctype.__name__}")
        return value

    def _clear_slot(self, phys: int) -> None:
        # Object blocks drop their reference; scalar slots are left as garbage.
        if self._ctype is ctypes.py_object:
            self._buf[phys] = None

    def _reallocate(self, new_capacity: int, start: int, count: int) -> None:
        """Move `count` elements from physical slot `start` into a new block.

        The new block is fully populated before it replaces the old one; if
        allocation fails the buffer is left untouched.
        """
        new_buf = storage.allocate(self._ctype, new_capacity)
        storage.copy_window(self._buf, start, count, new_buf)

        logger.debug(
            "reallocate: capacity %d -> %d, length %d, data %#x -> %#x",
            self._capacity, new_capacity, count,
            storage.address_of(self._buf), storage.address_of(new_buf),
        )
        self._buf = new_buf
        self._capacity = new_capacity
        self._size = count
        self._front = 0
        self._reallocations += 1
        self._copied += count

    def _should_shrink(self, new_size: int) -> bool:
        return self._capacity > self._min_capacity and new_size <= self._capacity // self.SHRINK_RATIO

    def _shrunk_capacity(self) -> int:
        return max(self._min_capacity, self._capacity // 2)

    # --------------------------------- API -----------------------------------

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def length(self) -> int:
        return self._size

    @property
    def front(self) -> int:
        """Physical slot of logical index 0."""
        return self._front

    @property
    def ctype(self):
        return self._ctype

    @property
    def min_capacity(self) -> int:
        return self._min_capacity

    @property
    def reallocations(self) -> int:
        """Number of grow/shrink reallocations performed so far."""
        return self._reallocations

    @property
    def elements_copied(self) -> int:
        """Total elements copied by reallocations so far."""
        return self._copied

    def get(self, index: int) -> T:
        """Return the element at `index`. Raises IndexOutOfRange outside [0, length)."""
        i = self._check_index(index)
        return self._buf[self._physical(i)]

    def set(self, index: int, value: T) -> None:
        """Overwrite the element at `index`. Length and capacity are unchanged."""
        i = self._check_index(index)
        self._buf[self._physical(i)] = self._coerce(value)

    def get_unchecked(self, index: int) -> T:
        """Read slot `index` without the length check.

        For callers that already validated `index`. Reads in [length, capacity)
        return stale values; the ctypes block still refuses anything outside
        its own bounds.
        """
        if self._buf is None:
            raise IndexOutOfRange(index, 0)
        return self._buf[(self._front + index) % self._capacity]

    def set_unchecked(self, index: int, value: T) -> None:
        """Write slot `index` without the length check. See `get_unchecked`.

        The value is still checked against the element type.
        """
        if self._buf is None:
            raise IndexOutOfRange(index, 0)
        self._buf[(self._front + index) % self._capacity] = self._coerce(value)

    def append(self, value: T) -> None:
        """Append `value` to the end. Amortized O(1).

        A full buffer first moves to a block of twice the capacity (at least
        one slot, so a zero-capacity buffer can grow).
        """
        value = self._coerce(value)
        if self._size == self._capacity:
            self._reallocate(max(1, self._capacity * self.GROWTH_FACTOR), self._front, self._size)
        self._buf[self._physical(self._size)] = value
        self._size += 1

    def extend(self, it: Iterable[T]) -> None:
        """Append all elements from `it` in order."""
        for v in it:
            self.append(v)

    def remove_back(self) -> T:
        """Remove and return the last element.

        Raises:
            EmptyContainer: if the buffer is empty (the buffer is unchanged).
        """
        if self._size == 0:
            raise EmptyContainer("remove_back")

        last = self._physical(self._size - 1)
        value = self._buf[last]
        new_size = self._size - 1

        if self._should_shrink(new_size):
            self._reallocate(self._shrunk_capacity(), self._front, new_size)
        else:
            self._clear_slot(last)
            self._size = new_size
            if new_size == 0:
                self._front = 0
        return value

    def remove_front(self) -> T:
        """Remove and return the first element; later elements shift down one index.

        Raises:
            EmptyContainer: if the buffer is empty (the buffer is unchanged).
        """
        if self._size == 0:
            raise EmptyContainer("remove_front")

        first = self._front
        value = self._buf[first]
        new_front = (first + 1) % self._capacity
        new_size = self._size - 1

        if self._should_shrink(new_size):
            self._reallocate(self._shrunk_capacity(), new_front, new_size)
        else:
            self._clear_slot(first)
            self._size = new_size
            self._front = new_front if new_size else 0
        return value

    def clear(self) -> None:
        """Remove all items. Keeps capacity."""
        for i in range(self._size):
            self._clear_slot(self._physical(i))
        self._size = 0
        self._front = 0

    def release(self) -> None:
        """Drop the storage block, leaving an empty zero-capacity buffer."""
        if self._buf is not None:
            logger.debug(
                "release: capacity %d, data %#x", self._capacity, storage.address_of(self._buf)
            )
        self._buf = None
        self._capacity = 0
        self._size = 0
        self._front = 0

    def inspect(self) -> BufferInfo:
        """Return (length, capacity, address) without side effects."""
        return BufferInfo(self._size, self._capacity, storage.address_of(self._buf))

    def to_list(self) -> list[T]:
        """Copy the live elements into a plain Python list, in index order."""
        return [self._buf[self._physical(i)] for i in range(self._size)]

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size != 0

    def __iter__(self) -> Iterator[T]:
        """Yield items from first to last."""
        for i in range(self._size):
            yield self._buf[self._physical(i)]

    def __contains__(self, value: object) -> bool:
        for v in self:
            if v == value:
                return True
        return False

    @overload
    def __getitem__(self, idx: int) -> T: ...
    @overload
    def __getitem__(self, idx: slice) -> "GrowableBuffer[T]": ...

    def __getitem__(self, idx):
        """`buf[i]` is `get(i)`; `buf[a:b:c]` returns a new buffer of the same ctype."""
        if isinstance(idx, slice):
            start, stop, step = idx.indices(self._size)
            picked = range(start, stop, step)
            out: GrowableBuffer[T] = GrowableBuffer(len(picked), self._ctype, self._min_capacity)
            for i in picked:
                out.append(self._buf[self._physical(i)])
            return out
        return self.get(idx)

    def __setitem__(self, idx: int, value: T) -> None:
        self.set(idx, value)

    def __enter__(self) -> "GrowableBuffer[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        return (
            f"GrowableBuffer({self.to_list()!r}, capacity={self._capacity}, "
            f"ctype={self._ctype.__name__})"
        )
