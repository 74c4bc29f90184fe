from __future__ import annotations
from typing import Optional


class GrowableBufferError(Exception):
    """Base class for every error raised by the buffer containers."""


class IndexOutOfRange(GrowableBufferError, IndexError):
    """Raised when an index falls outside ``[0, length)``."""

    def __init__(self, index: object, length: int) -> None:
        self.index = index
        self.length = length
        if length == 0:
            msg = f"index {index!r} out of range for empty buffer"
        else:
            msg = f"index {index!r} out of range [0, {length})"
        super().__init__(msg)


class EmptyContainer(GrowableBufferError, IndexError):
    """Raised when removing an element from an empty buffer."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} from empty buffer")


class AllocationFailure(GrowableBufferError, MemoryError):
    """Raised when a storage block of the requested size cannot be obtained."""

    def __init__(self, capacity: int, reason: Optional[str] = None) -> None:
        self.capacity = capacity
        msg = f"cannot allocate storage for {capacity} elements"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
