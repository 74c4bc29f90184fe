"""growbuf: a growable sequence container over raw ctypes storage blocks."""

from .datastructures import (
    AllocationFailure,
    BufferInfo,
    EmptyContainer,
    GrowableBuffer,
    GrowableBufferError,
    IndexOutOfRange,
)

__version__ = "0.1.0"

__all__ = [
    "GrowableBuffer",
    "BufferInfo",
    "GrowableBufferError",
    "IndexOutOfRange",
    "EmptyContainer",
    "AllocationFailure",
]
