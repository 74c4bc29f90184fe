from .errors import AllocationFailure, EmptyContainer, GrowableBufferError, IndexOutOfRange
from .growable_buffer import BufferInfo, GrowableBuffer

__all__ = [
    "GrowableBuffer",
    "BufferInfo",
    "GrowableBufferError",
    "IndexOutOfRange",
    "EmptyContainer",
    "AllocationFailure",
]
