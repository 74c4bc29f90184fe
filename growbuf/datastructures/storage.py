"""
Raw storage blocks for the buffer containers.

A block is a fixed-size ctypes array. Blocks never grow: containers that need
more (or less) room allocate a new block, copy their live elements over and
drop the old one. This module keeps those three steps in one place:

- `allocate` obtains a zero-initialized block or raises AllocationFailure.
- `copy_window` copies a (possibly wrapped) run of elements into a new block.
- `address_of` returns the opaque identity used for diagnostics.
"""

from __future__ import annotations

import ctypes
from typing import Optional

from .errors import AllocationFailure


def allocate(ctype, capacity: int) -> Optional[ctypes.Array]:
    """Allocate a ctypes array holding `capacity` elements of `ctype`.

    A zero capacity returns None: there is no storage to address, and no index
    is valid until the owner grows.
    """
    if capacity < 0:
        raise ValueError("capacity must be >= 0")
    if capacity == 0:
        return None
    try:
        return (ctype * capacity)()
    except (MemoryError, OverflowError, ValueError) as exc:
        raise AllocationFailure(capacity, str(exc)) from exc


def copy_window(src: Optional[ctypes.Array], front: int, count: int, dst: ctypes.Array) -> None:
    """Copy `count` elements of `src`, starting at slot `front`, into `dst[0:count]`.

    The run wraps around the end of `src`, so a circular window is laid out
    in logical order at the start of `dst`.
    """
    if count == 0 or src is None:
        return
    src_capacity = len(src)
    if count > src_capacity or count > len(dst):
        raise ValueError("copy exceeds block bounds")

    first = min(count, src_capacity - front)
    second = count - first

    if src._type_ is ctypes.py_object:
        # Slice assignment so the copied references are counted.
        dst[0:first] = src[front:front + first]
        if second:
            dst[first:count] = src[0:second]
        return

    size = ctypes.sizeof(src._type_)
    ctypes.memmove(ctypes.addressof(dst), ctypes.addressof(src) + front * size, first * size)
    if second:
        ctypes.memmove(ctypes.addressof(dst) + first * size, ctypes.addressof(src), second * size)


def address_of(block: Optional[ctypes.Array]) -> int:
    """Return the address of `block`, or 0 when there is no block."""
    return 0 if block is None else ctypes.addressof(block)
