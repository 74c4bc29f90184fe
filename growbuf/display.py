"""
Read-only text views of a GrowableBuffer for the command-line driver.

- `format_contents`: the live elements in index order, e.g. ``{10, 20, 30}``.
- `format_info`: length, capacity and the storage address.
- `print_buffer`: both views as ``Array:``/``ArrayInfo:`` lines.
"""

from .datastructures import GrowableBuffer


def format_contents(buf: GrowableBuffer) -> str:
    """Render the elements as ``{a, b, c}``; an empty buffer renders as ``{}``."""
    return "{" + ", ".join(str(v) for v in buf) + "}"


def format_info(buf: GrowableBuffer) -> str:
    """Render ``{length = L, capacity = C, data = 0x...}``."""
    info = buf.inspect()
    return f"{{length = {info.length}, capacity = {info.capacity}, data = {info.address:#x}}}"


def print_buffer(buf: GrowableBuffer) -> None:
    """Print the contents and info views followed by a blank line."""
    print(f"Array:{format_contents(buf)}")
    print(f"ArrayInfo:{format_info(buf)}")
    print()
