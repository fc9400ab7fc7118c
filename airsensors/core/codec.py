"""Big-endian word extraction for sensor frames."""

from __future__ import annotations


def word(data: bytes, offset: int) -> int:
    """Return the 16-bit big-endian value at ``data[offset:offset + 2]``.

    Raises ``IndexError`` when ``offset + 1`` is past the end of ``data``.
    """
    if offset < 0:
        raise IndexError(f"word offset {offset} is negative")
    return (data[offset] << 8) | data[offset + 1]
