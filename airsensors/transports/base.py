"""Transport interfaces."""

from __future__ import annotations

from typing import Protocol


class Transport(Protocol):
    def transact(self, address: int, write: bytes, read_length: int) -> bytes:
        """Write ``write`` (may be empty) then read ``read_length`` bytes from ``address``."""
