"""Scripted transport that replays recorded bus operations."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from airsensors.core.errors import TransportError


@dataclass(frozen=True)
class Op:
    address: int
    write: bytes = b""
    reply: bytes = b""


class PlaybackTransport:
    """Replay ``ops`` in order, failing on any deviation from the script."""

    def __init__(self, ops: Iterable[Op] = ()) -> None:
        self.ops = list(ops)
        self.calls: list[tuple[int, bytes, int]] = []

    def transact(self, address: int, write: bytes, read_length: int) -> bytes:
        self.calls.append((address, bytes(write), read_length))
        index = len(self.calls) - 1
        if index >= len(self.ops):
            raise TransportError(f"Unexpected transaction #{index + 1} to 0x{address:02x}")

        op = self.ops[index]
        if op.address != address:
            raise TransportError(f"Expected address 0x{op.address:02x}, got 0x{address:02x}")
        if op.write != bytes(write):
            raise TransportError(f"Expected write {op.write.hex()!r}, got {bytes(write).hex()!r}")
        if len(op.reply) != read_length:
            raise TransportError(f"Expected read of {len(op.reply)} bytes, got {read_length}")
        return op.reply

    @property
    def done(self) -> bool:
        return len(self.calls) == len(self.ops)
