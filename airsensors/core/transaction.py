"""Request/response exchanges against a single bus address."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from airsensors.core.errors import MalformedFrameError, TransportError
from airsensors.transports.base import Transport

LOGGER = logging.getLogger(__name__)


class TransactionClient:
    """Bind a :class:`Transport` to one device address.

    ``sleep`` is the suspension primitive used between the two phases of a
    delayed transaction; tests substitute a recorder for it.
    """

    def __init__(
        self,
        transport: Transport,
        address: int,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.transport = transport
        self.address = address
        self._sleep = sleep

    def _exchange(self, write: bytes, read_length: int, *, context: str) -> bytes:
        LOGGER.debug(
            "0x%02x %s: write=%s read=%d",
            self.address,
            context,
            write.hex() or "-",
            read_length,
        )
        try:
            reply = self.transport.transact(self.address, write, read_length)
        except TransportError as exc:
            raise TransportError(f"Error while {context}: {exc}") from exc
        except OSError as exc:
            raise TransportError(f"Error while {context}: {exc}") from exc

        reply = bytes(reply or b"")
        if len(reply) != read_length:
            raise MalformedFrameError(
                f"Short reply while {context}: expected {read_length} bytes, got {len(reply)}"
            )
        return reply

    def immediate(self, write: bytes, read_length: int, *, context: str = "transacting") -> bytes:
        """Write then read in one bus operation."""
        return self._exchange(bytes(write), read_length, context=context)

    def delayed(
        self,
        write: bytes,
        read_length: int,
        delay_s: float,
        *,
        context: str = "transacting",
    ) -> bytes:
        """Send ``write``, wait ``delay_s`` for the device to finish, then read."""
        self._exchange(bytes(write), 0, context=f"requesting {context}")
        self._sleep(delay_s)
        return self._exchange(b"", read_length, context=f"reading {context}")
