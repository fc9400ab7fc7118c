"""Linux I2C transport implementation using smbus2 combined messages."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from airsensors.core.errors import TransportError

if TYPE_CHECKING:
    from smbus2 import SMBus

LOGGER = logging.getLogger(__name__)


class SMBusTransport:
    """Talk to devices on ``/dev/i2c-<bus>``.

    The bus is opened lazily on the first transaction and kept open until
    :meth:`close` is called.
    """

    def __init__(self, bus: int = 1) -> None:
        self.bus = bus
        self._smbus: SMBus | None = None

    def _open(self) -> SMBus:
        if self._smbus is not None:
            return self._smbus
        try:
            from smbus2 import SMBus  # type: ignore
        except ImportError as exc:  # pragma: no cover - import failure path
            raise TransportError(
                "I2C transport requires 'smbus2'. Install dependency and retry."
            ) from exc
        try:
            smbus = SMBus(self.bus)
        except OSError as exc:
            raise TransportError(f"Could not open I2C bus {self.bus}: {exc}") from exc
        LOGGER.debug("Opened I2C bus %d", self.bus)
        self._smbus = smbus
        return smbus

    def transact(self, address: int, write: bytes, read_length: int) -> bytes:
        smbus = self._open()
        from smbus2 import i2c_msg  # type: ignore

        messages: list[i2c_msg] = []
        if write:
            messages.append(i2c_msg.write(address, list(write)))
        reply: i2c_msg | None = None
        if read_length:
            reply = i2c_msg.read(address, read_length)
            messages.append(reply)
        if not messages:
            return b""

        try:
            smbus.i2c_rdwr(*messages)
        except OSError as exc:
            raise TransportError(
                f"I2C transfer to 0x{address:02x} on bus {self.bus} failed: {exc}"
            ) from exc
        return bytes(list(reply)) if reply is not None else b""

    def close(self) -> None:
        if self._smbus is None:
            return
        try:
            self._smbus.close()
        except OSError as exc:
            LOGGER.debug("I2C close error: %s", exc)
        self._smbus = None

    def __enter__(self) -> SMBusTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
