"""Driver for the Plantower PMSA003I particle concentration sensor.

The sensor streams a 32 byte frame continuously; every read pulls the latest
one without sending a command.
"""

from __future__ import annotations

import logging

from airsensors.core.codec import word
from airsensors.core.errors import ChecksumMismatchError, MalformedFrameError
from airsensors.core.integrity import sum_checksum_ok
from airsensors.core.model import ParticleReading
from airsensors.core.transaction import TransactionClient
from airsensors.transports.base import Transport

LOGGER = logging.getLogger(__name__)

PMSA003I_ADDR = 0x12
FRAME_SIZE = 32
START_MARKER = 0x424D
FRAME_LENGTH = FRAME_SIZE - 4

_LENGTH_OFFSET = 0x02
_VERSION_OFFSET = 0x1C
_ERROR_OFFSET = 0x1D


def decode_frame(frame: bytes) -> ParticleReading:
    """Validate a raw frame and decode it.

    Raises MalformedFrameError or ChecksumMismatchError; both can be caused by
    bus noise and are worth retrying.
    """
    frame = bytes(frame)
    if len(frame) != FRAME_SIZE:
        raise MalformedFrameError(f"Frame must be {FRAME_SIZE} bytes, got {len(frame)}")
    if word(frame, 0) != START_MARKER:
        raise MalformedFrameError(f"Bad start word 0x{word(frame, 0):04x}")
    if not sum_checksum_ok(frame):
        raise ChecksumMismatchError(f"Bad checksum 0x{word(frame, FRAME_SIZE - 2):04x}")
    if word(frame, _LENGTH_OFFSET) != FRAME_LENGTH:
        raise MalformedFrameError(f"Bad frame length {word(frame, _LENGTH_OFFSET)}")
    if frame[_ERROR_OFFSET] != 0x00:
        raise MalformedFrameError(f"Error code {frame[_ERROR_OFFSET]:x}")

    return ParticleReading(
        cf_pm1=word(frame, 0x04),
        cf_pm2_5=word(frame, 0x06),
        cf_pm10=word(frame, 0x08),
        env_pm1=word(frame, 0x0A),
        env_pm2_5=word(frame, 0x0C),
        env_pm10=word(frame, 0x0E),
        cnt_0_3=word(frame, 0x10),
        cnt_0_5=word(frame, 0x12),
        cnt_1=word(frame, 0x14),
        cnt_2_5=word(frame, 0x16),
        cnt_5=word(frame, 0x18),
        cnt_10=word(frame, 0x1A),
        version=frame[_VERSION_OFFSET],
    )


class PMSA003I:
    """Construction reads and validates one frame, so a live sensor is required."""

    def __init__(self, transport: Transport, *, address: int = PMSA003I_ADDR) -> None:
        self.client = TransactionClient(transport, address)
        reading = self.read_sensor()
        LOGGER.info("PMSA003I found at 0x%02x, firmware version %d", address, reading.version)

    def read_sensor(self) -> ParticleReading:
        frame = self.client.immediate(b"", FRAME_SIZE, context="reading the sensor")
        return decode_frame(frame)
