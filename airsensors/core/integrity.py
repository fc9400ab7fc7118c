"""Frame integrity checks: the PMSA003I sum and the SGP30 CRC-8."""

from __future__ import annotations

from collections.abc import Iterator

from airsensors.core.codec import word
from airsensors.core.errors import IntegrityError

CRC8_POLYNOMIAL = 0x31
CRC8_INIT = 0xFF
# CRC of b"123456789"; the datasheet example CRC(0xBEEF) is 0x92.
CRC8_CHECK = 0xF7
CRC_GROUP_SIZE = 3


def _make_crc8_table(poly: int) -> tuple[int, ...]:
    table: list[int] = []
    for byte in range(256):
        crc = byte
        for _ in range(8):
            if crc & 0x80:
                crc = ((crc << 1) ^ poly) & 0xFF
            else:
                crc = (crc << 1) & 0xFF
        table.append(crc)
    return tuple(table)


_CRC8_TABLE = _make_crc8_table(CRC8_POLYNOMIAL)


def crc8(data: bytes) -> int:
    """CRC-8 with poly 0x31, init 0xFF, no reflection and no final XOR."""
    crc = CRC8_INIT
    for byte in data:
        crc = _CRC8_TABLE[crc ^ byte]
    return crc


def check_crc8(group: bytes) -> bool:
    """A data group with its trailing CRC byte is valid when the residue is zero."""
    return crc8(group) == 0x00


def sum_checksum_ok(frame: bytes) -> bool:
    """Compare the 16-bit sum of all but the last two bytes with the trailing word."""
    if len(frame) < 2:
        return False
    total = sum(frame[:-2]) & 0xFFFF
    return word(frame, len(frame) - 2) == total


def iter_groups(data: bytes) -> Iterator[bytes]:
    for start in range(0, len(data), CRC_GROUP_SIZE):
        yield bytes(data[start : start + CRC_GROUP_SIZE])


def first_bad_group(data: bytes) -> int | None:
    """Return the 1-based index of the first group failing CRC-8, or None."""
    for index, group in enumerate(iter_groups(data), start=1):
        if len(group) != CRC_GROUP_SIZE or not check_crc8(group):
            return index
    return None


def require_crc8_groups(data: bytes, *, context: str) -> None:
    """Raise IntegrityError unless every 3-byte group of ``data`` passes CRC-8."""
    index = first_bad_group(data)
    if index is None:
        return
    start = (index - 1) * CRC_GROUP_SIZE
    group = bytes(data[start : start + CRC_GROUP_SIZE])
    raise IntegrityError(
        f"{context} word {index} CRC8 failed on: {group.hex(' ')}",
        group=index,
        data=group,
    )
