"""Core data models returned by the drivers."""

from __future__ import annotations

from dataclasses import dataclass

from airsensors.core.codec import word
from airsensors.core.errors import InvalidCalibrationDataError
from airsensors.core.integrity import CRC_GROUP_SIZE, first_bad_group

BASELINE_SIZE = 2 * CRC_GROUP_SIZE


@dataclass(frozen=True)
class ParticleReading:
    """Decoded PMSA003I frame.

    Mass concentrations are in μg/m3; ``cf_*`` use the standard-particle
    calibration and ``env_*`` the atmospheric environment one. Counts are
    particles above the given diameter in 0.1 L of air.
    """

    cf_pm1: int
    cf_pm2_5: int
    cf_pm10: int
    env_pm1: int
    env_pm2_5: int
    env_pm10: int
    cnt_0_3: int
    cnt_0_5: int
    cnt_1: int
    cnt_2_5: int
    cnt_5: int
    cnt_10: int
    version: int


@dataclass(frozen=True)
class FeatureSet:
    product_type: int
    product_version: int


@dataclass(frozen=True)
class AirQuality:
    co2_ppm: int
    tvoc_ppb: int


@dataclass(frozen=True)
class Baseline:
    """SGP30 calibration state, stored in read order (CO2 group, TVOC group).

    Both groups must pass CRC-8; anything else raises InvalidCalibrationDataError.
    """

    raw: bytes

    def __post_init__(self) -> None:
        data = bytes(self.raw)
        if len(data) != BASELINE_SIZE:
            raise InvalidCalibrationDataError(
                f"baseline must be {BASELINE_SIZE} bytes, got {len(data)}"
            )
        bad = first_bad_group(data)
        if bad is not None:
            raise InvalidCalibrationDataError(f"baseline word {bad} CRC8 failed on: {data.hex(' ')}")
        object.__setattr__(self, "raw", data)

    @classmethod
    def from_bytes(cls, data: bytes) -> Baseline:
        return cls(raw=bytes(data))

    @property
    def co2(self) -> int:
        return word(self.raw, 0)

    @property
    def tvoc(self) -> int:
        return word(self.raw, CRC_GROUP_SIZE)

    def wire_bytes(self) -> bytes:
        """Groups in the order the set-baseline command expects (TVOC, CO2)."""
        return self.raw[CRC_GROUP_SIZE:] + self.raw[:CRC_GROUP_SIZE]

    @classmethod
    def from_wire_bytes(cls, data: bytes) -> Baseline:
        data = bytes(data)
        return cls.from_bytes(data[CRC_GROUP_SIZE:] + data[:CRC_GROUP_SIZE])
