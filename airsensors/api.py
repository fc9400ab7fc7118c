"""Stable public API for building tooling on top of airsensors.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from airsensors.core.calibration import BaselineStore
from airsensors.core.codec import word
from airsensors.core.config import Settings, load_settings
from airsensors.core.errors import (
    AirSensorsError,
    ChecksumMismatchError,
    ConfigError,
    IntegrityError,
    InvalidCalibrationDataError,
    MalformedFrameError,
    TransportError,
)
from airsensors.core.integrity import check_crc8, crc8, sum_checksum_ok
from airsensors.core.model import AirQuality, Baseline, FeatureSet, ParticleReading
from airsensors.core.transaction import TransactionClient
from airsensors.drivers.pmsa003i import PMSA003I, decode_frame
from airsensors.drivers.sgp30 import SGP30
from airsensors.transports.base import Transport
from airsensors.transports.playback import Op, PlaybackTransport
from airsensors.transports.smbus import SMBusTransport

__all__ = [
    "AirSensorsError",
    "ChecksumMismatchError",
    "ConfigError",
    "IntegrityError",
    "InvalidCalibrationDataError",
    "MalformedFrameError",
    "TransportError",
    "AirQuality",
    "Baseline",
    "BaselineStore",
    "FeatureSet",
    "ParticleReading",
    "Settings",
    "load_settings",
    "TransactionClient",
    "Transport",
    "SMBusTransport",
    "PlaybackTransport",
    "Op",
    "PMSA003I",
    "SGP30",
    "decode_frame",
    "check_crc8",
    "crc8",
    "sum_checksum_ok",
    "word",
]
