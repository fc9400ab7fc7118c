"""Domain-specific errors for airsensors."""

from __future__ import annotations


class AirSensorsError(Exception):
    """Base error for airsensors."""


class ConfigError(AirSensorsError):
    """Raised when the configuration file cannot be read or validated."""


class TransportError(AirSensorsError):
    """Raised when the underlying bus exchange fails."""


class MalformedFrameError(AirSensorsError):
    """Raised on a bad start marker, a wrong length, or a device-reported error code.

    Usually transient; the caller may retry the read.
    """


class ChecksumMismatchError(AirSensorsError):
    """Raised when a particle frame fails its 16-bit sum check.

    Usually transient; the caller may retry the read.
    """


class IntegrityError(AirSensorsError):
    """Raised when a CRC-8 group of a gas sensor reply fails."""

    def __init__(self, message: str, *, group: int, data: bytes) -> None:
        super().__init__(message)
        self.group = group
        self.data = data


class InvalidCalibrationDataError(AirSensorsError):
    """Raised when stored baseline data has the wrong length or fails CRC-8."""
