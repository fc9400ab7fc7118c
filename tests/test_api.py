from __future__ import annotations

from airsensors import api
from airsensors.api import SGP30, Op, PlaybackTransport


def test_public_names_resolve() -> None:
    for name in api.__all__:
        assert getattr(api, name) is not None


def test_public_gas_sensor_round_trip() -> None:
    transport = PlaybackTransport(
        [
            Op(0x58, bytes.fromhex("3682"), bytes.fromhex("00008101579caca254")),
            Op(0x58, bytes.fromhex("2015"), bytes.fromhex("88a1588dc461")),
        ]
    )
    sensor = SGP30(transport)
    baseline = sensor.read_baseline()
    assert isinstance(baseline, api.Baseline)
    assert baseline.wire_bytes() == bytes.fromhex("8dc46188a158")
    assert transport.done


def test_errors_share_base() -> None:
    for error in (
        api.TransportError,
        api.MalformedFrameError,
        api.ChecksumMismatchError,
        api.IntegrityError,
        api.InvalidCalibrationDataError,
        api.ConfigError,
    ):
        assert issubclass(error, api.AirSensorsError)
